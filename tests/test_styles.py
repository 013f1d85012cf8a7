# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""Tests for reference style matching."""

import numpy as np
import pytest

from colorcall.schema import (
    HarmonyResult,
    HarmonyType,
    HSLColor,
    StyleProfile,
    Swatch,
    TonalCharacter,
)
from colorcall.measure.profiles import REFERENCE_PROFILES, get_profile
from colorcall.measure.styles import match_styles, score_profile, top_matches
from colorcall.measure.zones import map_zones


def _harmony(kind):
    return HarmonyResult(type=kind, score=80, description="")


def _zones(level):
    return map_zones(np.full((10, 3), level, dtype=np.uint8))


class TestProfiles:

    def test_table(self):
        ids = [p.id for p in REFERENCE_PROFILES]
        assert ids == [
            "deakins", "lubezki", "richardson", "kaminski",
            "khondji", "storaro", "sandgren", "fraser",
        ]

    def test_get_profile(self):
        assert get_profile("storaro").name == "Vittorio Storaro"

    def test_unknown_profile(self):
        with pytest.raises(KeyError, match="nolan"):
            get_profile("nolan")

    def test_profile_validation(self):
        with pytest.raises(ValueError, match="Saturation range"):
            StyleProfile(
                id="x", name="X", notable="",
                saturation_range=(60, 20),
                harmony_types=(), zone_characters=(), hue_ranges=((0, 10),),
            )


class TestScoreProfile:

    def test_perfect_match(self):
        zones = _zones(0)
        assert zones.character is TonalCharacter.LOW_KEY
        score = score_profile(
            get_profile("deakins"),
            [HSLColor(45, 30, 50)],
            _harmony(HarmonyType.ANALOGOUS),
            zones,
        )
        assert score == 100

    def test_partial_credit(self):
        zones = _zones(255)
        assert zones.character is TonalCharacter.HIGH_KEY
        # saturation 35 points outside -> 0, harmony 10, zones 10, hue 8
        score = score_profile(
            get_profile("deakins"),
            [HSLColor(300, 80, 50)],
            _harmony(HarmonyType.TRIADIC),
            zones,
        )
        assert score == 28

    def test_colors_only_scales_to_full_range(self):
        score = score_profile(get_profile("richardson"), [HSLColor(10, 60, 50)])
        assert score == 100

    def test_saturation_distance_penalty(self):
        # 5 points above the range -> 20 + 25 over two factors
        score = score_profile(get_profile("deakins"), [HSLColor(45, 50, 50)])
        assert score == 90

    def test_average_saturation_of_top_three(self):
        colors = [HSLColor(45, 10, 50), HSLColor(45, 20, 50), HSLColor(45, 30, 50), HSLColor(45, 99, 50)]
        assert score_profile(get_profile("deakins"), colors) == 100

    def test_no_inputs(self):
        assert score_profile(get_profile("deakins"), []) == 0

    def test_wrapping_hue_range(self):
        profile = StyleProfile(
            id="reds", name="Reds", notable="",
            saturation_range=(0, 100),
            harmony_types=(), zone_characters=(),
            hue_ranges=((330, 30),),
        )
        assert score_profile(profile, [HSLColor(350, 50, 50)]) == 100
        assert score_profile(profile, [HSLColor(180, 50, 50)]) < 100


class TestMatchStyles:

    def test_one_result_per_profile_best_first(self):
        swatches = (Swatch(rgb=(200, 60, 40), hex="#C83C28", percentage=100.0, pixel_count=5),)
        matches = match_styles(swatches, _harmony(HarmonyType.COMPLEMENTARY), _zones(0))
        assert len(matches) == len(REFERENCE_PROFILES)
        scores = [m.match_score for m in matches]
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= s <= 100 for s in scores)

    def test_ties_keep_table_order(self):
        matches = match_styles(())
        assert all(m.match_score == 0 for m in matches)
        assert [m.profile.id for m in matches] == [p.id for p in REFERENCE_PROFILES]

    def test_harmony_only(self):
        matches = match_styles((), _harmony(HarmonyType.ACHROMATIC))
        winners = {m.profile.id for m in matches if m.match_score == 100}
        assert winners == {"lubezki", "kaminski", "fraser"}

    def test_custom_profiles(self):
        profile = get_profile("storaro")
        matches = match_styles((), _harmony(HarmonyType.TRIADIC), profiles=(profile,))
        assert len(matches) == 1
        assert matches[0].match_score == 100

    def test_top_matches(self):
        top = top_matches((), _harmony(HarmonyType.ACHROMATIC), count=2)
        assert [m.profile.id for m in top] == ["lubezki", "kaminski"]
