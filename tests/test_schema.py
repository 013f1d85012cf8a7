# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""Tests for schema types and serialization."""

import dataclasses
import json

import numpy as np
import pytest

from colorcall import analyze
from colorcall.schema import (
    SCHEMA_VERSION,
    ColorCallAnalysis,
    CompositionScore,
    HarmonyResult,
    HarmonyType,
    HSLColor,
    MatchResult,
    Swatch,
    Verdict,
)
from colorcall.measure.profiles import get_profile


def _analysis():
    img = np.zeros((10, 100, 3), dtype=np.uint8)
    img[:, :60] = [255, 0, 0]
    img[:, 60:90] = [0, 255, 0]
    img[:, 90:] = [0, 0, 255]
    return analyze(img, stride=1, seed=1)


class TestSwatch:

    def test_valid(self):
        s = Swatch(rgb=(255, 87, 51), hex="#FF5733", percentage=42.0, pixel_count=10)
        assert s.hsl == HSLColor(h=11, s=100, l=60, hex="#FF5733")

    def test_invalid_channel(self):
        with pytest.raises(ValueError, match="RGB"):
            Swatch(rgb=(256, 0, 0), hex="#FF0000", percentage=1.0, pixel_count=1)

    def test_invalid_percentage(self):
        with pytest.raises(ValueError, match="Percentage"):
            Swatch(rgb=(0, 0, 0), hex="#000000", percentage=-1.0, pixel_count=1)

    def test_dict_roundtrip(self):
        s = Swatch(rgb=(1, 2, 3), hex="#010203", percentage=12.5, pixel_count=4)
        assert Swatch.from_dict(s.to_dict()) == s

    def test_frozen(self):
        s = Swatch(rgb=(1, 2, 3), hex="#010203", percentage=12.5, pixel_count=4)
        with pytest.raises(dataclasses.FrozenInstanceError):
            s.percentage = 50.0


class TestHSLColor:

    def test_invalid_hue(self):
        with pytest.raises(ValueError, match="Hue"):
            HSLColor(h=400, s=10, l=10)

    def test_hex_omitted_when_absent(self):
        assert HSLColor(h=10, s=20, l=30).to_dict() == {"h": 10, "s": 20, "l": 30}


class TestScores:

    def test_composition_score_range(self):
        with pytest.raises(ValueError, match="Score"):
            CompositionScore(score=101, verdict=Verdict.TEXTBOOK, description="")

    def test_match_score_range(self):
        with pytest.raises(ValueError, match="Match score"):
            MatchResult(profile=get_profile("deakins"), match_score=-1)

    def test_harmony_to_dict(self):
        h = HarmonyResult(
            type=HarmonyType.SPLIT_COMPLEMENTARY,
            score=88,
            description="x",
            colors=(HSLColor(0, 100, 50),),
        )
        assert h.to_dict()["type"] == "Split-Complementary"


class TestColorCallAnalysis:

    def test_percentages_must_sum_to_100(self):
        base = _analysis()
        bad = (Swatch(rgb=(0, 0, 0), hex="#000000", percentage=60.0, pixel_count=6),)
        with pytest.raises(ValueError, match="sum to 100"):
            dataclasses.replace(base, swatches=bad)

    def test_to_dict_sections(self):
        d = _analysis().to_dict()
        assert d["version"] == SCHEMA_VERSION
        assert set(d) == {"version", "swatches", "composition", "harmony", "zones", "weight", "matches"}
        assert len(d["zones"]["buckets"]) == 11
        assert d["composition"]["verdict"] == "Textbook"
        assert d["weight"]["center_of_mass"].keys() == {"x", "y"}

    def test_to_json_parses(self):
        data = json.loads(_analysis().to_json())
        assert data["harmony"]["type"] == "Triadic"
        assert [s["hex"] for s in data["swatches"]] == ["#FF0000", "#00FF00", "#0000FF"]

    def test_to_json_compact(self):
        assert "\n" not in _analysis().to_json(indent=None)

    def test_top_match(self):
        a = _analysis()
        assert a.top_match == a.matches[0]
        assert dataclasses.replace(a, matches=()).top_match is None

    def test_dict_roundtrip(self):
        a = _analysis()
        recovered = ColorCallAnalysis.from_dict(a.to_dict())
        assert recovered == a
        assert recovered.matches[0].profile is a.matches[0].profile

    def test_json_roundtrip_with_hash(self):
        a = dataclasses.replace(_analysis(), image_hash="sha256:0123456789abcdef")
        recovered = ColorCallAnalysis.from_json(a.to_json())
        assert recovered == a
        assert recovered.image_hash == "sha256:0123456789abcdef"

    def test_roundtrip_empty_analysis(self):
        a = analyze(np.zeros((8, 8, 4), dtype=np.uint8), seed=0)
        recovered = ColorCallAnalysis.from_dict(json.loads(a.to_json()))
        assert recovered == a
        assert recovered.zones.darkest_significant is None
        assert recovered.composition.deviations == ()

    def test_nested_records_roundtrip(self):
        a = _analysis()
        assert CompositionScore.from_dict(a.composition.to_dict()) == a.composition
        assert HarmonyResult.from_dict(a.harmony.to_dict()) == a.harmony
        assert MatchResult.from_dict(a.matches[0].to_dict()) == a.matches[0]

    def test_unknown_profile_id(self):
        data = _analysis().matches[0].to_dict()
        data["id"] = "nobody"
        with pytest.raises(KeyError, match="nobody"):
            MatchResult.from_dict(data)

    def test_report_shortcuts(self):
        a = _analysis()
        assert a.to_report().startswith("## ColorCall Analysis")
        assert a.to_xml().startswith("<composition_analysis")
