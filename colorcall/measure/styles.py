# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Signature style matching.

Each reference profile is scored on up to four factors worth 25 points
each (saturation, harmony, tonal character, dominant hue). Only factors
whose input is available are counted; the average is scaled x4 so a
perfect match is 100 regardless of how many factors were available.
"""

from __future__ import annotations

from typing import Optional, Sequence

from colorcall.schema import (
    HarmonyResult,
    HSLColor,
    MatchResult,
    StyleProfile,
    Swatch,
    ZoneReport,
)
from colorcall.measure.colorspace import hue_in_range, round_half_up
from colorcall.measure.profiles import REFERENCE_PROFILES


FACTOR_POINTS = 25.0
PARTIAL_PREFERENCE_POINTS = 10.0
PARTIAL_HUE_POINTS = 8.0


def score_profile(
    profile: StyleProfile,
    colors: Sequence[HSLColor],
    harmony: Optional[HarmonyResult] = None,
    zones: Optional[ZoneReport] = None,
) -> int:
    """
    Match score (0-100) of one profile.

    Args:
        profile: Reference profile
        colors: HSL of the leading colors, most prevalent first (may be empty)
        harmony: Harmony result, if available
        zones: Zone report, if available
    """
    points = 0.0
    factors = 0

    if colors:
        top = colors[:3]
        avg_saturation = sum(c.s for c in top) / len(top)
        low, high = profile.saturation_range
        if low <= avg_saturation <= high:
            points += FACTOR_POINTS
        else:
            distance = low - avg_saturation if avg_saturation < low else avg_saturation - high
            points += max(0.0, FACTOR_POINTS - distance)
        factors += 1

    if harmony is not None:
        if harmony.type in profile.harmony_types:
            points += FACTOR_POINTS
        else:
            points += PARTIAL_PREFERENCE_POINTS
        factors += 1

    if zones is not None:
        if zones.character in profile.zone_characters:
            points += FACTOR_POINTS
        else:
            points += PARTIAL_PREFERENCE_POINTS
        factors += 1

    if colors:
        hue = colors[0].h
        if any(hue_in_range(hue, low, high) for low, high in profile.hue_ranges):
            points += FACTOR_POINTS
        else:
            points += PARTIAL_HUE_POINTS
        factors += 1

    if factors == 0:
        return 0
    return max(0, min(100, round_half_up(points / factors * 4)))


def match_styles(
    swatches: Sequence[Swatch],
    harmony: Optional[HarmonyResult] = None,
    zones: Optional[ZoneReport] = None,
    *,
    profiles: Sequence[StyleProfile] = REFERENCE_PROFILES,
) -> tuple[MatchResult, ...]:
    """
    Rank reference profiles by how well an image matches them.

    Args:
        swatches: Ranked swatches (may be empty)
        harmony: Harmony result, if computed
        zones: Zone report, if computed
        profiles: Profiles to rank (defaults to the built-in table)

    Returns:
        One MatchResult per profile, best first. Equal scores keep the
        profile table order.
    """
    colors = [s.hsl for s in swatches[:3]]
    results = [
        MatchResult(profile=p, match_score=score_profile(p, colors, harmony, zones))
        for p in profiles
    ]
    # sorted() is stable, so ties stay in table order
    return tuple(sorted(results, key=lambda m: m.match_score, reverse=True))


def top_matches(
    swatches: Sequence[Swatch],
    harmony: Optional[HarmonyResult] = None,
    zones: Optional[ZoneReport] = None,
    count: int = 3,
) -> tuple[MatchResult, ...]:
    """The ``count`` best matches against the built-in profiles."""
    return match_styles(swatches, harmony, zones)[:count]
