# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Zone System tonal analysis.

Each pixel's BT.709 luminance is mapped to one of 11 zones
(0 = pure black, V = middle gray, X = pure white). The histogram drives
the shadow/midtone/highlight split, the dynamic range and the tonal
character label.
"""

from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import NDArray

from colorcall.schema import TonalCharacter, ToneClass, ZoneBucket, ZoneReport
from colorcall.measure.colorspace import relative_luminance
from colorcall.measure.sampler import SampledPixelSet


N_ZONES = 11

# A zone counts toward dynamic range only at or above this share
SIGNIFICANT_PERCENTAGE = 2.0

# zone -> (name, description, tone)
ZONE_INFO: dict[int, tuple[str, str, ToneClass]] = {
    0: ("Zone 0", "Pure black, no texture", ToneClass.SHADOW),
    1: ("Zone I", "Near black, slight tonality", ToneClass.SHADOW),
    2: ("Zone II", "Deep shadows, first hint of texture", ToneClass.SHADOW),
    3: ("Zone III", "Dark shadows with texture", ToneClass.SHADOW),
    4: ("Zone IV", "Open shadow, dark foliage", ToneClass.MIDTONE),
    5: ("Zone V", "Middle gray (18% gray card)", ToneClass.MIDTONE),
    6: ("Zone VI", "Light skin, bright foliage", ToneClass.MIDTONE),
    7: ("Zone VII", "Light gray, textured whites", ToneClass.HIGHLIGHT),
    8: ("Zone VIII", "Bright white with texture", ToneClass.HIGHLIGHT),
    9: ("Zone IX", "Near white, slight tonality", ToneClass.HIGHLIGHT),
    10: ("Zone X", "Pure white, no texture", ToneClass.HIGHLIGHT),
}

CHARACTER_DESCRIPTIONS = {
    TonalCharacter.LOW_KEY: "Shadow-dominant, dramatic mood",
    TonalCharacter.HIGH_KEY: "Highlight-dominant, bright and airy",
    TonalCharacter.MIDDLE_KEY: "Balanced midtones, natural feel",
    TonalCharacter.FULL_RANGE: "Wide tonal range, high contrast",
    TonalCharacter.COMPRESSED: "Narrow tonal range, flat look",
    TonalCharacter.BALANCED: "Even distribution across zones",
}


def luminance_to_zone(luminance: NDArray[np.float64]) -> NDArray[np.int64]:
    """Map luminance in [0, 1] to zone indices 0-10 (halves round up)."""
    zones = np.floor(np.asarray(luminance) * 10 + 0.5).astype(np.int64)
    return np.clip(zones, 0, N_ZONES - 1)


def map_zones(pixels: Union[SampledPixelSet, NDArray]) -> ZoneReport:
    """
    Build the Zone System report for a pixel sample.

    Args:
        pixels: SampledPixelSet or an (N, 3) array of RGB values

    Returns:
        ZoneReport. An empty sample yields all-zero buckets, a dynamic
        range of 0 and no significant zones.
    """
    rgb = pixels.rgb if isinstance(pixels, SampledPixelSet) else np.asarray(pixels)
    rgb = rgb.reshape(-1, 3)

    counts = np.bincount(luminance_to_zone(relative_luminance(rgb)), minlength=N_ZONES)
    total = int(counts.sum())

    buckets = []
    for zone in range(N_ZONES):
        name, description, tone = ZONE_INFO[zone]
        count = int(counts[zone])
        buckets.append(ZoneBucket(
            zone=zone,
            name=name,
            description=description,
            tone=tone,
            count=count,
            percentage=count / total * 100.0 if total > 0 else 0.0,
        ))

    shadow = _tone_total(buckets, ToneClass.SHADOW)
    midtone = _tone_total(buckets, ToneClass.MIDTONE)
    highlight = _tone_total(buckets, ToneClass.HIGHLIGHT)

    # max() keeps the first (darkest) zone on ties
    peak = max(buckets, key=lambda b: b.percentage).zone

    significant = [b.zone for b in buckets if b.percentage >= SIGNIFICANT_PERCENTAGE]
    if significant:
        darkest, lightest = min(significant), max(significant)
        dynamic_range = lightest - darkest
    else:
        darkest = lightest = None
        dynamic_range = 0

    character = _tonal_character(shadow, midtone, highlight, dynamic_range)

    return ZoneReport(
        buckets=tuple(buckets),
        peak_zone=peak,
        dynamic_range=dynamic_range,
        shadow_percentage=shadow,
        midtone_percentage=midtone,
        highlight_percentage=highlight,
        character=character,
        character_description=CHARACTER_DESCRIPTIONS[character],
        darkest_significant=darkest,
        lightest_significant=lightest,
    )


def _tone_total(buckets: list[ZoneBucket], tone: ToneClass) -> float:
    return sum(b.percentage for b in buckets if b.tone is tone)


def _tonal_character(
    shadow: float,
    midtone: float,
    highlight: float,
    dynamic_range: int,
) -> TonalCharacter:
    if shadow > 50:
        return TonalCharacter.LOW_KEY
    if highlight > 50:
        return TonalCharacter.HIGH_KEY
    if midtone > 50:
        return TonalCharacter.MIDDLE_KEY
    if dynamic_range >= 8:
        return TonalCharacter.FULL_RANGE
    if dynamic_range <= 4:
        return TonalCharacter.COMPRESSED
    return TonalCharacter.BALANCED
