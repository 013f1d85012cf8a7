# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Color harmony classification.

The top (up to three) swatches are converted to HSL and their hue
relationships are tested against the archetypes in a fixed priority
order. The first archetype that matches wins; Complex is the catch-all.
"""

from __future__ import annotations

from itertools import combinations
from typing import Sequence

from colorcall.schema import HarmonyResult, HarmonyType, HSLColor, Swatch
from colorcall.measure.colorspace import hue_difference


# Number of leading swatches evaluated
MAX_EVALUATED = 3

# Below this average saturation the palette has no meaningful hue
ACHROMATIC_SATURATION = 15

# (score, description) per archetype; presentation metadata only
HARMONY_INFO: dict[HarmonyType, tuple[int, str]] = {
    HarmonyType.COMPLEMENTARY: (95, "Opposite colors create dynamic contrast"),
    HarmonyType.TRIADIC: (92, "Three colors equally spaced on the wheel"),
    HarmonyType.MONOCHROMATIC: (90, "Variations of a single hue"),
    HarmonyType.SPLIT_COMPLEMENTARY: (88, "Base color with two adjacent to its complement"),
    HarmonyType.ACHROMATIC: (85, "Neutral palette with minimal color"),
    HarmonyType.ANALOGOUS: (85, "Adjacent colors create smooth harmony"),
    HarmonyType.TETRADIC: (82, "Four colors in rectangular arrangement"),
    HarmonyType.COMPLEX: (75, "Unique color relationship"),
}

# Trivial case (fewer than two colors); scored apart from the archetype table
_SINGLE_COLOR_SCORE = 100
_SINGLE_COLOR_DESCRIPTION = "Single color dominates"


def _near(value: float, center: float, tolerance: float) -> bool:
    return abs(value - center) <= tolerance


def _result(kind: HarmonyType, colors: tuple[HSLColor, ...]) -> HarmonyResult:
    score, description = HARMONY_INFO[kind]
    return HarmonyResult(type=kind, score=score, description=description, colors=colors)


def classify_harmony(swatches: Sequence[Swatch]) -> HarmonyResult:
    """
    Classify the hue relationship of the leading swatches.

    Rules, first match wins:
        1. Fewer than 2 colors -> Monochromatic, score 100
        2. Average saturation < 15 -> Achromatic
        3. Hue spread < 20 or > 340 -> Monochromatic
        4. A secondary hue 150-180 degrees from the primary -> Complementary
        5. Three colors, every pair 90-150 degrees apart -> Triadic
        6. A secondary hue within 20 of 150 (or 210) from primary -> Split-Complementary
        7. Every secondary hue within 60 of the primary -> Analogous
        8. Three colors, any pair within 20 of 90 apart -> Tetradic
        9. Otherwise -> Complex

    Hue distances are the shorter arc, so always in [0, 180].

    Args:
        swatches: Ranked swatches, most prevalent first

    Returns:
        HarmonyResult with the evaluated HSL colors
    """
    colors = tuple(s.hsl for s in swatches[:MAX_EVALUATED])

    if len(colors) < 2:
        return HarmonyResult(
            type=HarmonyType.MONOCHROMATIC,
            score=_SINGLE_COLOR_SCORE,
            description=_SINGLE_COLOR_DESCRIPTION,
            colors=colors,
        )

    hues = [c.h for c in colors]
    avg_saturation = sum(c.s for c in colors) / len(colors)
    if avg_saturation < ACHROMATIC_SATURATION:
        return _result(HarmonyType.ACHROMATIC, colors)

    spread = max(hues) - min(hues)
    if spread < 20 or spread > 340:
        return _result(HarmonyType.MONOCHROMATIC, colors)

    primary = hues[0]
    secondary = [hue_difference(primary, h) for h in hues[1:]]

    if any(_near(d, 180, 30) for d in secondary):
        return _result(HarmonyType.COMPLEMENTARY, colors)

    pairwise = [hue_difference(a, b) for a, b in combinations(hues, 2)]

    if len(hues) >= 3 and all(_near(d, 120, 30) for d in pairwise):
        return _result(HarmonyType.TRIADIC, colors)

    # 210 is kept for symmetry; shorter-arc distances never exceed 180
    if any(_near(d, 150, 20) or _near(d, 210, 20) for d in secondary):
        return _result(HarmonyType.SPLIT_COMPLEMENTARY, colors)

    if all(d <= 60 for d in secondary):
        return _result(HarmonyType.ANALOGOUS, colors)

    if len(hues) >= 3 and any(_near(d, 90, 20) for d in pairwise):
        return _result(HarmonyType.TETRADIC, colors)

    return _result(HarmonyType.COMPLEX, colors)
