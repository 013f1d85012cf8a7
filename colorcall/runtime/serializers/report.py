# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Report serializer.

Formats a ColorCallAnalysis as a readable summary or as JSON.
"""

from __future__ import annotations

import json

from colorcall.runtime.serializers.base import SerializerFormat
from colorcall.schema import ColorCallAnalysis
from colorcall.measure.colorspace import color_wheel_name


def to_report(
    analysis: ColorCallAnalysis,
    *,
    format: SerializerFormat = SerializerFormat.NATURAL,
    max_matches: int = 3,
) -> str:
    """Serialize a ColorCallAnalysis as a report.

    Args:
        analysis: The analysis to serialize.
        format: NATURAL (readable), JSON or JSON_PRETTY.
        max_matches: Style matches listed in the NATURAL report.

    Returns:
        Report string.

    Example (NATURAL)::

        ## ColorCall Analysis

        **Palette:**
        1. #1E2A3C (58%) -- Blue
        2. #D89A4E (31%) -- Orange
        3. #F2EEE6 (11%) -- Orange

        **Composition:** 92/100 -- Textbook (Classic balanced composition)
        **Harmony:** Complementary (95) -- Opposite colors create dynamic contrast
        **Zones:** Low Key, dynamic range 7, peak Zone II
        **Balance:** Centered, score 96, center of mass (51.2%, 47.9%)

        **Style Matches:**
        1. Roger Deakins (88) -- Blade Runner 2049, 1917, No Country for Old Men
    """
    if format == SerializerFormat.NATURAL:
        return _to_natural(analysis, max_matches)
    indent = 2 if format == SerializerFormat.JSON_PRETTY else None
    return json.dumps(analysis.to_dict(), indent=indent)


def _to_natural(analysis: ColorCallAnalysis, max_matches: int) -> str:
    lines: list[str] = ["## ColorCall Analysis", ""]

    lines.append("**Palette:**")
    if not analysis.swatches:
        lines.append("- (no opaque pixels)")
    for i, swatch in enumerate(analysis.swatches, 1):
        hsl = swatch.hsl
        hue_name = "Neutral" if hsl.s < 10 else color_wheel_name(hsl.h)
        lines.append(f"{i}. {swatch.hex} ({swatch.percentage:.0f}%) -- {hue_name}")
    lines.append("")

    comp = analysis.composition
    if comp.deviations:
        lines.append(
            f"**Composition:** {comp.score}/100 -- {comp.verdict.value} ({comp.description})"
        )
        for d in comp.deviations:
            flag = "ok" if d.within_tolerance else "off"
            lines.append(f"- {d.swatch.hex}: target {d.target:.0f}%, {d.formatted} ({flag})")
    else:
        lines.append(f"**Composition:** {comp.verdict.value}")

    harmony = analysis.harmony
    lines.append(
        f"**Harmony:** {harmony.type.value} ({harmony.score}) -- {harmony.description}"
    )

    zones = analysis.zones
    peak_name = zones.buckets[zones.peak_zone].name
    lines.append(
        f"**Zones:** {zones.character.value}, dynamic range {zones.dynamic_range}, "
        f"peak {peak_name}"
    )

    weight = analysis.weight
    lines.append(
        f"**Balance:** {weight.balance_type.value}, score {weight.balance_score}, "
        f"center of mass ({weight.center_x:.1f}%, {weight.center_y:.1f}%)"
    )

    if analysis.matches and max_matches > 0:
        lines.append("")
        lines.append("**Style Matches:**")
        for i, match in enumerate(analysis.matches[:max_matches], 1):
            lines.append(
                f"{i}. {match.profile.name} ({match.match_score}) -- {match.profile.notable}"
            )

    return "\n".join(lines)
