# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Composition scoring against a 60/30/10-style target distribution.

The penalty is linear: every percentage point of total absolute deviation
costs 0.77 score points, so an image about 130 points off target scores 0.
"""

from __future__ import annotations

from typing import Sequence

from colorcall.schema import CompositionScore, Swatch, SwatchDeviation, Verdict
from colorcall.measure.colorspace import round_half_up


RULE_60_30_10: tuple[float, float, float] = (60.0, 30.0, 10.0)
RULE_60_20_10: tuple[float, float, float] = (60.0, 20.0, 10.0)

PENALTY_PER_POINT = 0.77
TOLERANCE = 10.0

# (minimum score, verdict), checked top down
_VERDICT_BANDS = (
    (85, Verdict.TEXTBOOK),
    (70, Verdict.HARMONIOUS),
    (50, Verdict.EXPRESSIVE),
    (0, Verdict.BOLD),
)

VERDICT_DESCRIPTIONS = {
    Verdict.TEXTBOOK: "Classic balanced composition",
    Verdict.HARMONIOUS: "Well-balanced with intentional variation",
    Verdict.EXPRESSIVE: "Creative departure from convention",
    Verdict.BOLD: "Deliberately unconventional palette",
    Verdict.INSUFFICIENT: "At least three colors are needed to score a composition",
}


def score_composition(
    swatches: Sequence[Swatch],
    target: Sequence[float] = RULE_60_30_10,
) -> CompositionScore:
    """
    Score the three leading swatches against a target distribution.

    Swatches are taken in the order given, which for quantizer output is
    most prevalent first.

    Args:
        swatches: Ranked swatches
        target: Three target percentages (e.g. 60/30/10)

    Returns:
        CompositionScore. With fewer than three swatches the score is 0,
        the verdict is INSUFFICIENT and there are no deviations.
    """
    if len(target) != 3:
        raise ValueError(f"Target distribution needs 3 values, got {len(target)}")

    if len(swatches) < 3:
        return CompositionScore(
            score=0,
            verdict=Verdict.INSUFFICIENT,
            description=VERDICT_DESCRIPTIONS[Verdict.INSUFFICIENT],
        )

    deviations = []
    for swatch, goal in zip(swatches[:3], target):
        deviation = swatch.percentage - goal
        deviations.append(SwatchDeviation(
            swatch=swatch,
            target=float(goal),
            deviation=deviation,
            within_tolerance=abs(deviation) <= TOLERANCE,
        ))

    total_deviation = sum(abs(d.deviation) for d in deviations)
    score = max(0, min(100, round_half_up(100 - total_deviation * PENALTY_PER_POINT)))
    verdict = verdict_for(score)

    return CompositionScore(
        score=score,
        verdict=verdict,
        description=VERDICT_DESCRIPTIONS[verdict],
        deviations=tuple(deviations),
        total_deviation=total_deviation,
    )


def verdict_for(score: int) -> Verdict:
    """Verdict band for a 0-100 score."""
    for minimum, verdict in _VERDICT_BANDS:
        if score >= minimum:
            return verdict
    return Verdict.BOLD
