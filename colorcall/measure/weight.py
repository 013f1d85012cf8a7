# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Visual weight distribution.

Darker and more saturated pixels weigh more:

    weight = 0.7 * (1 - lightness/100) + 0.3 * (saturation/100)

From the per-pixel weights we derive the center of visual mass, the
quadrant split, a coarse heatmap and a balance classification.
Positions are taken at pixel centers, so a uniform field balances
exactly at (50, 50).
"""

from __future__ import annotations

import logging
import math

import numpy as np

from colorcall.schema import BalanceType, QuadrantWeights, WeightField
from colorcall.measure.colorspace import rgb_to_hsl_array, round_half_up
from colorcall.measure.sampler import SampledPixelSet

logger = logging.getLogger(__name__)


LIGHTNESS_FACTOR = 0.7
SATURATION_FACTOR = 0.3
DEFAULT_GRID_SIZE = 3

BALANCE_DESCRIPTIONS = {
    BalanceType.CENTERED: "Weight evenly distributed from center",
    BalanceType.LEFT_HEAVY: "Horizontal asymmetry creates dynamic tension",
    BalanceType.RIGHT_HEAVY: "Horizontal asymmetry creates dynamic tension",
    BalanceType.TOP_HEAVY: "Vertical weight distribution",
    BalanceType.BOTTOM_HEAVY: "Vertical weight distribution",
    BalanceType.OFF_CENTER: "Strong focal point away from center",
    BalanceType.BALANCED: "Asymmetrical balance with visual equilibrium",
}


def pixel_weights(rgb: np.ndarray) -> np.ndarray:
    """Visual weight in [0, 1] for each pixel of an (N, 3) RGB array."""
    hsl = rgb_to_hsl_array(rgb)
    return (
        LIGHTNESS_FACTOR * (1.0 - hsl[:, 2] / 100.0)
        + SATURATION_FACTOR * (hsl[:, 1] / 100.0)
    )


def analyze_weight(
    pixels: SampledPixelSet,
    grid_size: int = DEFAULT_GRID_SIZE,
) -> WeightField:
    """
    Compute the visual weight field of a pixel sample.

    Args:
        pixels: SampledPixelSet sampled with ``keep_coordinates=True``
        grid_size: Heatmap rows/cols (3 gives a 3x3 grid)

    Returns:
        WeightField. With no weight at all (empty or pure white sample) the
        center of mass is (50, 50) and quadrants split evenly.
    """
    if pixels.positions is None:
        raise ValueError("Weight analysis needs pixel coordinates (keep_coordinates=True)")
    if grid_size < 1:
        raise ValueError(f"grid_size must be >= 1, got {grid_size}")

    width, height = pixels.width, pixels.height
    weights = pixel_weights(pixels.rgb)
    total = float(weights.sum())

    grid = np.zeros((grid_size, grid_size), dtype=np.float64)

    if total <= 0 or width == 0 or height == 0:
        logger.debug("No visual weight in sample; using the centered default")
        return _build_field(
            center_x=50.0,
            center_y=50.0,
            quadrants=QuadrantWeights(25.0, 25.0, 25.0, 25.0),
            grid=grid,
            horizontal=50.0,
            vertical=50.0,
        )

    xs = pixels.positions[:, 0].astype(np.float64)
    ys = pixels.positions[:, 1].astype(np.float64)

    center_x = float(np.dot(weights, xs + 0.5)) / total / width * 100.0
    center_y = float(np.dot(weights, ys + 0.5)) / total / height * 100.0

    left = xs < width / 2
    top = ys < height / 2
    quadrants = QuadrantWeights(
        top_left=float(weights[top & left].sum()) / total * 100.0,
        top_right=float(weights[top & ~left].sum()) / total * 100.0,
        bottom_left=float(weights[~top & left].sum()) / total * 100.0,
        bottom_right=float(weights[~top & ~left].sum()) / total * 100.0,
    )
    horizontal = quadrants.top_right + quadrants.bottom_right
    vertical = quadrants.bottom_left + quadrants.bottom_right

    gx = np.minimum((xs / width * grid_size).astype(np.int64), grid_size - 1)
    gy = np.minimum((ys / height * grid_size).astype(np.int64), grid_size - 1)
    np.add.at(grid, (gy, gx), weights)

    return _build_field(
        center_x=_clamp_pct(center_x),
        center_y=_clamp_pct(center_y),
        quadrants=quadrants,
        grid=grid,
        horizontal=horizontal,
        vertical=vertical,
    )


def _clamp_pct(value: float) -> float:
    return min(100.0, max(0.0, value))


def _build_field(
    center_x: float,
    center_y: float,
    quadrants: QuadrantWeights,
    grid: np.ndarray,
    horizontal: float,
    vertical: float,
) -> WeightField:
    peak = float(grid.max()) if grid.size else 0.0
    heatmap = grid / peak if peak > 0 else np.zeros_like(grid)

    center_dev = math.hypot(center_x - 50.0, center_y - 50.0)
    balance_type = classify_balance(horizontal, vertical, center_dev)
    balance_score = max(0, min(100, round_half_up(100 - center_dev * 2)))

    return WeightField(
        center_x=center_x,
        center_y=center_y,
        quadrants=quadrants,
        heatmap=tuple(tuple(float(v) for v in row) for row in heatmap),
        horizontal_balance=horizontal,
        vertical_balance=vertical,
        balance_score=balance_score,
        balance_type=balance_type,
        balance_description=BALANCE_DESCRIPTIONS[balance_type],
    )


def classify_balance(horizontal: float, vertical: float, center_dev: float) -> BalanceType:
    """
    Classify balance from the right-half share, the bottom-half share and
    the distance of the center of mass from the geometric center.
    """
    h_dev = abs(horizontal - 50.0)
    v_dev = abs(vertical - 50.0)

    if center_dev < 10 and h_dev < 10 and v_dev < 10:
        return BalanceType.CENTERED
    if h_dev > 25 and v_dev < 15:
        return BalanceType.RIGHT_HEAVY if horizontal > 50 else BalanceType.LEFT_HEAVY
    if v_dev > 25 and h_dev < 15:
        return BalanceType.BOTTOM_HEAVY if vertical > 50 else BalanceType.TOP_HEAVY
    if center_dev > 25:
        return BalanceType.OFF_CENTER
    return BalanceType.BALANCED
