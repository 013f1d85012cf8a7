# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Color conversions and hue geometry.

RGB channels are 0-255. HSL is reported as (hue 0-360, saturation 0-100,
lightness 0-100). Scalar helpers round halves up, the way the analysis
tables expect; array helpers stay in float for per-pixel work.
"""

from __future__ import annotations

import math
import re
from typing import Sequence

import numpy as np
from numpy.typing import NDArray


# ITU-R BT.709 luma coefficients
LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf (not banker's rounding)."""
    return int(math.floor(value + 0.5))


# =============================================================================
# Hex
# =============================================================================


def rgb_to_hex(rgb: Sequence[float]) -> str:
    """
    Convert an RGB triple to an uppercase hex string.

    Float channels are rounded first, so centroids can be passed directly.

    Returns:
        Hex string like "#FF5733"
    """
    r, g, b = (min(255, max(0, round_half_up(float(c)))) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    """Convert "#RRGGBB" (leading # optional) to an (R, G, B) tuple."""
    m = _HEX_RE.match(hex_str.strip())
    if not m:
        raise ValueError(f"Invalid hex color: {hex_str!r}")
    return (int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))


# =============================================================================
# RGB -> HSL
# =============================================================================


def rgb_to_hsl(rgb: Sequence[float]) -> tuple[int, int, int]:
    """
    Convert an RGB triple to rounded HSL.

    Grays (max == min) get hue 0 and saturation 0.

    Returns:
        (h, s, l) with h in 0-360, s and l in 0-100
    """
    r, g, b = (float(c) / 255.0 for c in rgb)
    mx = max(r, g, b)
    mn = min(r, g, b)
    l = (mx + mn) / 2.0

    if mx == mn:
        h = s = 0.0
    else:
        d = mx - mn
        s = d / (2.0 - mx - mn) if l > 0.5 else d / (mx + mn)
        if mx == r:
            h = ((g - b) / d + (6.0 if g < b else 0.0)) / 6.0
        elif mx == g:
            h = ((b - r) / d + 2.0) / 6.0
        else:
            h = ((r - g) / d + 4.0) / 6.0

    return (round_half_up(h * 360), round_half_up(s * 100), round_half_up(l * 100))


def rgb_to_hsl_array(rgb: NDArray) -> NDArray[np.float64]:
    """
    Vectorized RGB -> HSL for pixel arrays.

    Args:
        rgb: Array of shape (N, 3) with 0-255 values

    Returns:
        Float array of shape (N, 3): hue 0-360, saturation 0-100,
        lightness 0-100 (unrounded)
    """
    rgb = np.asarray(rgb, dtype=np.float64).reshape(-1, 3) / 255.0
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    mx = rgb.max(axis=1)
    mn = rgb.min(axis=1)
    d = mx - mn
    l = (mx + mn) / 2.0

    chromatic = d > 0
    # Denominator is zero only for pure black/white, which are achromatic
    denom = np.where(l > 0.5, 2.0 - mx - mn, mx + mn)
    safe_denom = np.where(chromatic, denom, 1.0)
    s = np.where(chromatic, d / safe_denom, 0.0)

    safe_d = np.where(chromatic, d, 1.0)
    h_r = ((g - b) / safe_d) % 6.0
    h_g = (b - r) / safe_d + 2.0
    h_b = (r - g) / safe_d + 4.0
    h = np.where(mx == r, h_r, np.where(mx == g, h_g, h_b))
    h = np.where(chromatic, h * 60.0, 0.0)

    return np.column_stack([h, s * 100.0, l * 100.0])


# =============================================================================
# Luminance and distance
# =============================================================================


def relative_luminance(rgb: NDArray) -> NDArray[np.float64]:
    """
    BT.709 relative luminance in [0, 1] for an (N, 3) array of 0-255 values.

    Applied to the encoded values directly (no linearization).
    """
    rgb = np.asarray(rgb, dtype=np.float64).reshape(-1, 3)
    return (rgb @ LUMA_WEIGHTS) / 255.0


def color_distance(rgb1: Sequence[float], rgb2: Sequence[float]) -> float:
    """Euclidean distance between two RGB triples."""
    return math.sqrt(
        (rgb1[0] - rgb2[0]) ** 2
        + (rgb1[1] - rgb2[1]) ** 2
        + (rgb1[2] - rgb2[2]) ** 2
    )


# =============================================================================
# Hue geometry
# =============================================================================


def hue_difference(h1: float, h2: float) -> float:
    """Shorter arc between two hues, always in [0, 180]."""
    diff = abs(h1 - h2) % 360
    return 360 - diff if diff > 180 else diff


def hue_in_range(hue: float, low: float, high: float) -> bool:
    """
    Inclusive hue range test.

    A range with low > high wraps around 0/360 (e.g. (330, 30) for reds).
    """
    if low <= high:
        return low <= hue <= high
    return hue >= low or hue <= high


# 30-degree bands, offset so each name is centered on its hue
_WHEEL_NAMES = (
    (0, 15, "Red"),
    (15, 45, "Orange"),
    (45, 75, "Yellow"),
    (75, 105, "Yellow-Green"),
    (105, 135, "Green"),
    (135, 165, "Cyan-Green"),
    (165, 195, "Cyan"),
    (195, 225, "Blue-Cyan"),
    (225, 255, "Blue"),
    (255, 285, "Purple"),
    (285, 315, "Magenta"),
    (315, 345, "Pink"),
    (345, 360, "Red"),
)


def color_wheel_name(hue: float) -> str:
    """Name of the color-wheel band a hue falls in."""
    for low, high, name in _WHEEL_NAMES:
        if low <= hue < high:
            return name
    return "Red"
