# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Main analysis API.

This is the primary entry point for ColorCall's pixel pipeline.
"""

from __future__ import annotations

import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

import numpy as np

from colorcall.schema import ColorCallAnalysis
from colorcall.measure.sampler import (
    ALPHA_THRESHOLD,
    DEFAULT_MAX_DIMENSION,
    DEFAULT_STRIDE,
    WEIGHT_MAX_DIMENSION,
    ImageInput,
    load_image,
    sample,
)
from colorcall.measure.quantize import QuantizerConfig, quantize
from colorcall.measure.composition import RULE_60_30_10, score_composition
from colorcall.measure.harmony import classify_harmony
from colorcall.measure.zones import map_zones
from colorcall.measure.weight import DEFAULT_GRID_SIZE, analyze_weight
from colorcall.measure.styles import match_styles
from colorcall.measure.profiles import REFERENCE_PROFILES

logger = logging.getLogger(__name__)


def analyze(
    image: ImageInput,
    *,
    max_dimension: int = DEFAULT_MAX_DIMENSION,  # Color/zone working size
    weight_dimension: int = WEIGHT_MAX_DIMENSION,  # Smaller: weight keeps coordinates
    stride: int = DEFAULT_STRIDE,
    alpha_threshold: int = ALPHA_THRESHOLD,
    target: Sequence[float] = RULE_60_30_10,
    quantizer: Optional[QuantizerConfig] = None,
    grid_size: int = DEFAULT_GRID_SIZE,
    seed: Optional[int] = None,  # None = system entropy for k-means++ seeding
    include_hash: bool = False,
    parallel: bool = True,  # Run quantize/zones/weight on worker threads
) -> ColorCallAnalysis:
    """
    Run the full composition analysis on one image.

    The image is decoded once. Color quantization, the Zone System and
    the weight field read independent samples of it and may run
    concurrently; composition, harmony and style matching run after they
    are joined.

    Args:
        image: File path, encoded bytes, Pillow image, or uint8 array of
            shape (H, W, 3) / (H, W, 4)
        max_dimension: Longer-side cap for color and zone sampling
        weight_dimension: Longer-side cap for weight sampling
        stride: Raster stride for color and zone sampling (weight uses
            every pixel)
        alpha_threshold: Pixels with alpha at or below this are ignored
        target: Three-value rule distribution (default 60/30/10)
        quantizer: Quantizer settings (uses defaults if None)
        grid_size: Weight heatmap rows/cols
        seed: Seed for the quantizer's random source
        include_hash: Include a SHA256 hash of the decoded pixels
        parallel: Run the three independent analyses on a thread pool

    Returns:
        ColorCallAnalysis with every stage's result

    Raises:
        ImageDecodeError: The image could not be decoded
    """
    rgba = load_image(image)

    color_pixels = sample(
        rgba, max_dimension, stride=stride, alpha_threshold=alpha_threshold,
    )
    weight_pixels = sample(
        rgba, weight_dimension, stride=1, alpha_threshold=alpha_threshold,
        keep_coordinates=True,
    )

    if parallel:
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="colorcall") as executor:
            swatches_future = executor.submit(quantize, color_pixels, quantizer, seed=seed)
            zones_future = executor.submit(map_zones, color_pixels)
            weight_future = executor.submit(analyze_weight, weight_pixels, grid_size)
            swatches = swatches_future.result()
            zones = zones_future.result()
            weight = weight_future.result()
    else:
        swatches = quantize(color_pixels, quantizer, seed=seed)
        zones = map_zones(color_pixels)
        weight = analyze_weight(weight_pixels, grid_size)

    composition = score_composition(swatches, target)
    harmony = classify_harmony(swatches)
    matches = match_styles(swatches, harmony, zones, profiles=REFERENCE_PROFILES)

    image_hash: Optional[str] = None
    if include_hash:
        image_hash = f"sha256:{hashlib.sha256(np.ascontiguousarray(rgba).tobytes()).hexdigest()[:16]}"

    logger.debug(
        "Analyzed image: %d swatches, score %d (%s), %s, %s",
        len(swatches), composition.score, composition.verdict.value,
        harmony.type.value, zones.character.value,
    )

    return ColorCallAnalysis(
        swatches=swatches,
        composition=composition,
        harmony=harmony,
        zones=zones,
        weight=weight,
        matches=matches,
        image_hash=image_hash,
    )
