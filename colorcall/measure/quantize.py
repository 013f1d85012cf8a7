# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Dominant color quantization using seeded k-means++ in RGB space.

Pipeline:
1. Seed more centroids than the output needs (k-means++ weighting)
2. Iterate assign/update until every centroid moves less than the
   convergence distance, or the iteration cap is hit
3. Merge near-duplicate centroids (count-weighted average)
4. Rank by coverage and greedily keep perceptually distinct colors
5. Recompute percentages over the retained colors only

The random source is injectable so results are reproducible in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from colorcall.schema import Swatch
from colorcall.measure.colorspace import rgb_to_hex, round_half_up
from colorcall.measure.sampler import SampledPixelSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuantizerConfig:
    """Configuration for dominant color quantization."""

    # Seeds exceed the output count so merging/filtering has room to work
    n_seeds: int = 8

    # Maximum swatches returned
    n_colors: int = 5

    # Hard cap on assign/update rounds
    max_iterations: int = 25

    # Stop once every centroid moves less than this (RGB Euclidean)
    convergence_distance: float = 1.0

    # Centroids closer than this are the same color and are merged
    merge_distance: float = 12.0

    # Retained swatches must be at least this far from each other
    min_distinct_distance: float = 30.0

    def __post_init__(self) -> None:
        if self.n_seeds < 1:
            raise ValueError(f"n_seeds must be >= 1, got {self.n_seeds}")
        if self.n_colors < 1:
            raise ValueError(f"n_colors must be >= 1, got {self.n_colors}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")


@dataclass
class Centroid:
    """Working centroid: float RGB position plus assigned pixel count."""
    rgb: NDArray[np.float64]
    count: int


def quantize(
    pixels: Union[SampledPixelSet, NDArray],
    config: Optional[QuantizerConfig] = None,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> tuple[Swatch, ...]:
    """
    Extract the dominant colors of a pixel sample.

    Args:
        pixels: SampledPixelSet or an (N, 3) array of RGB values
        config: Quantizer settings (uses defaults if None)
        seed: Seed for the random source (None = system entropy)
        rng: Explicit random generator; takes precedence over ``seed``

    Returns:
        Tuple of Swatch, most prevalent first. Percentages sum to 100.
        Empty for an empty sample.
    """
    cfg = config or QuantizerConfig()
    data = _as_float_pixels(pixels)

    if len(data) == 0:
        return ()

    generator = rng if rng is not None else np.random.default_rng(seed)

    centroids = _seed_centroids(data, cfg.n_seeds, generator)
    centroids, counts = _kmeans(
        data,
        centroids,
        max_iterations=cfg.max_iterations,
        convergence_distance=cfg.convergence_distance,
    )

    clusters = [
        Centroid(rgb=centroids[i].copy(), count=int(counts[i]))
        for i in range(len(centroids))
        if counts[i] > 0
    ]

    merged = merge_clusters(clusters, cfg.merge_distance)
    # Stable sort keeps seed order among equal counts
    merged.sort(key=lambda c: c.count, reverse=True)
    distinct = select_distinct(merged, cfg.n_colors, cfg.min_distinct_distance)

    logger.debug(
        "Quantized %d pixels: %d clusters, %d after merge, %d distinct",
        len(data), len(clusters), len(merged), len(distinct),
    )
    return _to_swatches(distinct)


def _as_float_pixels(pixels: Union[SampledPixelSet, NDArray]) -> NDArray[np.float64]:
    if isinstance(pixels, SampledPixelSet):
        rgb = pixels.rgb
    else:
        rgb = np.asarray(pixels)
        if rgb.size and (rgb.ndim != 2 or rgb.shape[1] != 3):
            raise ValueError(f"Expected (N, 3) pixel array, got shape {rgb.shape}")
    return rgb.reshape(-1, 3).astype(np.float64)


def _seed_centroids(
    data: NDArray[np.float64],
    k: int,
    rng: np.random.Generator,
) -> NDArray[np.float64]:
    """
    k-means++ seeding.

    The first centroid is a uniformly random sample; each following one is
    drawn with probability proportional to its squared distance from the
    nearest centroid chosen so far.

    Args:
        data: (N, 3) float pixels
        k: Number of centroids to seed
        rng: Random source

    Returns:
        (k, 3) array of initial centroids
    """
    n = len(data)
    centroids = np.empty((k, 3), dtype=np.float64)
    centroids[0] = data[rng.integers(n)]

    # Squared distance from each pixel to its nearest chosen centroid
    nearest_sq = np.sum((data - centroids[0]) ** 2, axis=1)

    for i in range(1, k):
        total = nearest_sq.sum()
        if total == 0:
            # Every pixel coincides with a centroid already
            idx = rng.integers(n)
        else:
            idx = rng.choice(n, p=nearest_sq / total)
        centroids[i] = data[idx]
        nearest_sq = np.minimum(nearest_sq, np.sum((data - centroids[i]) ** 2, axis=1))

    return centroids


def _assign(data: NDArray[np.float64], centroids: NDArray[np.float64]) -> NDArray[np.int64]:
    """Index of the nearest centroid for every pixel (ties go to the lowest index)."""
    dists = np.sum(
        (data[:, np.newaxis, :] - centroids[np.newaxis, :, :]) ** 2,
        axis=2,
    )
    return np.argmin(dists, axis=1)


def _kmeans(
    data: NDArray[np.float64],
    centroids: NDArray[np.float64],
    max_iterations: int = 25,
    convergence_distance: float = 1.0,
) -> tuple[NDArray[np.float64], NDArray[np.int64]]:
    """
    Lloyd iterations from the given seeds.

    A centroid with no assigned pixels keeps its previous position.

    Returns:
        (centroids, counts) where counts come from a final assignment
        against the returned centroids
    """
    k = len(centroids)
    centroids = centroids.copy()

    for iteration in range(1, max_iterations + 1):
        labels = _assign(data, centroids)
        counts = np.bincount(labels, minlength=k)

        sums = np.column_stack([
            np.bincount(labels, weights=data[:, c], minlength=k)
            for c in range(3)
        ])
        occupied = counts > 0
        updated = centroids.copy()
        updated[occupied] = sums[occupied] / counts[occupied, np.newaxis]

        shift = np.sqrt(np.sum((updated - centroids) ** 2, axis=1))
        centroids = updated

        if np.all(shift < convergence_distance):
            logger.debug("k-means converged after %d iterations", iteration)
            break
    else:
        logger.debug("k-means hit the %d iteration cap", max_iterations)

    counts = np.bincount(_assign(data, centroids), minlength=k)
    return centroids, counts


def merge_clusters(clusters: list[Centroid], merge_distance: float) -> list[Centroid]:
    """
    Merge clusters whose centroids are closer than ``merge_distance``.

    Clusters are visited largest first; each absorbs every later cluster
    within range of it. The merged position is the pixel-count-weighted
    mean and the counts are summed.
    """
    ordered = sorted(clusters, key=lambda c: c.count, reverse=True)
    absorbed = [False] * len(ordered)
    result: list[Centroid] = []

    for i, base in enumerate(ordered):
        if absorbed[i]:
            continue
        group = [base]
        absorbed[i] = True

        for j in range(i + 1, len(ordered)):
            if absorbed[j]:
                continue
            if np.linalg.norm(ordered[j].rgb - base.rgb) < merge_distance:
                group.append(ordered[j])
                absorbed[j] = True

        total = sum(c.count for c in group)
        if len(group) == 1 or total == 0:
            result.append(Centroid(rgb=base.rgb.copy(), count=total))
            continue
        rgb = sum(c.rgb * c.count for c in group) / total
        result.append(Centroid(rgb=rgb, count=total))

    return result


def select_distinct(
    clusters: list[Centroid],
    n_colors: int,
    min_distance: float,
) -> list[Centroid]:
    """
    Greedily keep the most prevalent clusters that are visibly distinct.

    ``clusters`` must already be ranked by count. A candidate is kept only
    if it is at least ``min_distance`` from every cluster kept before it.
    """
    selected: list[Centroid] = []
    for candidate in clusters:
        if len(selected) >= n_colors:
            break
        if all(np.linalg.norm(candidate.rgb - s.rgb) >= min_distance for s in selected):
            selected.append(candidate)
    return selected


def _to_swatches(clusters: list[Centroid]) -> tuple[Swatch, ...]:
    """Build swatches, normalizing percentages over the retained clusters only."""
    total = sum(c.count for c in clusters)
    if total == 0:
        return ()

    swatches = []
    for c in clusters:
        rgb = tuple(min(255, max(0, round_half_up(float(v)))) for v in c.rgb)
        swatches.append(Swatch(
            rgb=rgb,
            hex=rgb_to_hex(rgb),
            percentage=c.count / total * 100.0,
            pixel_count=c.count,
        ))
    return tuple(swatches)
