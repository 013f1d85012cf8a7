# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""Tests for k-means++ dominant color quantization."""

import itertools

import numpy as np
import pytest

from colorcall.measure.colorspace import color_distance
from colorcall.measure.quantize import (
    Centroid,
    QuantizerConfig,
    merge_clusters,
    quantize,
    select_distinct,
)
from colorcall.measure.sampler import SampledPixelSet


def _pixels(*groups):
    """Build an (N, 3) pixel array from (rgb, count) groups."""
    rows = [np.tile(np.array(rgb, dtype=np.uint8), (count, 1)) for rgb, count in groups]
    return np.concatenate(rows)


def _noisy_pixels(seed=0):
    rng = np.random.default_rng(seed)
    centers = [(200, 30, 30), (20, 40, 180), (240, 230, 210), (30, 30, 30)]
    chunks = [
        np.clip(rng.normal(c, 12, size=(n, 3)), 0, 255)
        for c, n in zip(centers, (500, 300, 150, 50))
    ]
    return np.concatenate(chunks).astype(np.uint8)


class TestQuantizeBasic:

    def test_empty_sample(self):
        assert quantize(np.empty((0, 3), dtype=np.uint8), seed=1) == ()

    def test_empty_sampled_set(self):
        assert quantize(SampledPixelSet.from_rgb(np.empty((0, 3))), seed=1) == ()

    def test_solid_color(self):
        swatches = quantize(_pixels(((12, 200, 90), 64)), seed=1)
        assert len(swatches) == 1
        assert swatches[0].rgb == (12, 200, 90)
        assert swatches[0].hex == "#0CC85A"
        assert swatches[0].percentage == pytest.approx(100.0)
        assert swatches[0].pixel_count == 64

    def test_two_colors_ranked_by_coverage(self):
        swatches = quantize(_pixels(((0, 0, 255), 100), ((255, 0, 0), 300)), seed=3)
        assert [s.hex for s in swatches] == ["#FF0000", "#0000FF"]
        assert swatches[0].percentage == pytest.approx(75.0)
        assert swatches[1].percentage == pytest.approx(25.0)

    def test_accepts_sampled_pixel_set(self):
        pixels = SampledPixelSet.from_rgb(_pixels(((9, 9, 9), 10), ((250, 250, 250), 30)))
        swatches = quantize(pixels, seed=0)
        assert swatches[0].hex == "#FAFAFA"

    def test_invalid_array_shape(self):
        with pytest.raises(ValueError, match="Expected \\(N, 3\\)"):
            quantize(np.zeros((4, 4, 3), dtype=np.uint8))


class TestQuantizeInvariants:

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_percentages_sum_to_100(self, seed):
        swatches = quantize(_noisy_pixels(seed), seed=seed)
        assert sum(s.percentage for s in swatches) == pytest.approx(100.0, abs=0.01)

    def test_sorted_by_coverage(self):
        swatches = quantize(_noisy_pixels(), seed=5)
        counts = [s.pixel_count for s in swatches]
        assert counts == sorted(counts, reverse=True)

    def test_output_colors_are_distinct(self):
        config = QuantizerConfig()
        swatches = quantize(_noisy_pixels(), config, seed=5)
        for a, b in itertools.combinations(swatches, 2):
            assert color_distance(a.rgb, b.rgb) >= config.min_distinct_distance - 1

    def test_capped_at_output_count(self):
        corners = list(itertools.product((0, 255), repeat=3))
        groups = [(rgb, 80 - 10 * i) for i, rgb in enumerate(corners)]
        swatches = quantize(_pixels(*groups), seed=11)
        assert len(swatches) == 5
        assert [s.pixel_count for s in swatches] == [80, 70, 60, 50, 40]
        assert swatches[0].percentage == pytest.approx(80 / 300 * 100)

    def test_same_seed_same_result(self):
        pixels = _noisy_pixels()
        assert quantize(pixels, seed=42) == quantize(pixels, seed=42)

    def test_explicit_generator(self):
        pixels = _noisy_pixels()
        a = quantize(pixels, rng=np.random.default_rng(9))
        b = quantize(pixels, seed=9)
        assert a == b


class TestPostProcessing:

    def test_near_duplicates_merge_by_weighted_average(self):
        pixels = _pixels(((10, 10, 10), 60), ((15, 15, 15), 40), ((250, 250, 250), 100))
        swatches = quantize(pixels, seed=2)
        assert {s.hex for s in swatches} == {"#0C0C0C", "#FAFAFA"}
        for s in swatches:
            assert s.pixel_count == 100
            assert s.percentage == pytest.approx(50.0)

    def test_distinct_filter_renormalizes_over_retained(self):
        pixels = _pixels(((100, 100, 100), 50), ((120, 100, 100), 30), ((0, 0, 255), 20))
        swatches = quantize(pixels, seed=4)
        assert [s.hex for s in swatches] == ["#646464", "#0000FF"]
        assert [s.pixel_count for s in swatches] == [50, 20]
        assert swatches[0].percentage == pytest.approx(50 / 70 * 100)
        assert swatches[1].percentage == pytest.approx(20 / 70 * 100)

    def test_merge_clusters(self):
        clusters = [
            Centroid(rgb=np.array([0.0, 0.0, 0.0]), count=30),
            Centroid(rgb=np.array([200.0, 0.0, 0.0]), count=10),
            Centroid(rgb=np.array([10.0, 0.0, 0.0]), count=10),
        ]
        merged = merge_clusters(clusters, merge_distance=12.0)
        assert len(merged) == 2
        assert merged[0].count == 40
        np.testing.assert_allclose(merged[0].rgb, [2.5, 0.0, 0.0])

    def test_merge_keeps_far_clusters(self):
        clusters = [
            Centroid(rgb=np.array([0.0, 0.0, 0.0]), count=5),
            Centroid(rgb=np.array([100.0, 0.0, 0.0]), count=5),
        ]
        assert len(merge_clusters(clusters, merge_distance=12.0)) == 2

    def test_select_distinct_stops_at_target(self):
        clusters = [Centroid(rgb=np.array([i * 50.0, 0.0, 0.0]), count=10 - i) for i in range(6)]
        selected = select_distinct(clusters, n_colors=3, min_distance=30.0)
        assert [c.count for c in selected] == [10, 9, 8]

    def test_select_distinct_skips_close_candidates(self):
        clusters = [
            Centroid(rgb=np.array([0.0, 0.0, 0.0]), count=10),
            Centroid(rgb=np.array([20.0, 0.0, 0.0]), count=8),
            Centroid(rgb=np.array([90.0, 0.0, 0.0]), count=5),
        ]
        selected = select_distinct(clusters, n_colors=5, min_distance=30.0)
        assert [c.count for c in selected] == [10, 5]


class TestQuantizerConfig:

    def test_defaults(self):
        config = QuantizerConfig()
        assert config.n_seeds == 8
        assert config.n_colors == 5
        assert config.max_iterations == 25

    def test_invalid_values(self):
        with pytest.raises(ValueError, match="n_seeds"):
            QuantizerConfig(n_seeds=0)
        with pytest.raises(ValueError, match="n_colors"):
            QuantizerConfig(n_colors=0)
        with pytest.raises(ValueError, match="max_iterations"):
            QuantizerConfig(max_iterations=0)

    def test_iteration_cap_still_returns_swatches(self):
        swatches = quantize(_noisy_pixels(), QuantizerConfig(max_iterations=1), seed=0)
        assert swatches
        assert sum(s.percentage for s in swatches) == pytest.approx(100.0, abs=0.01)
