# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Pixel-analysis core for ColorCall.

Every stage works on decoded pixels and returns plain records.
Only k-means++ seeding is random, and its source is injectable.
"""

from colorcall.measure.extract import analyze
from colorcall.measure.sampler import ImageDecodeError, SampledPixelSet, load_image, sample
from colorcall.measure.quantize import QuantizerConfig, quantize
from colorcall.measure.composition import RULE_60_20_10, RULE_60_30_10, score_composition
from colorcall.measure.harmony import classify_harmony
from colorcall.measure.zones import map_zones
from colorcall.measure.weight import analyze_weight
from colorcall.measure.styles import match_styles, top_matches
from colorcall.measure.profiles import REFERENCE_PROFILES

__all__ = [
    "analyze",
    "sample",
    "load_image",
    "SampledPixelSet",
    "ImageDecodeError",
    "quantize",
    "QuantizerConfig",
    "score_composition",
    "RULE_60_30_10",
    "RULE_60_20_10",
    "classify_harmony",
    "map_zones",
    "analyze_weight",
    "match_styles",
    "top_matches",
    "REFERENCE_PROFILES",
]
