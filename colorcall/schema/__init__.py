# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Schema definitions for composition analysis.

All types in this module are immutable (frozen dataclasses).
Records are scoped to one analysis run and never persisted.
"""

from colorcall.schema.analysis import (
    SCHEMA_VERSION,
    BalanceType,
    ColorCallAnalysis,
    CompositionScore,
    HarmonyResult,
    HarmonyType,
    HSLColor,
    MatchResult,
    QuadrantWeights,
    StyleProfile,
    Swatch,
    SwatchDeviation,
    TonalCharacter,
    ToneClass,
    Verdict,
    WeightField,
    ZoneBucket,
    ZoneReport,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Colors
    "Swatch",
    "HSLColor",
    # Composition
    "Verdict",
    "SwatchDeviation",
    "CompositionScore",
    # Harmony
    "HarmonyType",
    "HarmonyResult",
    # Zone System
    "ToneClass",
    "TonalCharacter",
    "ZoneBucket",
    "ZoneReport",
    # Visual weight
    "BalanceType",
    "QuadrantWeights",
    "WeightField",
    # Style matching
    "StyleProfile",
    "MatchResult",
    # Top-level container
    "ColorCallAnalysis",
]
