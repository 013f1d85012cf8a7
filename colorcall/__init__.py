# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
ColorCall -- Cinematographic composition analysis for still images.

Measures a decoded image against color composition conventions: the
60/30/10 rule, color harmony, Zone System tonality, visual weight
balance, and similarity to reference cinematographer styles.

Quick start::

    from colorcall import analyze

    a = analyze("frame.png", seed=7)
    a.composition.score   # 0-100 against 60/30/10
    a.to_report()         # Human-readable summary
    a.to_json()           # Full JSON
"""

from __future__ import annotations

__version__ = "1.0.0"

from colorcall.measure import analyze
from colorcall.measure.sampler import ImageDecodeError
from colorcall.runtime.session import AnalysisSession
from colorcall.schema import (
    ColorCallAnalysis,
    CompositionScore,
    HarmonyResult,
    HarmonyType,
    MatchResult,
    Swatch,
    TonalCharacter,
    Verdict,
    WeightField,
    ZoneReport,
)

__all__ = [
    # Core API
    "analyze",
    "AnalysisSession",
    "ImageDecodeError",
    "ColorCallAnalysis",
    # Types (commonly needed)
    "Swatch",
    "CompositionScore",
    "Verdict",
    "HarmonyResult",
    "HarmonyType",
    "ZoneReport",
    "TonalCharacter",
    "WeightField",
    "MatchResult",
    # Version
    "__version__",
]
