# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Runtime layer for ColorCall.

1. Session -- generation-guarded background analysis, newest image wins
2. Serializers -- report and block output of a finished analysis
"""

from colorcall.runtime.session import AnalysisSession
from colorcall.runtime.serializers import (
    SerializerFormat,
    BlockFormat,
    to_context_block,
    to_report,
)

__all__ = [
    "AnalysisSession",
    "to_report",
    "to_context_block",
    "SerializerFormat",
    "BlockFormat",
]
