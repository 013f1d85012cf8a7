# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Serializers for ColorCallAnalysis output.

Serializers only format; they never recompute or alter results.
"""

from colorcall.runtime.serializers.base import SerializerFormat
from colorcall.runtime.serializers.block import to_context_block, BlockFormat
from colorcall.runtime.serializers.report import to_report

__all__ = [
    "SerializerFormat",
    "BlockFormat",
    "to_report",
    "to_context_block",
]
