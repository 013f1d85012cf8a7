# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Context block serializer.

Formats ColorCallAnalysis as a structured block (XML, JSON, or Markdown)
that can be embedded in another document or message.
"""

from __future__ import annotations

import json
from enum import Enum
from xml.sax.saxutils import quoteattr

from colorcall.schema import ColorCallAnalysis


class BlockFormat(Enum):
    """Block format options."""

    XML = "xml"
    JSON = "json"
    MARKDOWN = "markdown"


def to_context_block(
    analysis: ColorCallAnalysis,
    *,
    format: BlockFormat = BlockFormat.XML,
    include_heatmap: bool = False,
    tag_name: str = "composition_analysis",
) -> str:
    """Serialize a ColorCallAnalysis as a context block.

    Args:
        analysis: The analysis to serialize.
        format: Block format (XML, JSON, or MARKDOWN).
        include_heatmap: Include the weight heatmap grid.
        tag_name: XML/markdown tag name for the block.

    Returns:
        Formatted block string.

    Example (XML)::

        <composition_analysis version="1.0" source="colorcall">
          <palette>
            <swatch hex="#1E2A3C" percentage="58.2"/>
            <swatch hex="#D89A4E" percentage="30.9"/>
          </palette>
          <composition score="92" verdict="Textbook"/>
          <harmony type="Complementary" score="95"/>
          <zones character="Low Key" dynamic_range="7" peak="2"/>
          <weight x="51.2" y="47.9" balance="Centered" score="96"/>
          <matches>
            <match id="deakins" score="88"/>
          </matches>
        </composition_analysis>
    """
    if format == BlockFormat.XML:
        return _to_xml(analysis, include_heatmap, tag_name)
    elif format == BlockFormat.JSON:
        return _to_json(analysis, include_heatmap, tag_name)
    else:
        return _to_markdown(analysis, include_heatmap, tag_name)


def _to_xml(
    analysis: ColorCallAnalysis,
    include_heatmap: bool,
    tag_name: str,
) -> str:
    """Generate XML block."""
    lines = [f'<{tag_name} version="{analysis.version}" source="colorcall">']

    lines.append("  <palette>")
    for s in analysis.swatches:
        lines.append(f'    <swatch hex="{s.hex}" percentage="{s.percentage:.1f}"/>')
    lines.append("  </palette>")

    comp = analysis.composition
    lines.append(
        f'  <composition score="{comp.score}" verdict={quoteattr(comp.verdict.value)}/>'
    )

    harmony = analysis.harmony
    lines.append(
        f'  <harmony type={quoteattr(harmony.type.value)} score="{harmony.score}"/>'
    )

    zones = analysis.zones
    lines.append(
        f'  <zones character={quoteattr(zones.character.value)} '
        f'dynamic_range="{zones.dynamic_range}" peak="{zones.peak_zone}"/>'
    )

    weight = analysis.weight
    if include_heatmap:
        lines.append(
            f'  <weight x="{weight.center_x:.1f}" y="{weight.center_y:.1f}" '
            f'balance={quoteattr(weight.balance_type.value)} score="{weight.balance_score}">'
        )
        for row in weight.heatmap:
            cells = " ".join(f"{v:.2f}" for v in row)
            lines.append(f"    <row>{cells}</row>")
        lines.append("  </weight>")
    else:
        lines.append(
            f'  <weight x="{weight.center_x:.1f}" y="{weight.center_y:.1f}" '
            f'balance={quoteattr(weight.balance_type.value)} score="{weight.balance_score}"/>'
        )

    lines.append("  <matches>")
    for m in analysis.matches:
        lines.append(f'    <match id="{m.profile.id}" score="{m.match_score}"/>')
    lines.append("  </matches>")

    lines.append(f"</{tag_name}>")
    return "\n".join(lines)


def _block_data(analysis: ColorCallAnalysis, include_heatmap: bool) -> dict:
    data = analysis.to_dict()
    if not include_heatmap:
        data["weight"].pop("heatmap", None)
    return data


def _to_json(
    analysis: ColorCallAnalysis,
    include_heatmap: bool,
    tag_name: str,
) -> str:
    """Generate JSON block with wrapper."""
    wrapped = {tag_name: _block_data(analysis, include_heatmap)}
    return json.dumps(wrapped, indent=2)


def _to_markdown(
    analysis: ColorCallAnalysis,
    include_heatmap: bool,
    tag_name: str,
) -> str:
    """Generate markdown block with code fence."""
    lines = [
        f"<!-- {tag_name} -->",
        "```json",
        json.dumps(_block_data(analysis, include_heatmap), indent=2),
        "```",
        f"<!-- /{tag_name} -->",
    ]
    return "\n".join(lines)
