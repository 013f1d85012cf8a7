# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Analysis records for ColorCall.

Design principles:
- Immutable: All types are frozen dataclasses
- Per-run: Records are produced for one image and never persisted
- Plain data: No record knows how the image was obtained or displayed
- Serializable: Every record has a JSON-ready ``to_dict``

Color conventions:
- RGB channels are 0-255 integers
- HSL is (hue 0-360, saturation 0-100, lightness 0-100)
- Percentages are 0-100, not fractions
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0"

# Percentages are accumulated from float divisions
_PCT_TOLERANCE = 0.01


# =============================================================================
# Color Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class Swatch:
    """
    A quantized color with its share of the sampled pixels.

    Attributes:
        rgb: Rounded (R, G, B) integer triple, 0-255 per channel
        hex: Uppercase hex string derived from rgb (e.g. "#FF5733")
        percentage: Coverage within the final swatch list (0-100)
        pixel_count: Number of sampled pixels assigned to this color
    """
    rgb: tuple[int, int, int]
    hex: str
    percentage: float
    pixel_count: int

    def __post_init__(self) -> None:
        """Validate channel and coverage ranges."""
        if len(self.rgb) != 3 or any(not 0 <= c <= 255 for c in self.rgb):
            raise ValueError(f"RGB channels must be 0-255, got {self.rgb}")
        if not 0.0 <= self.percentage <= 100.0 + _PCT_TOLERANCE:
            raise ValueError(f"Percentage must be 0-100, got {self.percentage}")
        if self.pixel_count < 0:
            raise ValueError(f"Pixel count must be >= 0, got {self.pixel_count}")

    @property
    def hsl(self) -> HSLColor:
        """The swatch converted to rounded HSL."""
        from colorcall.measure.colorspace import rgb_to_hsl
        h, s, l = rgb_to_hsl(self.rgb)
        return HSLColor(h=h, s=s, l=l, hex=self.hex)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "rgb": list(self.rgb),
            "hex": self.hex,
            "percentage": self.percentage,
            "pixel_count": self.pixel_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Swatch:
        """Deserialize from dictionary."""
        return cls(
            rgb=tuple(data["rgb"]),
            hex=data["hex"],
            percentage=data["percentage"],
            pixel_count=data["pixel_count"],
        )


@dataclass(frozen=True, slots=True)
class HSLColor:
    """
    A color in rounded HSL, as evaluated by the harmony and style stages.

    Attributes:
        h: Hue in degrees (0-360)
        s: Saturation percentage (0-100)
        l: Lightness percentage (0-100)
        hex: Optional hex of the swatch this color came from
    """
    h: int
    s: int
    l: int
    hex: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0 <= self.h <= 360:
            raise ValueError(f"Hue must be 0-360, got {self.h}")
        if not 0 <= self.s <= 100:
            raise ValueError(f"Saturation must be 0-100, got {self.s}")
        if not 0 <= self.l <= 100:
            raise ValueError(f"Lightness must be 0-100, got {self.l}")

    def to_dict(self) -> dict:
        d = {"h": self.h, "s": self.s, "l": self.l}
        if self.hex is not None:
            d["hex"] = self.hex
        return d

    @classmethod
    def from_dict(cls, data: dict) -> HSLColor:
        return cls(h=data["h"], s=data["s"], l=data["l"], hex=data.get("hex"))


# =============================================================================
# Composition
# =============================================================================


class Verdict(Enum):
    """Qualitative reading of a composition score."""
    TEXTBOOK = "Textbook"
    HARMONIOUS = "Harmonious"
    EXPRESSIVE = "Expressive"
    BOLD = "Bold"
    INSUFFICIENT = "Insufficient colors"


@dataclass(frozen=True, slots=True)
class SwatchDeviation:
    """
    How far one of the top three swatches sits from its target share.

    Attributes:
        swatch: The evaluated swatch
        target: Target percentage for its rank
        deviation: Signed difference (actual - target), in percentage points
        within_tolerance: True when |deviation| <= 10
    """
    swatch: Swatch
    target: float
    deviation: float
    within_tolerance: bool

    @property
    def formatted(self) -> str:
        """Signed label such as "+4.0%" or "-3.5%"."""
        if self.deviation >= 0:
            return f"+{self.deviation:.1f}%"
        return f"{self.deviation:.1f}%"

    def to_dict(self) -> dict:
        return {
            "swatch": self.swatch.to_dict(),
            "target": self.target,
            "deviation": self.deviation,
            "formatted": self.formatted,
            "within_tolerance": self.within_tolerance,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SwatchDeviation:
        # "formatted" is derived from the deviation and not read back
        return cls(
            swatch=Swatch.from_dict(data["swatch"]),
            target=data["target"],
            deviation=data["deviation"],
            within_tolerance=data["within_tolerance"],
        )


@dataclass(frozen=True, slots=True)
class CompositionScore:
    """
    Score of the top three swatches against a target distribution.

    Attributes:
        score: 0-100 after rounding; a total deviation under about 0.65
            points still rounds to 100
        verdict: Qualitative band for the score
        description: Fixed text for the verdict
        deviations: Per-swatch deviations (empty when insufficient colors)
        total_deviation: Sum of absolute deviations
    """
    score: int
    verdict: Verdict
    description: str
    deviations: tuple[SwatchDeviation, ...] = ()
    total_deviation: float = 0.0

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise ValueError(f"Score must be 0-100, got {self.score}")

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "verdict": self.verdict.value,
            "description": self.description,
            "deviations": [d.to_dict() for d in self.deviations],
            "total_deviation": self.total_deviation,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CompositionScore:
        """Deserialize from dictionary."""
        return cls(
            score=data["score"],
            verdict=Verdict(data["verdict"]),
            description=data["description"],
            deviations=tuple(SwatchDeviation.from_dict(d) for d in data.get("deviations", ())),
            total_deviation=data.get("total_deviation", 0.0),
        )


# =============================================================================
# Harmony
# =============================================================================


class HarmonyType(Enum):
    """Closed set of hue-relationship archetypes."""
    MONOCHROMATIC = "Monochromatic"
    ACHROMATIC = "Achromatic"
    COMPLEMENTARY = "Complementary"
    TRIADIC = "Triadic"
    SPLIT_COMPLEMENTARY = "Split-Complementary"
    ANALOGOUS = "Analogous"
    TETRADIC = "Tetradic"
    COMPLEX = "Complex"


@dataclass(frozen=True, slots=True)
class HarmonyResult:
    """
    Harmony classification of the top colors.

    The score is fixed per archetype; it is presentation metadata,
    not a confidence value.
    """
    type: HarmonyType
    score: int
    description: str
    colors: tuple[HSLColor, ...] = ()

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "score": self.score,
            "description": self.description,
            "colors": [c.to_dict() for c in self.colors],
        }

    @classmethod
    def from_dict(cls, data: dict) -> HarmonyResult:
        return cls(
            type=HarmonyType(data["type"]),
            score=data["score"],
            description=data["description"],
            colors=tuple(HSLColor.from_dict(c) for c in data.get("colors", ())),
        )


# =============================================================================
# Zone System
# =============================================================================


class ToneClass(Enum):
    """Coarse tonal band a zone belongs to."""
    SHADOW = "shadow"
    MIDTONE = "midtone"
    HIGHLIGHT = "highlight"


class TonalCharacter(Enum):
    """Overall tonal character of an image."""
    LOW_KEY = "Low Key"
    HIGH_KEY = "High Key"
    MIDDLE_KEY = "Middle Key"
    FULL_RANGE = "Full Range"
    COMPRESSED = "Compressed"
    BALANCED = "Balanced"


@dataclass(frozen=True, slots=True)
class ZoneBucket:
    """
    One of the 11 exposure zones (0 = pure black, 10 = pure white).
    """
    zone: int
    name: str
    description: str
    tone: ToneClass
    count: int
    percentage: float

    def __post_init__(self) -> None:
        if not 0 <= self.zone <= 10:
            raise ValueError(f"Zone must be 0-10, got {self.zone}")

    def to_dict(self) -> dict:
        return {
            "zone": self.zone,
            "name": self.name,
            "description": self.description,
            "tone": self.tone.value,
            "count": self.count,
            "percentage": self.percentage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ZoneBucket:
        return cls(
            zone=data["zone"],
            name=data["name"],
            description=data["description"],
            tone=ToneClass(data["tone"]),
            count=data["count"],
            percentage=data["percentage"],
        )


@dataclass(frozen=True, slots=True)
class ZoneReport:
    """
    Zone System histogram and the tonal metrics derived from it.

    Attributes:
        buckets: Exactly 11 buckets, zone 0 first
        peak_zone: Most populated zone (lowest index wins ties)
        dynamic_range: Span between darkest and lightest significant zone
        shadow_percentage: Zones 0-3 combined
        midtone_percentage: Zones 4-6 combined
        highlight_percentage: Zones 7-10 combined
        character: Tonal character label
        character_description: Fixed text for the label
        darkest_significant: Darkest zone holding >= 2%, None if none does
        lightest_significant: Lightest zone holding >= 2%, None if none does
    """
    buckets: tuple[ZoneBucket, ...]
    peak_zone: int
    dynamic_range: int
    shadow_percentage: float
    midtone_percentage: float
    highlight_percentage: float
    character: TonalCharacter
    character_description: str
    darkest_significant: Optional[int] = None
    lightest_significant: Optional[int] = None

    def __post_init__(self) -> None:
        if len(self.buckets) != 11:
            raise ValueError(f"Zone report requires 11 buckets, got {len(self.buckets)}")

    @property
    def total_count(self) -> int:
        return sum(b.count for b in self.buckets)

    def to_dict(self) -> dict:
        return {
            "buckets": [b.to_dict() for b in self.buckets],
            "peak_zone": self.peak_zone,
            "dynamic_range": self.dynamic_range,
            "shadow_percentage": self.shadow_percentage,
            "midtone_percentage": self.midtone_percentage,
            "highlight_percentage": self.highlight_percentage,
            "character": self.character.value,
            "character_description": self.character_description,
            "darkest_significant": self.darkest_significant,
            "lightest_significant": self.lightest_significant,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ZoneReport:
        """Deserialize from dictionary."""
        return cls(
            buckets=tuple(ZoneBucket.from_dict(b) for b in data["buckets"]),
            peak_zone=data["peak_zone"],
            dynamic_range=data["dynamic_range"],
            shadow_percentage=data["shadow_percentage"],
            midtone_percentage=data["midtone_percentage"],
            highlight_percentage=data["highlight_percentage"],
            character=TonalCharacter(data["character"]),
            character_description=data["character_description"],
            darkest_significant=data.get("darkest_significant"),
            lightest_significant=data.get("lightest_significant"),
        )


# =============================================================================
# Visual Weight
# =============================================================================


class BalanceType(Enum):
    """Balance classification of the visual weight field."""
    CENTERED = "Centered"
    LEFT_HEAVY = "Left Heavy"
    RIGHT_HEAVY = "Right Heavy"
    TOP_HEAVY = "Top Heavy"
    BOTTOM_HEAVY = "Bottom Heavy"
    OFF_CENTER = "Off-Center"
    BALANCED = "Balanced"


@dataclass(frozen=True, slots=True)
class QuadrantWeights:
    """Share of total visual weight per image quadrant (sums to 100)."""
    top_left: float
    top_right: float
    bottom_left: float
    bottom_right: float

    def to_dict(self) -> dict:
        return {
            "top_left": self.top_left,
            "top_right": self.top_right,
            "bottom_left": self.bottom_left,
            "bottom_right": self.bottom_right,
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuadrantWeights:
        return cls(
            top_left=data["top_left"],
            top_right=data["top_right"],
            bottom_left=data["bottom_left"],
            bottom_right=data["bottom_right"],
        )


@dataclass(frozen=True, slots=True)
class WeightField:
    """
    Visual weight distribution of an image.

    Coordinates are percentages of the image width/height, so (50, 50)
    is the geometric center. The heatmap is row-major, top row first,
    normalized so its heaviest cell is 1.0.
    """
    center_x: float
    center_y: float
    quadrants: QuadrantWeights
    heatmap: tuple[tuple[float, ...], ...]
    horizontal_balance: float
    vertical_balance: float
    balance_score: int
    balance_type: BalanceType
    balance_description: str

    def __post_init__(self) -> None:
        if not (0.0 <= self.center_x <= 100.0 and 0.0 <= self.center_y <= 100.0):
            raise ValueError(
                f"Center of mass must lie in [0, 100], got ({self.center_x}, {self.center_y})"
            )
        if not 0 <= self.balance_score <= 100:
            raise ValueError(f"Balance score must be 0-100, got {self.balance_score}")

    @property
    def center_of_mass(self) -> tuple[float, float]:
        return (self.center_x, self.center_y)

    def to_dict(self) -> dict:
        return {
            "center_of_mass": {"x": self.center_x, "y": self.center_y},
            "quadrants": self.quadrants.to_dict(),
            "heatmap": [list(row) for row in self.heatmap],
            "horizontal_balance": self.horizontal_balance,
            "vertical_balance": self.vertical_balance,
            "balance_score": self.balance_score,
            "balance_type": self.balance_type.value,
            "balance_description": self.balance_description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> WeightField:
        """Deserialize from dictionary."""
        center = data["center_of_mass"]
        return cls(
            center_x=center["x"],
            center_y=center["y"],
            quadrants=QuadrantWeights.from_dict(data["quadrants"]),
            heatmap=tuple(tuple(row) for row in data["heatmap"]),
            horizontal_balance=data["horizontal_balance"],
            vertical_balance=data["vertical_balance"],
            balance_score=data["balance_score"],
            balance_type=BalanceType(data["balance_type"]),
            balance_description=data["balance_description"],
        )


# =============================================================================
# Style Matching
# =============================================================================


@dataclass(frozen=True, slots=True)
class StyleProfile:
    """
    Reference signature style of a cinematographer.

    Hue ranges are inclusive (min, max) pairs in degrees; a pair with
    min > max wraps around 0/360.
    """
    id: str
    name: str
    notable: str
    saturation_range: tuple[float, float]
    harmony_types: tuple[HarmonyType, ...]
    zone_characters: tuple[TonalCharacter, ...]
    hue_ranges: tuple[tuple[float, float], ...]
    luminance_balance: str = "balanced"
    contrast_preference: str = "natural"

    def __post_init__(self) -> None:
        low, high = self.saturation_range
        if low > high:
            raise ValueError(f"Saturation range must be (min, max), got {self.saturation_range}")
        if not self.hue_ranges:
            raise ValueError("Profile needs at least one hue range")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "notable": self.notable,
            "saturation_range": list(self.saturation_range),
            "harmony_types": [h.value for h in self.harmony_types],
            "zone_characters": [z.value for z in self.zone_characters],
            "hue_ranges": [list(r) for r in self.hue_ranges],
            "luminance_balance": self.luminance_balance,
            "contrast_preference": self.contrast_preference,
        }


@dataclass(frozen=True, slots=True)
class MatchResult:
    """How well an image matches one reference profile (0-100)."""
    profile: StyleProfile
    match_score: int

    def __post_init__(self) -> None:
        if not 0 <= self.match_score <= 100:
            raise ValueError(f"Match score must be 0-100, got {self.match_score}")

    def to_dict(self) -> dict:
        return {
            "id": self.profile.id,
            "name": self.profile.name,
            "notable": self.profile.notable,
            "match_score": self.match_score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> MatchResult:
        """Deserialize from dictionary, resolving the profile by its id."""
        # Import here to avoid circular imports
        from colorcall.measure.profiles import get_profile
        return cls(profile=get_profile(data["id"]), match_score=data["match_score"])


# =============================================================================
# Top-Level Container
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorCallAnalysis:
    """
    Complete composition analysis of one image.

    Produced by ``colorcall.analyze``. Everything here belongs to a single
    run; a new submission produces a new record.

    Attributes:
        swatches: Ranked dominant colors (percentages sum to 100, or empty)
        composition: Top-three score against the rule target
        harmony: Hue-relationship archetype of the top colors
        zones: Zone System report
        weight: Visual weight field
        matches: One result per reference profile, best first
        version: Schema version
        image_hash: Optional hash of the decoded pixels
    """
    swatches: tuple[Swatch, ...]
    composition: CompositionScore
    harmony: HarmonyResult
    zones: ZoneReport
    weight: WeightField
    matches: tuple[MatchResult, ...]
    version: str = field(default=SCHEMA_VERSION)
    image_hash: Optional[str] = None

    def __post_init__(self) -> None:
        if self.swatches:
            total = sum(s.percentage for s in self.swatches)
            if abs(total - 100.0) > _PCT_TOLERANCE:
                raise ValueError(
                    f"Swatch percentages must sum to 100, got {total:.3f}"
                )

    @property
    def top_match(self) -> Optional[MatchResult]:
        return self.matches[0] if self.matches else None

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        result = {
            "version": self.version,
            "swatches": [s.to_dict() for s in self.swatches],
            "composition": self.composition.to_dict(),
            "harmony": self.harmony.to_dict(),
            "zones": self.zones.to_dict(),
            "weight": self.weight.to_dict(),
            "matches": [m.to_dict() for m in self.matches],
        }
        if self.image_hash is not None:
            result["image_hash"] = self.image_hash
        return result

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> ColorCallAnalysis:
        """Deserialize from dictionary."""
        return cls(
            swatches=tuple(Swatch.from_dict(s) for s in data["swatches"]),
            composition=CompositionScore.from_dict(data["composition"]),
            harmony=HarmonyResult.from_dict(data["harmony"]),
            zones=ZoneReport.from_dict(data["zones"]),
            weight=WeightField.from_dict(data["weight"]),
            matches=tuple(MatchResult.from_dict(m) for m in data["matches"]),
            version=data.get("version", SCHEMA_VERSION),
            image_hash=data.get("image_hash"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> ColorCallAnalysis:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def to_report(self) -> str:
        """Human-readable summary of the analysis."""
        # Import here to avoid circular imports
        from colorcall.runtime.serializers.report import to_report
        from colorcall.runtime.serializers.base import SerializerFormat
        return to_report(self, format=SerializerFormat.NATURAL)

    def to_xml(self) -> str:
        """Serialize to XML block format."""
        from colorcall.runtime.serializers.block import to_context_block, BlockFormat
        return to_context_block(self, format=BlockFormat.XML)
