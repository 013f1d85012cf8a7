# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Reference cinematographer style profiles.

Static configuration, built once at import and never mutated. Hue ranges
are inclusive degrees; saturation ranges are HSL saturation percentages
of the leading colors.
"""

from __future__ import annotations

from colorcall.schema import HarmonyType as H, StyleProfile, TonalCharacter as T


REFERENCE_PROFILES: tuple[StyleProfile, ...] = (
    StyleProfile(
        id="deakins",
        name="Roger Deakins",
        notable="Blade Runner 2049, 1917, No Country for Old Men",
        # naturalistic light, controlled palette
        saturation_range=(15, 45),
        harmony_types=(H.ANALOGOUS, H.MONOCHROMATIC, H.COMPLEMENTARY),
        zone_characters=(T.BALANCED, T.LOW_KEY, T.FULL_RANGE),
        hue_ranges=((30, 60), (180, 240)),
        luminance_balance="balanced",
        contrast_preference="high",
    ),
    StyleProfile(
        id="lubezki",
        name="Emmanuel Lubezki",
        notable="The Revenant, Gravity, Birdman",
        saturation_range=(10, 35),
        harmony_types=(H.MONOCHROMATIC, H.ANALOGOUS, H.ACHROMATIC),
        zone_characters=(T.HIGH_KEY, T.FULL_RANGE, T.BALANCED),
        hue_ranges=((180, 240), (30, 90)),
        luminance_balance="highlight-heavy",
        contrast_preference="natural",
    ),
    StyleProfile(
        id="richardson",
        name="Robert Richardson",
        notable="Kill Bill, Django Unchained, The Aviator",
        saturation_range=(40, 80),
        harmony_types=(H.COMPLEMENTARY, H.SPLIT_COMPLEMENTARY, H.TRIADIC),
        zone_characters=(T.LOW_KEY, T.FULL_RANGE),
        hue_ranges=((0, 30), (330, 360), (45, 75)),
        luminance_balance="shadow-heavy",
        contrast_preference="dramatic",
    ),
    StyleProfile(
        id="kaminski",
        name="Janusz Kamiński",
        notable="Schindler's List, Saving Private Ryan, Lincoln",
        # smoke, haze, bleached color
        saturation_range=(5, 30),
        harmony_types=(H.ACHROMATIC, H.MONOCHROMATIC, H.ANALOGOUS),
        zone_characters=(T.FULL_RANGE, T.LOW_KEY, T.COMPRESSED),
        hue_ranges=((30, 60), (0, 30)),
        luminance_balance="balanced",
        contrast_preference="high",
    ),
    StyleProfile(
        id="khondji",
        name="Darius Khondji",
        notable="Se7en, Midnight in Paris, Uncut Gems",
        saturation_range=(20, 50),
        harmony_types=(H.MONOCHROMATIC, H.ANALOGOUS, H.COMPLEMENTARY),
        zone_characters=(T.LOW_KEY, T.COMPRESSED),
        hue_ranges=((30, 90), (150, 210)),
        luminance_balance="shadow-heavy",
        contrast_preference="low",
    ),
    StyleProfile(
        id="storaro",
        name="Vittorio Storaro",
        notable="Apocalypse Now, The Last Emperor, Dick Tracy",
        saturation_range=(50, 90),
        harmony_types=(H.COMPLEMENTARY, H.TRIADIC, H.SPLIT_COMPLEMENTARY),
        zone_characters=(T.FULL_RANGE, T.BALANCED),
        # full spectrum
        hue_ranges=((0, 360),),
        luminance_balance="balanced",
        contrast_preference="theatrical",
    ),
    StyleProfile(
        id="sandgren",
        name="Linus Sandgren",
        notable="La La Land, First Man, Babylon",
        saturation_range=(45, 75),
        harmony_types=(H.ANALOGOUS, H.COMPLEMENTARY, H.TRIADIC),
        zone_characters=(T.HIGH_KEY, T.BALANCED),
        hue_ranges=((30, 60), (270, 300), (180, 210)),
        luminance_balance="highlight-heavy",
        contrast_preference="medium",
    ),
    StyleProfile(
        id="fraser",
        name="Greig Fraser",
        notable="Dune, The Batman, Rogue One",
        saturation_range=(15, 40),
        harmony_types=(H.MONOCHROMATIC, H.ANALOGOUS, H.ACHROMATIC),
        zone_characters=(T.LOW_KEY, T.COMPRESSED, T.FULL_RANGE),
        hue_ranges=((30, 60), (0, 30)),
        luminance_balance="shadow-heavy",
        contrast_preference="atmospheric",
    ),
)


def get_profile(profile_id: str) -> StyleProfile:
    """Look up a reference profile by its id."""
    for profile in REFERENCE_PROFILES:
        if profile.id == profile_id:
            return profile
    raise KeyError(f"No style profile with ID '{profile_id}'")
