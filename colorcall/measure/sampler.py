# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Image decoding and pixel sampling.

Every analysis stage reads from a SampledPixelSet: a downscaled, strided,
opaque-only view of the image. Sampling is deterministic; the same image
and settings always yield the same pixels in the same order.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image

logger = logging.getLogger(__name__)

ImageInput = Union[str, Path, bytes, bytearray, Image.Image, NDArray[np.uint8]]

# Working size for color and zone analysis
DEFAULT_MAX_DIMENSION = 400
# Smaller working size for weight analysis, which keeps coordinates
WEIGHT_MAX_DIMENSION = 200
DEFAULT_STRIDE = 4
# Pixels at or below this alpha (about 50% opacity) are ignored
ALPHA_THRESHOLD = 128


class ImageDecodeError(Exception):
    """The image could not be decoded into pixels."""


@dataclass(frozen=True, eq=False)
class SampledPixelSet:
    """
    Opaque pixels sampled from one image.

    Arrays are read-only copies of the ones passed in. ``positions`` holds
    (x, y) pixel coordinates in the downscaled image and is only present
    when coordinates were kept.

    Attributes:
        rgb: (N, 3) uint8 array of opaque pixels, raster order
        width: Width of the downscaled image
        height: Height of the downscaled image
        positions: Optional (N, 2) int array of (x, y) coordinates
    """
    rgb: NDArray[np.uint8]
    width: int
    height: int
    positions: Optional[NDArray[np.int64]] = None

    def __post_init__(self) -> None:
        if self.rgb.ndim != 2 or self.rgb.shape[1] != 3:
            raise ValueError(f"Expected (N, 3) pixel array, got shape {self.rgb.shape}")
        if self.positions is not None and self.positions.shape != (len(self.rgb), 2):
            raise ValueError(
                f"Expected ({len(self.rgb)}, 2) position array, "
                f"got shape {self.positions.shape}"
            )
        # Freeze private copies; the caller's arrays stay writable
        object.__setattr__(self, "rgb", self.rgb.copy())
        self.rgb.setflags(write=False)
        if self.positions is not None:
            object.__setattr__(self, "positions", self.positions.copy())
            self.positions.setflags(write=False)

    def __len__(self) -> int:
        return len(self.rgb)

    @property
    def is_empty(self) -> bool:
        return len(self.rgb) == 0

    @classmethod
    def from_rgb(cls, rgb: NDArray, width: int = 0, height: int = 0) -> SampledPixelSet:
        """Wrap a bare (N, 3) array, e.g. pixels that were sampled elsewhere."""
        arr = np.array(rgb, dtype=np.uint8).reshape(-1, 3)
        return cls(rgb=arr, width=width, height=height)


def load_image(image: ImageInput) -> NDArray[np.uint8]:
    """
    Decode an image into an RGBA pixel array.

    Args:
        image: One of:
            - Path to an image file (str or Path)
            - Encoded image bytes (PNG, JPEG, WEBP, ...)
            - A Pillow Image
            - NumPy uint8 array of shape (H, W, 3) or (H, W, 4)

    Returns:
        uint8 array of shape (H, W, 4)

    Raises:
        ImageDecodeError: Pillow could not open or decode the data
        ValueError: Array input has the wrong shape or dtype
        TypeError: Unsupported input type
    """
    if isinstance(image, np.ndarray):
        return _validate_array(image)

    if isinstance(image, Image.Image):
        return np.array(image.convert("RGBA"), dtype=np.uint8)

    if isinstance(image, (bytes, bytearray)):
        source = io.BytesIO(bytes(image))
    elif isinstance(image, (str, Path)):
        source = image
    else:
        raise TypeError(
            f"Expected file path, bytes, PIL image or numpy array, got {type(image)}"
        )

    try:
        with Image.open(source) as img:
            img.load()
            rgba = img.convert("RGBA")
    except (OSError, SyntaxError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"Failed to decode image: {exc}") from exc

    return np.array(rgba, dtype=np.uint8)


def _validate_array(pixels: NDArray) -> NDArray[np.uint8]:
    """Check an array input and give it an alpha channel if it lacks one."""
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(
            f"Expected (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}"
        )
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 array, got {pixels.dtype}")

    if pixels.shape[2] == 3:
        alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([pixels, alpha], axis=2)
    return pixels


def sample(
    image: ImageInput,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    *,
    stride: int = DEFAULT_STRIDE,
    alpha_threshold: int = ALPHA_THRESHOLD,
    keep_coordinates: bool = False,
) -> SampledPixelSet:
    """
    Sample opaque pixels from an image.

    The image is scaled down (never up) so its longer side is at most
    ``max_dimension``, preserving aspect ratio. Pixels are then visited in
    raster order taking every ``stride``-th one, and any pixel whose alpha
    is at or below ``alpha_threshold`` is dropped.

    Args:
        image: Anything ``load_image`` accepts (decoded arrays are not re-decoded)
        max_dimension: Cap for the longer side of the working image
        stride: Take every n-th pixel (1 = all pixels)
        alpha_threshold: Minimum alpha (exclusive) for a pixel to count
        keep_coordinates: Record (x, y) of each kept pixel

    Returns:
        SampledPixelSet, possibly empty for fully transparent images

    Raises:
        ImageDecodeError: The image could not be decoded
    """
    if max_dimension < 1:
        raise ValueError(f"max_dimension must be >= 1, got {max_dimension}")
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")

    rgba = load_image(image)
    height, width = rgba.shape[:2]

    if height == 0 or width == 0:
        return _empty_set(0, 0, keep_coordinates)

    scale = min(max_dimension / width, max_dimension / height, 1.0)
    if scale < 1.0:
        new_width = max(1, int(width * scale))
        new_height = max(1, int(height * scale))
        rgba = _downsample(rgba, new_width, new_height)
        height, width = new_height, new_width

    flat = rgba.reshape(-1, 4)
    indices = np.arange(0, len(flat), stride)
    picked = flat[indices]
    opaque = picked[:, 3] > alpha_threshold

    rgb = np.ascontiguousarray(picked[opaque, :3])
    positions = None
    if keep_coordinates:
        kept = indices[opaque]
        positions = np.column_stack([kept % width, kept // width]).astype(np.int64)

    logger.debug(
        "Sampled %d opaque pixels from %dx%d (stride %d)",
        len(rgb), width, height, stride,
    )
    return SampledPixelSet(rgb=rgb, width=width, height=height, positions=positions)


def _empty_set(width: int, height: int, keep_coordinates: bool) -> SampledPixelSet:
    positions = np.empty((0, 2), dtype=np.int64) if keep_coordinates else None
    return SampledPixelSet(
        rgb=np.empty((0, 3), dtype=np.uint8),
        width=width,
        height=height,
        positions=positions,
    )


def _downsample(
    rgba: NDArray[np.uint8],
    new_width: int,
    new_height: int,
) -> NDArray[np.uint8]:
    """Downsample an RGBA array using PIL (Lanczos)."""
    img = Image.fromarray(rgba)
    img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)
    return np.array(img, dtype=np.uint8)
