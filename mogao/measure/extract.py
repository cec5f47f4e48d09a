# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Main palette extraction API.

This is the primary entry point for Mogao's extraction core.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from mogao.errors import DecodeFailure
from mogao.schema import ColorInfo, ProcessingSettings
from mogao.measure.kmeans import DEFAULT_MAX_ITERATIONS, InitStrategy, cluster
from mogao.measure.palette import assemble
from mogao.measure.sampling import PixelBuffer, sample

logger = logging.getLogger(__name__)

# Larger side of the image after downscaling, before sampling
DEFAULT_MAX_DIMENSION = 200

ImageSource = Union[str, Path, bytes, Image.Image, NDArray[np.uint8]]


def extract_colors(
    image: ImageSource,
    settings: Union[ProcessingSettings, dict, None] = None,
    *,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    init: Optional[InitStrategy] = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    keep_empty: bool = True,
) -> tuple[ColorInfo, ...]:
    """
    Extract a palette of representative colors from an image.

    This is the primary API for Mogao. The whole pipeline runs synchronously:
    decode → downscale → sample → cluster → assemble.

    Args:
        image: One of:
            - Path to an image file (str or Path)
            - Encoded image bytes (PNG, JPEG, ...)
            - A PIL Image
            - NumPy array of shape (H, W, 4) RGBA or (H, W, 3) RGB, uint8.
              RGB arrays are treated as fully opaque.
        settings: ProcessingSettings, or a dict accepted by
            ProcessingSettings.from_dict (default: ProcessingSettings())
        max_dimension: Downscale so the larger side is at most this many
            pixels (default: 200). Set to 0 to disable downscaling.
        init: k-means seeding strategy (default: evenly spaced samples)
        max_iterations: Maximum k-means iterations (default: 20)
        keep_empty: Keep centroids that received no samples (default: True)

    Returns:
        Tuple of ColorInfo ordered by percentage, most dominant first.
        Empty if no pixel survives filtering (fully transparent or fully
        neutral with ignore_grayscale).

    Raises:
        InvalidSettings: If settings are out of bounds (checked before decoding)
        DecodeFailure: If the image cannot be decoded to pixels
        TypeError: If image is not a supported type

    Example:
        >>> from mogao import extract_colors, ProcessingSettings
        >>> palette = extract_colors("mural.jpg", ProcessingSettings(color_count=5))
        >>> palette[0].hex
        '#A84C32'
    """
    if settings is None:
        settings = ProcessingSettings()
    elif isinstance(settings, dict):
        settings = ProcessingSettings.from_dict(settings)

    pixels = load_rgba(image)
    pixels = downscale(pixels, max_dimension)
    height, width = pixels.shape[:2]

    return extract_palette(
        pixels,
        width,
        height,
        settings,
        init=init,
        max_iterations=max_iterations,
        keep_empty=keep_empty,
    )


def extract_palette(
    pixels: PixelBuffer,
    width: int,
    height: int,
    settings: ProcessingSettings,
    *,
    init: Optional[InitStrategy] = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    keep_empty: bool = True,
) -> tuple[ColorInfo, ...]:
    """
    Run sample → cluster → assemble on an already decoded RGBA buffer.

    No downscaling or IO happens here.

    Args:
        pixels: (H, W, 4) uint8 array or flat RGBA buffer
        width: Image width
        height: Image height
        settings: Processing settings
        init: k-means seeding strategy
        max_iterations: Maximum k-means iterations
        keep_empty: Keep zero-count centroids

    Returns:
        Ordered tuple of ColorInfo (possibly empty)
    """
    samples = sample(pixels, width, height, settings)
    if len(samples) == 0:
        logger.info("No opaque chromatic pixels to sample, returning empty palette")
        return ()

    centroids = cluster(
        samples,
        k=settings.color_count,
        max_iterations=max_iterations,
        init=init,
    )
    return assemble(
        centroids,
        total_samples=len(samples),
        brighten=settings.brighten,
        keep_empty=keep_empty,
    )


def load_rgba(image: ImageSource) -> NDArray[np.uint8]:
    """
    Decode an image source into an (H, W, 4) uint8 RGBA array.

    Raises:
        DecodeFailure: If the source cannot be decoded
        TypeError: If the source type is not supported
    """
    if isinstance(image, np.ndarray):
        return _validate_array(image)

    if isinstance(image, Image.Image):
        try:
            return _pil_to_rgba(image)
        except (Image.DecompressionBombError, OSError, ValueError) as e:
            raise DecodeFailure(f"Could not decode image: {e}") from e

    if isinstance(image, (str, Path)):
        source = image
    elif isinstance(image, (bytes, bytearray)):
        source = io.BytesIO(image)
    else:
        raise TypeError(
            f"Expected file path, bytes, PIL Image or numpy array, got {type(image)}"
        )

    try:
        with Image.open(source) as img:
            img.load()
            return _pil_to_rgba(img)
    except (
        UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError
    ) as e:
        raise DecodeFailure(f"Could not decode image: {e}") from e


def downscale(pixels: NDArray[np.uint8], max_dimension: int) -> NDArray[np.uint8]:
    """
    Shrink an RGBA image so its larger side is at most max_dimension.

    Aspect ratio is preserved (each side at least 1 pixel). Uses Lanczos
    resampling. Images already within bounds are returned unchanged.
    """
    if max_dimension <= 0:
        return pixels

    height, width = pixels.shape[:2]
    longest = max(height, width)
    if longest <= max_dimension:
        return pixels

    scale = max_dimension / longest
    new_width = max(1, int(round(width * scale)))
    new_height = max(1, int(round(height * scale)))

    img = Image.fromarray(np.ascontiguousarray(pixels))
    img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)
    logger.debug("Downscaled %dx%d to %dx%d", width, height, new_width, new_height)
    return np.array(img, dtype=np.uint8)


def _pil_to_rgba(img: Image.Image) -> NDArray[np.uint8]:
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return np.array(img, dtype=np.uint8)


def _validate_array(pixels: NDArray) -> NDArray[np.uint8]:
    if pixels.dtype != np.uint8:
        raise DecodeFailure(f"Expected uint8 array, got {pixels.dtype}")
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise DecodeFailure(
            f"Expected (H, W, 4) or (H, W, 3) array, got shape {pixels.shape}"
        )
    if pixels.shape[2] == 3:
        alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([pixels, alpha], axis=2)
    return pixels
