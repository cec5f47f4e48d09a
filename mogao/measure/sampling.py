# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Pixel sampling from a decoded RGBA buffer.

Visits every ``step``-th pixel in row-major scan order, where the step is
derived from the sample precision setting, and keeps only opaque pixels
(and, optionally, only chromatic ones). Output order is scan order.
"""

from __future__ import annotations

import logging
from typing import Union

import numpy as np
from numpy.typing import NDArray

from mogao.schema import MAX_SAMPLE_PRECISION, ProcessingSettings

logger = logging.getLogger(__name__)

# Pixels with alpha below this are background
ALPHA_THRESHOLD = 128

# max(r,g,b) - min(r,g,b) below this counts as neutral (gray, paper, ink)
GRAYSCALE_THRESHOLD = 20

PixelBuffer = Union[bytes, bytearray, memoryview, NDArray[np.uint8]]


def sampling_step(sample_precision: int) -> int:
    """Pixel stride for a precision level: 10 → 1 (every pixel), 1 → 10."""
    return max(1, MAX_SAMPLE_PRECISION + 1 - sample_precision)


def sample(
    pixels: PixelBuffer,
    width: int,
    height: int,
    settings: ProcessingSettings,
) -> NDArray[np.uint8]:
    """
    Sample opaque (and optionally chromatic) pixels from an RGBA buffer.

    Args:
        pixels: Row-major RGBA pixels, either an (H, W, 4) uint8 array or a
            flat buffer of width * height * 4 bytes
        width: Image width in pixels
        height: Image height in pixels
        settings: Uses sample_precision and ignore_grayscale

    Returns:
        Array of shape (N, 3) with uint8 RGB samples in scan order.
        N may be 0.

    Raises:
        ValueError: If the buffer size does not match width x height RGBA.
    """
    rgba = _as_rgba_rows(pixels, width, height)

    step = sampling_step(settings.sample_precision)
    visited = rgba[::step]

    keep = visited[:, 3] >= ALPHA_THRESHOLD
    if settings.ignore_grayscale:
        rgb = visited[:, :3].astype(np.int16)
        spread = rgb.max(axis=1) - rgb.min(axis=1)
        keep &= spread >= GRAYSCALE_THRESHOLD

    samples = np.ascontiguousarray(visited[keep, :3])
    logger.debug(
        "Sampled %d of %d pixels (step=%d, ignore_grayscale=%s)",
        len(samples), len(rgba), step, settings.ignore_grayscale,
    )
    return samples


def _as_rgba_rows(pixels: PixelBuffer, width: int, height: int) -> NDArray[np.uint8]:
    """Flatten a pixel buffer to an (H*W, 4) uint8 array."""
    if width < 0 or height < 0:
        raise ValueError(f"Invalid dimensions {width}x{height}")

    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {pixels.dtype}")
        arr = pixels
    else:
        arr = np.frombuffer(pixels, dtype=np.uint8)

    expected = width * height * 4
    if arr.size != expected:
        raise ValueError(
            f"Buffer has {arr.size} bytes, expected {expected} "
            f"for {width}x{height} RGBA"
        )
    if arr.ndim == 3 and arr.shape != (height, width, 4):
        raise ValueError(
            f"Expected ({height}, {width}, 4) array, got shape {arr.shape}"
        )
    return arr.reshape(-1, 4)
