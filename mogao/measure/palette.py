# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Palette assembly from cluster centroids.

Each centroid becomes a ColorInfo:
1. Optionally brightened (PCCS restoration) in HSL space
2. Encoded as hex and CMYK
3. Weighted by its share of the sampled pixels

Colors are returned ordered by share (most dominant first). Centroids that
ended up with no samples are kept by default with a 0.0 share, so the palette
length equals the requested color count.
"""

from __future__ import annotations

from typing import Sequence

from mogao.schema import CMYK, RGB, ColorInfo
from mogao.measure.colorspace import brighten_rgb, rgb_to_cmyk, rgb_to_hex
from mogao.measure.kmeans import Centroid


def transform(rgb: tuple[int, int, int], brighten: bool = False) -> tuple[str, RGB, CMYK]:
    """
    Encode one centroid color.

    Brightening happens before encoding, so hex, rgb and cmyk all describe
    the same (possibly brightened) color.

    Args:
        rgb: (r, g, b) channels
        brighten: Apply the PCCS brighten transform first

    Returns:
        (hex, RGB, CMYK)
    """
    r, g, b = (max(0, min(255, int(v))) for v in rgb)
    if brighten:
        r, g, b = brighten_rgb(r, g, b)
    c, m, y, k = rgb_to_cmyk(r, g, b)
    return rgb_to_hex(r, g, b), RGB(r, g, b), CMYK(c, m, y, k)


def assemble(
    centroids: Sequence[Centroid],
    total_samples: int,
    brighten: bool = False,
    keep_empty: bool = True,
) -> tuple[ColorInfo, ...]:
    """
    Build the ordered palette from clustered centroids.

    Args:
        centroids: Final centroids with their sample counts
        total_samples: Number of samples that were clustered
        brighten: Apply the PCCS brighten transform to every color
        keep_empty: Keep zero-count centroids (percentage 0.0)

    Returns:
        Tuple of ColorInfo, non-increasing in percentage. Ties keep
        centroid order. Empty when total_samples is 0.
    """
    if total_samples <= 0:
        return ()

    colors = []
    for centroid in centroids:
        if centroid.count == 0 and not keep_empty:
            continue
        hex_value, rgb, cmyk = transform(centroid.rgb, brighten=brighten)
        colors.append(ColorInfo(
            hex=hex_value,
            rgb=rgb,
            cmyk=cmyk,
            percentage=round(100.0 * centroid.count / total_samples, 1),
        ))

    # sorted() is stable: equal shares keep emission order
    return tuple(sorted(colors, key=lambda c: c.percentage, reverse=True))
