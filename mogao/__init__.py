# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Mogao -- Representative color extraction for mural photographs.

Samples pixels from an image, clusters them into a small palette with
k-means, and reports each color as hex, RGB and CMYK with its share of
the image. Palettes can optionally be named after traditional Dunhuang
pigments.

Quick start::

    from mogao import extract_colors, ProcessingSettings

    palette = extract_colors("mural.jpg", ProcessingSettings(color_count=6))
    palette[0].hex         # "#A84C32"
    palette[0].percentage  # 31.4
    palette[0].to_json()
"""

from __future__ import annotations

__version__ = "1.0.0"

from mogao.errors import DecodeFailure, EnrichmentFailure, InvalidSettings, MogaoError
from mogao.measure import extract_colors, extract_palette
from mogao.naming import enrich
from mogao.runtime import ExtractionSession
from mogao.schema import (
    CMYK,
    RGB,
    ColorInfo,
    PigmentName,
    ProcessingSettings,
)

__all__ = [
    # Core API
    "extract_colors",
    "extract_palette",
    "enrich",
    "ExtractionSession",
    # Types
    "ColorInfo",
    "RGB",
    "CMYK",
    "PigmentName",
    "ProcessingSettings",
    # Errors
    "MogaoError",
    "DecodeFailure",
    "InvalidSettings",
    "EnrichmentFailure",
    # Version
    "__version__",
]
