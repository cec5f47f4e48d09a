# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Schema definitions for extracted palettes.

All types in this module are immutable (frozen dataclasses).
Naming enrichment produces new records rather than altering measured ones.
"""

from mogao.schema.color_info import (
    CMYK,
    MAX_COLOR_COUNT,
    MAX_SAMPLE_PRECISION,
    MIN_COLOR_COUNT,
    MIN_SAMPLE_PRECISION,
    RGB,
    ColorInfo,
    PigmentName,
    ProcessingSettings,
)

__all__ = [
    # Measured color
    "RGB",
    "CMYK",
    "ColorInfo",
    # Naming collaborator records
    "PigmentName",
    # Input configuration
    "ProcessingSettings",
    "MIN_COLOR_COUNT",
    "MAX_COLOR_COUNT",
    "MIN_SAMPLE_PRECISION",
    "MAX_SAMPLE_PRECISION",
]
