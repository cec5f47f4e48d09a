# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Extraction core for Mogao.

This module provides deterministic palette extraction from images.
All operations are pixel-based; naming happens elsewhere.
"""

from mogao.measure.extract import extract_colors, extract_palette

__all__ = ["extract_colors", "extract_palette"]
