# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Conversion paths:
- RGB → hex (#RRGGBB, uppercase)
- RGB → CMYK (naive device formula, no ICC profile)
- RGB ↔ HSL (standard piecewise formulas)
- PCCS brighten: RGB → HSL → lift saturation/lightness → RGB

HSL conversions are pure NumPy and accept arrays of shape (..., 3),
so a whole palette can be converted in one call.

Rounding is half-up (x.5 → x+1) everywhere an integer channel is produced.
"""

from __future__ import annotations

import re

import numpy as np
from numpy.typing import ArrayLike, NDArray


# PCCS brighten parameters
BRIGHTEN_SATURATION_GAIN = 1.4
BRIGHTEN_SATURATION_OFFSET = 0.1
BRIGHTEN_LIGHTNESS_GAIN = 1.1
BRIGHTEN_LIGHTNESS_OFFSET = 0.05
BRIGHTEN_LIGHTNESS_CAP = 0.95

_HEX6_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")
_HEX3_RE = re.compile(r"^#?([0-9a-fA-F]{3})$")


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def _clamp_channel(value: float) -> int:
    return max(0, min(255, int(value)))


# =============================================================================
# Hex
# =============================================================================


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """
    Encode RGB channels as an uppercase hex string.

    Channels are clamped to [0, 255] before encoding.

    Returns:
        Hex string like "#C80000"
    """
    r, g, b = _clamp_channel(r), _clamp_channel(g), _clamp_channel(b)
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """
    Parse a hex color string.

    Accepts "#RRGGBB", "RRGGBB", "#RGB" and "RGB" in any case.

    Raises:
        ValueError: If the string is not a hex color.
    """
    text = hex_color.strip()
    m = _HEX6_RE.match(text)
    if m:
        digits = m.group(1)
    else:
        m = _HEX3_RE.match(text)
        if not m:
            raise ValueError(f"Not a hex color: {hex_color!r}")
        digits = "".join(ch * 2 for ch in m.group(1))
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


# =============================================================================
# CMYK
# =============================================================================


def rgb_to_cmyk(r: int, g: int, b: int) -> tuple[int, int, int, int]:
    """
    Convert RGB to CMYK integer percentages.

    Pure black maps to (0, 0, 0, 100). Otherwise:
        c' = 1 - r/255, m' = 1 - g/255, y' = 1 - b/255
        k' = min(c', m', y')
        c = round(100 * (c' - k') / (1 - k'))   (same for m, y)
        k = round(100 * k')

    Returns:
        (c, m, y, k), each an integer in [0, 100]
    """
    if r == 0 and g == 0 and b == 0:
        return 0, 0, 0, 100

    c1 = 1.0 - r / 255.0
    m1 = 1.0 - g / 255.0
    y1 = 1.0 - b / 255.0
    k1 = min(c1, m1, y1)
    scale = 1.0 - k1

    c = _round_half_up(100.0 * (c1 - k1) / scale)
    m = _round_half_up(100.0 * (m1 - k1) / scale)
    y = _round_half_up(100.0 * (y1 - k1) / scale)
    k = _round_half_up(100.0 * k1)
    return c, m, y, k


# =============================================================================
# RGB ↔ HSL
# =============================================================================


def rgb_to_hsl(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert RGB [0,255] to HSL.

    - Lightness is the midpoint of the max and min channel.
    - Saturation is chroma relative to lightness, split at L = 0.5.
    - Hue is piecewise on which channel is the maximum (red wins ties,
      then green).

    Args:
        rgb: Array of shape (..., 3) with RGB values [0, 255]

    Returns:
        Array of shape (..., 3) with (H, S, L):
        - H: Hue in degrees [0, 360), 0 for achromatic colors
        - S: Saturation [0, 1]
        - L: Lightness [0, 1]
    """
    rgb = np.asarray(rgb, dtype=np.float64) / 255.0

    r = rgb[..., 0]
    g = rgb[..., 1]
    b = rgb[..., 2]

    mx = np.max(rgb, axis=-1)
    mn = np.min(rgb, axis=-1)
    chroma = mx - mn
    L = (mx + mn) / 2.0

    chromatic = chroma > 0
    # Denominators are only used where chroma > 0, keep them non-zero elsewhere
    safe_chroma = np.where(chromatic, chroma, 1.0)
    s_denom = np.where(L <= 0.5, mx + mn, 2.0 - mx - mn)
    safe_s_denom = np.where(chromatic, s_denom, 1.0)

    S = np.where(chromatic, chroma / safe_s_denom, 0.0)

    h_red = ((g - b) / safe_chroma) % 6.0
    h_green = (b - r) / safe_chroma + 2.0
    h_blue = (r - g) / safe_chroma + 4.0
    H = np.where(mx == r, h_red, np.where(mx == g, h_green, h_blue))
    H = np.where(chromatic, (H * 60.0) % 360.0, 0.0)

    return np.stack([H, S, L], axis=-1)


def hsl_to_rgb(hsl: ArrayLike) -> NDArray[np.float64]:
    """
    Convert HSL to RGB [0,255] (unrounded).

    Uses the sector-free form:
        a = S * min(L, 1 - L)
        f(n) = L - a * max(-1, min(k - 3, 9 - k, 1)),  k = (n + H/30) mod 12
        (R, G, B) = (f(0), f(8), f(4)) * 255

    Args:
        hsl: Array of shape (..., 3) with (H degrees, S [0,1], L [0,1])

    Returns:
        Array of shape (..., 3) with float RGB values in [0, 255]
    """
    hsl = np.asarray(hsl, dtype=np.float64)

    H = hsl[..., 0] % 360.0
    S = np.clip(hsl[..., 1], 0.0, 1.0)
    L = np.clip(hsl[..., 2], 0.0, 1.0)

    a = S * np.minimum(L, 1.0 - L)

    def f(n: float) -> NDArray[np.float64]:
        k = (n + H / 30.0) % 12.0
        return L - a * np.maximum(-1.0, np.minimum(np.minimum(k - 3.0, 9.0 - k), 1.0))

    rgb = np.stack([f(0.0), f(8.0), f(4.0)], axis=-1)
    return np.clip(rgb * 255.0, 0.0, 255.0)


# =============================================================================
# PCCS Brighten
# =============================================================================


def brighten_hsl(hsl: ArrayLike) -> NDArray[np.float64]:
    """
    Lift saturation and lightness to simulate restored (unfaded) pigment.

        S' = min(1, S * 1.4 + 0.1)
        L' = min(0.95, L * 1.1 + 0.05)

    Hue is unchanged.

    Args:
        hsl: Array of shape (..., 3) with (H, S, L)

    Returns:
        Array of shape (..., 3) with brightened (H, S', L')
    """
    hsl = np.asarray(hsl, dtype=np.float64)
    H = hsl[..., 0]
    S = np.minimum(1.0, hsl[..., 1] * BRIGHTEN_SATURATION_GAIN + BRIGHTEN_SATURATION_OFFSET)
    L = np.minimum(
        BRIGHTEN_LIGHTNESS_CAP,
        hsl[..., 2] * BRIGHTEN_LIGHTNESS_GAIN + BRIGHTEN_LIGHTNESS_OFFSET,
    )
    return np.stack([H, S, L], axis=-1)


def brighten_rgb(r: int, g: int, b: int) -> tuple[int, int, int]:
    """
    Apply the PCCS brighten transform to a single RGB color.

    RGB → HSL → brighten_hsl → RGB, rounded to the nearest integer
    and clamped to [0, 255].
    """
    hsl = rgb_to_hsl(np.array([r, g, b], dtype=np.float64))
    rgb = hsl_to_rgb(brighten_hsl(hsl))
    rounded = np.clip(np.floor(rgb + 0.5), 0, 255).astype(int)
    return int(rounded[0]), int(rounded[1]), int(rounded[2])
