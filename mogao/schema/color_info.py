# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
ColorInfo -- Canonical record for an extracted palette color.

Design principles:
- Immutable: All types are frozen dataclasses
- Deterministic: Same pixels + same settings → same palette
- Patchable: Naming metadata arrives later as a new record, never a mutation
- Serializable: JSON-ready with the keys palette consumers already expect

A ColorInfo is "un-enriched" when it carries only the measured fields
(hex, rgb, cmyk, percentage) and "enriched" once a naming collaborator
has supplied the traditional pigment name fields. Both are the same type.
"""

from __future__ import annotations

import json
import numbers
import re
from dataclasses import dataclass, replace
from typing import Optional

from mogao.errors import InvalidSettings


# =============================================================================
# Bounds
# =============================================================================

MIN_COLOR_COUNT = 3
MAX_COLOR_COUNT = 12
MIN_SAMPLE_PRECISION = 1
MAX_SAMPLE_PRECISION = 10

_HEX_RE = re.compile(r"^#[0-9A-F]{6}$")


# =============================================================================
# Color Components
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGB:
    """
    An sRGB color with 8-bit integer channels.

    Attributes:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)
    """
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        """Validate channels are 8-bit integers."""
        for channel, value in (("r", self.r), ("g", self.g), ("b", self.b)):
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {channel} must be 0-255, got {value}")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"r": self.r, "g": self.g, "b": self.b}

    @classmethod
    def from_dict(cls, data: dict) -> RGB:
        """Deserialize from dictionary."""
        return cls(r=int(data["r"]), g=int(data["g"]), b=int(data["b"]))


@dataclass(frozen=True, slots=True)
class CMYK:
    """
    Print-oriented CMYK percentages (uncalibrated, no ICC profile).

    Attributes:
        c, m, y, k: Integer percentages (0-100)
    """
    c: int
    m: int
    y: int
    k: int

    def __post_init__(self) -> None:
        """Validate components are percentages."""
        for component, value in (
            ("c", self.c), ("m", self.m), ("y", self.y), ("k", self.k)
        ):
            if not 0 <= value <= 100:
                raise ValueError(
                    f"Component {component} must be 0-100, got {value}"
                )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"c": self.c, "m": self.m, "y": self.y, "k": self.k}

    @classmethod
    def from_dict(cls, data: dict) -> CMYK:
        """Deserialize from dictionary."""
        return cls(
            c=int(data["c"]), m=int(data["m"]), y=int(data["y"]), k=int(data["k"])
        )


# =============================================================================
# Palette Color
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorInfo:
    """
    One representative color of an image palette.

    The measured fields are produced by the extraction core and never change
    once emitted. The naming fields are optional and filled in by a naming
    collaborator through ``with_names``, which returns a new record.

    Attributes:
        hex: Uppercase hex string like "#C80000"
        rgb: 8-bit RGB channels
        cmyk: CMYK percentages
        percentage: Share of sampled pixels in this cluster (0-100, 1 decimal)
        name: Traditional Chinese pigment name (e.g., "朱砂")
        en_name: English pigment name (e.g., "Cinnabar")
        pinyin: Pinyin romanization of ``name``
        description: Cultural note on the pigment's use
    """
    hex: str
    rgb: RGB
    cmyk: CMYK
    percentage: float
    name: Optional[str] = None
    en_name: Optional[str] = None
    pinyin: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate measured fields."""
        if not _HEX_RE.match(self.hex):
            raise ValueError(f"hex must look like '#RRGGBB' (uppercase), got {self.hex!r}")
        if not 0.0 <= self.percentage <= 100.0:
            raise ValueError(f"percentage must be 0-100, got {self.percentage}")

    @property
    def is_enriched(self) -> bool:
        """True once a naming collaborator has supplied a pigment name."""
        return self.name is not None

    def with_names(
        self,
        *,
        name: Optional[str] = None,
        en_name: Optional[str] = None,
        pinyin: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ColorInfo:
        """
        Return a copy with naming fields patched in.

        Arguments left as None keep the current value, so a partial
        record never erases names supplied earlier.
        """
        return replace(
            self,
            name=name if name is not None else self.name,
            en_name=en_name if en_name is not None else self.en_name,
            pinyin=pinyin if pinyin is not None else self.pinyin,
            description=description if description is not None else self.description,
        )

    def to_dict(self) -> dict:
        """
        Serialize to dictionary.

        Optional naming fields are omitted when absent.
        """
        d = {
            "hex": self.hex,
            "rgb": self.rgb.to_dict(),
            "cmyk": self.cmyk.to_dict(),
            "percentage": self.percentage,
        }
        if self.name is not None:
            d["name"] = self.name
        if self.en_name is not None:
            d["enName"] = self.en_name
        if self.pinyin is not None:
            d["pinyin"] = self.pinyin
        if self.description is not None:
            d["description"] = self.description
        return d

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> ColorInfo:
        """Deserialize from dictionary."""
        return cls(
            hex=data["hex"],
            rgb=RGB.from_dict(data["rgb"]),
            cmyk=CMYK.from_dict(data["cmyk"]),
            percentage=float(data["percentage"]),
            name=data.get("name"),
            en_name=data.get("enName"),
            pinyin=data.get("pinyin"),
            description=data.get("description"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> ColorInfo:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))


# =============================================================================
# Naming Records
# =============================================================================


@dataclass(frozen=True, slots=True)
class PigmentName:
    """
    A naming record returned by a naming collaborator.

    Attributes:
        hex: Hex of the color this record names (matched case-insensitively)
        name: Traditional Chinese pigment name
        en_name: English pigment name
        pinyin: Optional Pinyin romanization
        description: Optional cultural description
    """
    hex: str
    name: str
    en_name: str
    pinyin: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> PigmentName:
        """
        Deserialize from a collaborator record.

        Raises:
            ValueError: If a required key (hex, name, enName) is missing
                or not a string.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Naming record must be an object, got {type(data).__name__}")
        for key in ("hex", "name", "enName"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"Naming record missing string field {key!r}")
        return cls(
            hex=data["hex"],
            name=data["name"],
            en_name=data["enName"],
            pinyin=data.get("pinyin"),
            description=data.get("description"),
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        d = {"hex": self.hex, "name": self.name, "enName": self.en_name}
        if self.pinyin is not None:
            d["pinyin"] = self.pinyin
        if self.description is not None:
            d["description"] = self.description
        return d


# =============================================================================
# Processing Settings
# =============================================================================


@dataclass(frozen=True, slots=True)
class ProcessingSettings:
    """
    User-facing extraction settings.

    Attributes:
        color_count: Number of palette colors (k), 3-12
        sample_precision: Sampling density, 1 (coarsest) to 10 (every pixel)
        brighten: Apply the PCCS brighten transform (pigment restoration)
        ignore_grayscale: Skip near-neutral pixels (background, ink lines)
    """
    color_count: int = 6
    sample_precision: int = 5
    brighten: bool = False
    ignore_grayscale: bool = True

    def __post_init__(self) -> None:
        """Reject settings outside documented bounds."""
        for attr in ("color_count", "sample_precision"):
            value = getattr(self, attr)
            # bool is an int subclass but never a meaningful count
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidSettings(
                    f"{attr} must be an integer, got {type(value).__name__} {value!r}"
                )
        if not MIN_COLOR_COUNT <= self.color_count <= MAX_COLOR_COUNT:
            raise InvalidSettings(
                f"color_count must be {MIN_COLOR_COUNT}-{MAX_COLOR_COUNT}, "
                f"got {self.color_count}"
            )
        if not MIN_SAMPLE_PRECISION <= self.sample_precision <= MAX_SAMPLE_PRECISION:
            raise InvalidSettings(
                f"sample_precision must be {MIN_SAMPLE_PRECISION}-"
                f"{MAX_SAMPLE_PRECISION}, got {self.sample_precision}"
            )

    def to_dict(self) -> dict:
        """Serialize to dictionary (camelCase keys)."""
        return {
            "colorCount": self.color_count,
            "samplePrecision": self.sample_precision,
            "brighten": self.brighten,
            "ignoreGrayscale": self.ignore_grayscale,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ProcessingSettings:
        """Deserialize from dictionary with camelCase or snake_case keys."""
        kwargs = {}
        for attr, camel in (
            ("color_count", "colorCount"),
            ("sample_precision", "samplePrecision"),
            ("brighten", "brighten"),
            ("ignore_grayscale", "ignoreGrayscale"),
        ):
            if camel in data:
                kwargs[attr] = data[camel]
            elif attr in data:
                kwargs[attr] = data[attr]
        return cls(**kwargs)
