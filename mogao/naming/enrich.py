# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Naming enrichment of extracted palettes.

Enrichment runs strictly after a palette is complete. It is best-effort:
if the naming provider fails, the measured palette is returned unchanged.
Records are matched back to palette colors by case-insensitive hex.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol, Sequence, Union

from mogao.errors import EnrichmentFailure
from mogao.schema import ColorInfo, PigmentName

logger = logging.getLogger(__name__)

NamingRecord = Union[PigmentName, Mapping[str, Any]]


class NamingProvider(Protocol):
    """Anything that can name a batch of hex colors."""

    def name_colors(self, hexes: Sequence[str]) -> Sequence[NamingRecord]:
        ...


def apply_names(
    colors: Sequence[ColorInfo],
    records: Sequence[NamingRecord],
) -> tuple[ColorInfo, ...]:
    """
    Patch naming records onto palette colors.

    Matching is by case-insensitive hex equality; the first record for a hex
    wins. Colors without a matching record keep their current name fields.
    Measured fields and palette order are never changed.

    Raises:
        EnrichmentFailure: If any record is malformed.
    """
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        raise EnrichmentFailure(
            f"Naming records must be a list, got {type(records).__name__}"
        )

    by_hex: dict[str, PigmentName] = {}
    for record in records:
        pigment = _to_pigment(record)
        by_hex.setdefault(pigment.hex.strip().lower(), pigment)

    enriched = []
    for color in colors:
        pigment = by_hex.get(color.hex.lower())
        if pigment is None:
            enriched.append(color)
            continue
        enriched.append(color.with_names(
            name=pigment.name,
            en_name=pigment.en_name,
            pinyin=pigment.pinyin,
            description=pigment.description,
        ))
    return tuple(enriched)


def enrich(
    colors: Sequence[ColorInfo],
    provider: NamingProvider,
) -> tuple[ColorInfo, ...]:
    """
    Name a palette with a provider, falling back to the unnamed palette.

    The provider is called once with all hex values. Any error raised while
    naming (provider failures, timeouts, HTTP errors, malformed responses)
    is logged and swallowed; the palette itself is never lost.

    Args:
        colors: Palette produced by extraction
        provider: Naming collaborator

    Returns:
        Palette with naming fields filled where the provider matched.
    """
    colors = tuple(colors)
    if not colors:
        return colors

    hexes = [c.hex for c in colors]
    try:
        records = provider.name_colors(hexes)
        return apply_names(colors, records)
    except Exception as e:
        logger.warning("Pigment naming failed, keeping unnamed palette: %s", e)
        return colors


def _to_pigment(record: NamingRecord) -> PigmentName:
    if isinstance(record, PigmentName):
        return record
    if not isinstance(record, Mapping):
        raise EnrichmentFailure(
            f"Naming record must be an object, got {type(record).__name__}"
        )
    try:
        return PigmentName.from_dict(dict(record))
    except ValueError as e:
        raise EnrichmentFailure(str(e)) from e
