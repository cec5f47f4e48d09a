# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Stale-run guard for repeated extractions.

When settings change while an extraction is still running, only the newest
run may deliver a palette. Each run is tagged with a monotonic token; a
result whose token is no longer current is dropped.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Optional, Union

from mogao.schema import ColorInfo, ProcessingSettings
from mogao.measure.extract import ImageSource, extract_colors
from mogao.naming.enrich import NamingProvider, enrich

logger = logging.getLogger(__name__)


class ExtractionSession:
    """
    Delivers at most one palette per run, from the newest run only.

    Extraction itself holds no shared state; the session only tracks which
    run is current and the last accepted palette.

    Example:
        >>> session = ExtractionSession()
        >>> palette = session.run("mural.jpg", ProcessingSettings(color_count=5))
        >>> palette is None  # True only if a newer run started meanwhile
        False
    """

    def __init__(self) -> None:
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()
        self._current = 0
        self.latest: Optional[tuple[ColorInfo, ...]] = None

    def begin(self) -> int:
        """Start a new run and make it the current one."""
        with self._lock:
            self._current = next(self._tokens)
            return self._current

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current

    def accept(self, token: int, palette: tuple[ColorInfo, ...]) -> bool:
        """
        Store a finished palette if its run is still current.

        Returns:
            True if the palette was accepted, False if it was stale.
        """
        with self._lock:
            if token != self._current:
                logger.debug("Discarding stale palette from run %d (current %d)",
                             token, self._current)
                return False
            self.latest = palette
            return True

    def run(
        self,
        image: ImageSource,
        settings: Union[ProcessingSettings, dict, None] = None,
        provider: Optional[NamingProvider] = None,
        **kwargs: Any,
    ) -> Optional[tuple[ColorInfo, ...]]:
        """
        Extract (and optionally name) a palette as a new run.

        The palette is computed in full before naming starts. Extraction
        errors propagate; naming errors degrade to the unnamed palette.

        Args:
            image: Image source accepted by extract_colors
            settings: Processing settings
            provider: Optional naming provider, called after extraction
            **kwargs: Passed through to extract_colors

        Returns:
            The palette, or None if a newer run began before this one finished.
        """
        token = self.begin()
        palette = extract_colors(image, settings, **kwargs)

        if provider is not None and self.is_current(token):
            palette = enrich(palette, provider)

        if not self.accept(token, palette):
            return None
        return palette
