# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
HTTP client for a remote pigment naming service.

The service receives the palette's hex values together with an instruction
to name them as Dunhuang mural pigments, and answers with a JSON array of
records:

    [
      {"hex": "#A84C32", "name": "朱砂", "enName": "Cinnabar",
       "pinyin": "zhū shā", "description": "..."},
      ...
    ]

A ``{"colors": [...]}`` envelope is also accepted. Requests use the
``requests`` library; transport errors propagate as ``requests`` exceptions
and malformed bodies raise EnrichmentFailure. ``enrich`` handles both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Sequence

import requests

from mogao.errors import EnrichmentFailure
from mogao.schema import PigmentName

NAMING_PROMPT = (
    "Analyze these hex colors in the context of Dunhuang Mogao Caves mural "
    "pigments: {colors}. Provide traditional Chinese pigment names (like "
    "朱砂, 石青, 雌黄), English names, Pinyin, and a brief cultural "
    "description of their use in Dunhuang."
)

RESPONSE_FIELDS = ("hex", "name", "enName", "pinyin", "description")


@dataclass(frozen=True)
class NamingConfig:
    """Connection settings for the naming service."""

    endpoint: str

    # Sent as a bearer token when present
    api_key: Optional[str] = None

    # Seconds, applies to connect and read
    timeout: float = 15.0

    def __post_init__(self) -> None:
        if not self.endpoint:
            raise ValueError("endpoint cannot be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")

    @classmethod
    def from_env(cls) -> NamingConfig:
        """
        Read settings from the environment.

        Variables:
            MOGAO_NAMING_URL: Service endpoint (required)
            MOGAO_NAMING_API_KEY: Bearer token (optional)
            MOGAO_NAMING_TIMEOUT: Timeout in seconds (optional, default 15)

        Raises:
            ValueError: If MOGAO_NAMING_URL is unset or the timeout is invalid.
        """
        endpoint = os.environ.get("MOGAO_NAMING_URL", "")
        if not endpoint:
            raise ValueError("MOGAO_NAMING_URL is not set")
        timeout = float(os.environ.get("MOGAO_NAMING_TIMEOUT", "15"))
        return cls(
            endpoint=endpoint,
            api_key=os.environ.get("MOGAO_NAMING_API_KEY") or None,
            timeout=timeout,
        )


class HttpNamingClient:
    """
    Naming provider that calls a remote JSON service.

    Args:
        config: Endpoint, key and timeout
        session: Optional requests.Session (a new one is created if omitted)
    """

    def __init__(
        self,
        config: NamingConfig,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.session = session if session is not None else requests.Session()

    def build_payload(self, hexes: Sequence[str]) -> dict:
        return {
            "colors": list(hexes),
            "prompt": NAMING_PROMPT.format(colors=", ".join(hexes)),
            "fields": list(RESPONSE_FIELDS),
        }

    def name_colors(self, hexes: Sequence[str]) -> list[PigmentName]:
        """
        Ask the service to name colors.

        Raises:
            requests.RequestException: On transport or HTTP status errors
            EnrichmentFailure: If the body is not a list of naming records
        """
        headers = {"Accept": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"

        response = self.session.post(
            self.config.endpoint,
            json=self.build_payload(hexes),
            headers=headers,
            timeout=self.config.timeout,
        )
        response.raise_for_status()

        try:
            body = response.json()
        except ValueError as e:
            raise EnrichmentFailure(f"Naming service returned invalid JSON: {e}") from e

        return parse_naming_response(body)


def parse_naming_response(body: object) -> list[PigmentName]:
    """
    Validate a decoded naming response.

    Raises:
        EnrichmentFailure: If the body is not a list of records with
            string hex, name and enName fields.
    """
    if isinstance(body, dict) and "colors" in body:
        body = body["colors"]
    if not isinstance(body, list):
        raise EnrichmentFailure(
            f"Naming response must be a list, got {type(body).__name__}"
        )
    try:
        return [PigmentName.from_dict(item) for item in body]
    except ValueError as e:
        raise EnrichmentFailure(f"Malformed naming record: {e}") from e
