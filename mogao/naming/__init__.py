# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Pigment naming for extracted palettes.

Naming is an optional, best-effort step that runs after extraction:

1. Remote -- HttpNamingClient asks a JSON naming service
2. Offline -- PigmentTableProvider picks the nearest Dunhuang reference pigment

Naming never modifies measured color values.
"""

from mogao.naming.client import HttpNamingClient, NamingConfig, parse_naming_response
from mogao.naming.enrich import NamingProvider, apply_names, enrich
from mogao.naming.pigments import DUNHUANG_PIGMENTS, PigmentTableProvider, nearest_pigment

__all__ = [
    "enrich",
    "apply_names",
    "NamingProvider",
    "HttpNamingClient",
    "NamingConfig",
    "parse_naming_response",
    "DUNHUANG_PIGMENTS",
    "PigmentTableProvider",
    "nearest_pigment",
]
