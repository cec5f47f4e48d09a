# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Error taxonomy for palette extraction.

An image that yields no usable pixels is not an error: extraction returns
an empty palette. Only naming enrichment failures are recovered locally.
"""


class MogaoError(Exception):
    """Base class for all Mogao errors."""


class DecodeFailure(MogaoError):
    """The image source could not be decoded into an RGBA pixel buffer."""


class InvalidSettings(MogaoError, ValueError):
    """Processing settings fall outside their documented bounds."""


class EnrichmentFailure(MogaoError):
    """The naming collaborator failed or returned malformed data."""
