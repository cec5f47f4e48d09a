# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
Run management for Mogao.

Extractions are synchronous and hold no shared state. The session guards
against delivering palettes from runs that have been superseded.
"""

from mogao.runtime.session import ExtractionSession

__all__ = ["ExtractionSession"]
