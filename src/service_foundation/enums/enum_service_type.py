# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Type Enumeration.

Known values of the ``type`` tag on entries of the configured services list.
Entries may carry other tags; only REGISTRY is interpreted by the core.
"""

from enum import Enum


class EnumServiceType(str, Enum):
    """Service type tags understood by the core.

    Attributes:
        REGISTRY: Registry (service-discovery) service eligible for
            self-registration and lookups.
    """

    REGISTRY = "registry"


__all__ = ["EnumServiceType"]
