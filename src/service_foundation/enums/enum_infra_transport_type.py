# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Transport Type Enumeration.

Defines the transport types used in error context and log records.
"""

from enum import Enum


class EnumInfraTransportType(str, Enum):
    """Transport types for service foundation components.

    Attributes:
        HTTP: Inbound HTTP transport (the service's own server)
        REGISTRY: Outbound calls to a registry service
        RUNTIME: Service runtime internal operations
    """

    HTTP = "http"
    REGISTRY = "registry"
    RUNTIME = "runtime"


__all__ = ["EnumInfraTransportType"]
