# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service runtime: configuration, transport and orchestration."""

from service_foundation.runtime.config_loader import (
    SUPPORTED_CONFIG_FORMATS,
    load_config_from_file,
    read_config_document,
)
from service_foundation.runtime.config_validator import (
    SERVICE_CONFIG_SCHEMA,
    ConfigurationValidator,
    StaticSchemaProvider,
)
from service_foundation.runtime.http_server import (
    REQUEST_SERVICE_KEY,
    SERVICE_APP_KEY,
    ServiceHttpServer,
)
from service_foundation.runtime.protocol_route_provider import ProtocolRouteProvider
from service_foundation.runtime.protocol_schema_provider import ProtocolSchemaProvider
from service_foundation.runtime.route_providers import (
    ModuleRouteProvider,
    StaticRouteProvider,
)
from service_foundation.runtime.service import DEFAULT_CONTROLLERS_PACKAGE, Service

__all__: list[str] = [
    "DEFAULT_CONTROLLERS_PACKAGE",
    "REQUEST_SERVICE_KEY",
    "SERVICE_APP_KEY",
    "SERVICE_CONFIG_SCHEMA",
    "SUPPORTED_CONFIG_FORMATS",
    "ConfigurationValidator",
    "ModuleRouteProvider",
    "ProtocolRouteProvider",
    "ProtocolSchemaProvider",
    "Service",
    "ServiceHttpServer",
    "StaticRouteProvider",
    "StaticSchemaProvider",
    "load_config_from_file",
    "read_config_document",
]
