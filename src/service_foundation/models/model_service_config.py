# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Configuration Model.

Schema of the declarative service configuration, registered with the
configuration validator under the name ``serviceConfigSchema``.

Required fields: ``guid``, ``name``, ``domain``, ``port``, ``version``.
Additional properties are kept as extras so services can carry their own
settings alongside the ones read by the core.

Example:
    >>> config = ModelServiceConfig.model_validate({
    ...     "guid": "0f8fad5b-d9cb-469f-a165-70867728950e",
    ...     "name": "svc1",
    ...     "domain": "svc1.local",
    ...     "port": 8080,
    ...     "version": "1.0.0",
    ...     "self-registry": True,
    ...     "services": [
    ...         {"type": "registry", "hostname": "r1", "port": 9000, "priority": 1},
    ...     ],
    ... })
    >>> config.self_registry
    True
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from service_foundation.models.model_service_descriptor import ModelServiceDescriptor
from service_foundation.models.model_service_endpoint import (
    MAX_PORT,
    MIN_PORT,
    ModelServiceEndpoint,
)
from service_foundation.models.model_service_identity import (
    GUID_PATTERN,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NAME_PATTERN,
    ModelServiceIdentity,
)

DEFAULT_SELF_HOSTNAME = "localhost"


class ModelServiceConfig(BaseModel):
    """Declarative configuration of a service.

    Attributes:
        guid: UUID identifying the service (braces optional).
        name: Service name (4-255 chars, no leading whitespace).
        domain: Service domain (4-255 chars, no leading whitespace).
        port: Port the transport listens on (0-65535). Integral floats such
            as ``8080.0`` are accepted; booleans and strings are not.
        version: Service version string.
        prefix: Route prefix applied to every mounted route.
        hostname: Host announced to the registry (``localhost`` when unset).
        services: External services known to this process.
        self_registry: Register with the selected registry at startup
            (``self-registry`` in configuration files).
        register_default_routes: Mount the built-in default routes
            (``registerDefaultRoutes`` in configuration files).
        settings: Transport settings; ``settings.server.host`` sets the bind host.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    guid: str = Field(..., pattern=GUID_PATTERN)
    name: str = Field(
        ...,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        pattern=NAME_PATTERN,
    )
    domain: str = Field(
        ...,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        pattern=NAME_PATTERN,
    )
    port: int = Field(..., ge=MIN_PORT, le=MAX_PORT)
    version: str

    prefix: str = ""
    hostname: str | None = None
    services: list[ModelServiceDescriptor] = Field(default_factory=list)
    self_registry: bool = Field(default=False, alias="self-registry")
    register_default_routes: bool = Field(default=True, alias="registerDefaultRoutes")
    settings: dict[str, Any] = Field(default_factory=dict)

    @field_validator("port", mode="before")
    @classmethod
    def validate_port_is_number(cls, v: object) -> object:
        """Reject non-numeric ports before integer coercion.

        Args:
            v: Raw port value from the configuration source.

        Returns:
            The unchanged value; pydantic then accepts ints and integral floats.

        Raises:
            ValueError: If the value is a boolean or not a number.
        """
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"port must be a number, got {type(v).__name__}")
        return v

    @property
    def identity(self) -> ModelServiceIdentity:
        """Return the identity announced to registries."""
        return ModelServiceIdentity(guid=self.guid, name=self.name, version=self.version)

    @property
    def self_endpoint(self) -> ModelServiceEndpoint:
        """Return where this service is reachable."""
        return ModelServiceEndpoint(
            hostname=self.hostname or DEFAULT_SELF_HOSTNAME, port=self.port
        )


__all__: list[str] = ["DEFAULT_SELF_HOSTNAME", "ModelServiceConfig"]
