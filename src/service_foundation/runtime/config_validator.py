# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Configuration Validator.

Validates configuration documents against named schemas. Schemas are
pydantic models supplied by a schema provider; the service configuration
schema is registered under ``serviceConfigSchema``.

``validate()`` never raises for invalid documents: it logs every violation
at warning level and returns False. Whether an invalid document is fatal
is the caller's decision (the service refuses to start).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import BaseModel, ValidationError

from service_foundation.enums import EnumInfraTransportType
from service_foundation.errors import ModelServiceErrorContext, ProtocolConfigurationError
from service_foundation.models import ModelServiceConfig
from service_foundation.runtime.protocol_schema_provider import ProtocolSchemaProvider

logger = logging.getLogger(__name__)

SERVICE_CONFIG_SCHEMA = "serviceConfigSchema"


class StaticSchemaProvider:
    """Schema provider backed by an in-memory mapping.

    Defaults to the service configuration schema only.
    """

    def __init__(self, schemas: Mapping[str, type[BaseModel]] | None = None) -> None:
        if schemas is None:
            schemas = {SERVICE_CONFIG_SCHEMA: ModelServiceConfig}
        self._schemas: dict[str, type[BaseModel]] = dict(schemas)

    def get_schemas(self) -> Mapping[str, type[BaseModel]]:
        return dict(self._schemas)


class ConfigurationValidator:
    """Validates configuration documents against named schemas.

    Example:
        >>> validator = ConfigurationValidator()
        >>> validator.validate({"name": "svc1"})
        False
        >>> config = validator.parse(document)  # ModelServiceConfig or None
    """

    def __init__(self, schema_provider: ProtocolSchemaProvider | None = None) -> None:
        self._schemas: dict[str, type[BaseModel]] = {}
        self.load_schemas(schema_provider or StaticSchemaProvider())

    def load_schemas(self, provider: ProtocolSchemaProvider) -> None:
        """Add every schema supplied by ``provider``."""
        for name, schema in provider.get_schemas().items():
            self.add_schema(name, schema)

    def add_schema(self, name: str, schema: type[BaseModel]) -> None:
        """Register ``schema`` under ``name``, replacing any previous one."""
        if name in self._schemas and self._schemas[name] is not schema:
            logger.debug("Replacing configuration schema", extra={"schema_name": name})
        self._schemas[name] = schema

    @property
    def schema_names(self) -> list[str]:
        return sorted(self._schemas)

    def validate(self, config: object, schema_name: str = SERVICE_CONFIG_SCHEMA) -> bool:
        """Return True if ``config`` satisfies the named schema.

        Args:
            config: Configuration document (mapping) or model instance.
            schema_name: Name of the schema to validate against.

        Raises:
            ProtocolConfigurationError: If no schema is registered under
                ``schema_name``.
        """
        return self.parse(config, schema_name) is not None

    def parse(
        self, config: object, schema_name: str = SERVICE_CONFIG_SCHEMA
    ) -> BaseModel | None:
        """Validate ``config`` and return the parsed model, or None if invalid.

        Raises:
            ProtocolConfigurationError: If no schema is registered under
                ``schema_name``.
        """
        schema = self._get_schema(schema_name)

        if isinstance(config, BaseModel):
            config = config.model_dump(by_alias=True)
        if not isinstance(config, Mapping):
            logger.warning(
                "Configuration must be an object, got %s",
                type(config).__name__,
                extra={"schema_name": schema_name},
            )
            return None

        try:
            return schema.model_validate(config)
        except ValidationError as e:
            for error in e.errors():
                location = ".".join(str(part) for part in error["loc"]) or "<root>"
                logger.warning(
                    "Configuration invalid at '%s': %s",
                    location,
                    error["msg"],
                    extra={"schema_name": schema_name, "error_type": error["type"]},
                )
            return None

    def json_schema(self, schema_name: str = SERVICE_CONFIG_SCHEMA) -> dict[str, object]:
        """Return the JSON schema document of the named schema."""
        schema = self._get_schema(schema_name)
        document: dict[str, object] = schema.model_json_schema(by_alias=True)
        document.setdefault("$id", schema_name)
        return document

    def _get_schema(self, schema_name: str) -> type[BaseModel]:
        schema = self._schemas.get(schema_name)
        if schema is None:
            ctx = ModelServiceErrorContext(
                transport_type=EnumInfraTransportType.RUNTIME,
                operation="validate_config",
                target_name=schema_name,
            )
            raise ProtocolConfigurationError(
                f"No configuration schema registered under '{schema_name}'",
                context=ctx,
                available_schemas=self.schema_names,
            )
        return schema


__all__: list[str] = [
    "SERVICE_CONFIG_SCHEMA",
    "ConfigurationValidator",
    "StaticSchemaProvider",
]
