# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Configuration Loading.

Reads a configuration file from disk and validates it against the service
configuration schema.

Supported formats:
    - json (default)
    - yaml

A missing file, unreadable file, parse error or schema violation all yield
None; the caller decides whether that is fatal. Each case is logged at
warning level with the offending path.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from service_foundation.errors import ProtocolConfigurationError
from service_foundation.models import ModelServiceConfig
from service_foundation.runtime.config_validator import (
    SERVICE_CONFIG_SCHEMA,
    ConfigurationValidator,
)

logger = logging.getLogger(__name__)

SUPPORTED_CONFIG_FORMATS = frozenset({"json", "yaml"})


def read_config_document(config_path: Path, config_format: str = "json") -> object:
    """Read and parse a configuration document without validating it.

    Raises:
        ProtocolConfigurationError: If the format is unsupported, the file
            cannot be read, or its content cannot be parsed.
    """
    if config_format not in SUPPORTED_CONFIG_FORMATS:
        raise ProtocolConfigurationError(
            f"Unsupported configuration format '{config_format}'",
            supported_formats=sorted(SUPPORTED_CONFIG_FORMATS),
        )

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProtocolConfigurationError(
            f"Failed to read configuration file: {config_path}",
            config_path=str(config_path),
            error_type=type(e).__name__,
        ) from e

    try:
        if config_format == "yaml":
            return yaml.safe_load(content)
        return json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ProtocolConfigurationError(
            f"Failed to parse {config_format} configuration file: {config_path}",
            config_path=str(config_path),
            error_type=type(e).__name__,
        ) from e


def load_config_from_file(
    config_path: str | Path,
    config_format: str = "json",
    validator: ConfigurationValidator | None = None,
) -> ModelServiceConfig | None:
    """Load and validate a service configuration file.

    Args:
        config_path: Path of the configuration file.
        config_format: ``json`` or ``yaml``.
        validator: Validator to use (default: one with the built-in schemas).

    Returns:
        The validated configuration, or None if it cannot be loaded or is invalid.
    """
    path = Path(config_path)
    validator = validator or ConfigurationValidator()

    try:
        document = read_config_document(path, config_format)
    except ProtocolConfigurationError as e:
        logger.warning("%s", e.message, extra={"config_path": str(path)})
        return None

    config = validator.parse(document, SERVICE_CONFIG_SCHEMA)
    if config is None:
        logger.warning(
            "Configuration file failed validation", extra={"config_path": str(path)}
        )
        return None
    if not isinstance(config, ModelServiceConfig):
        raise ProtocolConfigurationError(
            f"Schema '{SERVICE_CONFIG_SCHEMA}' must be a ModelServiceConfig subclass",
            schema_type=type(config).__name__,
        )
    return config


__all__: list[str] = [
    "SUPPORTED_CONFIG_FORMATS",
    "load_config_from_file",
    "read_config_document",
]
