# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Foundation Errors Module.

Exports:
    ModelServiceErrorContext: Structured context (endpoint, attempt, correlation id)
    ServiceFoundationError: Base error class
    ProtocolConfigurationError: Configuration validation errors
    InvalidConfigError: Fatal configuration error raised at service construction
    InfraConnectionError: Connection actively refused by a remote service
    InfraTimeoutError: Remote call exceeded its deadline
    InfraUnavailableError: Remote service unresolvable, unreachable or unable to serve
    RegistrationRejectedError: Registry answered outside the success band

Correlation ID Assignment:
    - Propagate correlation_id from the surrounding operation when one exists
    - Otherwise generate one with generate_correlation_id() (UUID4)
    - Keep correlation IDs as UUID objects, not strings

    Example::

        from service_foundation.enums import EnumInfraTransportType
        from service_foundation.errors import InfraConnectionError, ModelServiceErrorContext
        from service_foundation.models import ModelServiceEndpoint
        from service_foundation.utils import generate_correlation_id

        context = ModelServiceErrorContext.for_endpoint(
            EnumInfraTransportType.REGISTRY,
            "register",
            ModelServiceEndpoint(hostname="registry.local", port=9000),
            correlation_id=generate_correlation_id(),
        )
        raise InfraConnectionError("Failed to connect", context=context) from e
"""

from service_foundation.errors.infra_errors import (
    InfraConnectionError,
    InfraTimeoutError,
    InfraUnavailableError,
    InvalidConfigError,
    ProtocolConfigurationError,
    RegistrationRejectedError,
    ServiceFoundationError,
)
from service_foundation.errors.model_service_error_context import ModelServiceErrorContext

__all__: list[str] = [
    "InfraConnectionError",
    "InfraTimeoutError",
    "InfraUnavailableError",
    "InvalidConfigError",
    "ModelServiceErrorContext",
    "ProtocolConfigurationError",
    "RegistrationRejectedError",
    "ServiceFoundationError",
]
