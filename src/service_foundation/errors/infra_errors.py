# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Foundation Error Classes.

Error Hierarchy:
    ServiceFoundationError (base error)
    ├── ProtocolConfigurationError
    │   └── InvalidConfigError
    ├── InfraConnectionError
    ├── InfraTimeoutError
    ├── InfraUnavailableError
    └── RegistrationRejectedError

All errors:
    - Use EnumErrorCode for error classification
    - Support proper error chaining with `raise ... from e`
    - Carry structured context for debugging (``error.context``)
    - Accept ModelServiceErrorContext for bundled context parameters

Propagation:
    InvalidConfigError is fatal and aborts service construction. The
    registration errors are raised by the registry transport only and are
    always caught by the registration client, which maps them to outcomes.
"""

from uuid import UUID

from service_foundation.enums import EnumErrorCode
from service_foundation.errors.model_service_error_context import ModelServiceErrorContext


class ServiceFoundationError(Exception):
    """Base error class for service foundation errors.

    Structured Fields (via ModelServiceErrorContext):
        transport_type: Type of transport (http, registry, runtime)
        operation: Operation being performed
        correlation_id: Request correlation ID for tracking
        target_name: Target resource/endpoint name
        attempt: Registration attempt number

    Example:
        >>> context = ModelServiceErrorContext(
        ...     transport_type=EnumInfraTransportType.REGISTRY,
        ...     operation="register",
        ...     target_name="registry.local:9000",
        ... )
        >>> raise ServiceFoundationError("Operation failed", context=context)
    """

    def __init__(
        self,
        message: str,
        error_code: EnumErrorCode | None = None,
        context: ModelServiceErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        """Initialize ServiceFoundationError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to OPERATION_FAILED)
            context: Bundled infrastructure context (transport_type, operation, etc.)
            **extra_context: Additional context information
        """
        structured_context: dict[str, object] = dict(extra_context)

        correlation_id: UUID | None = None
        if context is not None:
            if context.transport_type is not None:
                structured_context["transport_type"] = context.transport_type
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            if context.attempt is not None:
                structured_context["attempt"] = context.attempt
            correlation_id = context.correlation_id

        super().__init__(message)
        self.message: str = message
        self.error_code: EnumErrorCode = error_code or EnumErrorCode.OPERATION_FAILED
        self.correlation_id: UUID | None = correlation_id
        self.context: dict[str, object] = structured_context

    def __str__(self) -> str:
        if self.correlation_id is None:
            return self.message
        return f"{self.message} (correlation_id: {self.correlation_id})"


class ProtocolConfigurationError(ServiceFoundationError):
    """Raised when configuration validation fails.

    Used for configuration parsing errors, missing required fields,
    invalid configuration values, or schema validation failures.
    """

    def __init__(
        self,
        message: str,
        context: ModelServiceErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumErrorCode.INVALID_CONFIGURATION,
            context=context,
            **extra_context,
        )


class InvalidConfigError(ProtocolConfigurationError):
    """Raised when a service is constructed from an invalid configuration.

    Fatal: the service refuses to start and no transport is created.

    Example:
        >>> raise InvalidConfigError(
        ...     "Configuration file is invalid or doesn't exist",
        ...     config_source="/etc/svc/config.json",
        ... )
    """


class InfraConnectionError(ServiceFoundationError):
    """Raised when a remote service actively refuses the connection.

    Example:
        >>> raise InfraConnectionError(
        ...     "Failed to connect to registry",
        ...     context=context,
        ...     host="registry.local",
        ...     port=9000,
        ... )
    """

    def __init__(
        self,
        message: str,
        context: ModelServiceErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumErrorCode.CONNECTION_ERROR,
            context=context,
            **extra_context,
        )


class InfraTimeoutError(ServiceFoundationError):
    """Raised when a remote call exceeds its deadline.

    Example:
        >>> raise InfraTimeoutError(
        ...     "Registry request timed out",
        ...     context=context,
        ...     timeout_seconds=1.0,
        ... )
    """

    def __init__(
        self,
        message: str,
        context: ModelServiceErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumErrorCode.TIMEOUT_ERROR,
            context=context,
            **extra_context,
        )


class InfraUnavailableError(ServiceFoundationError):
    """Raised when a remote service is unreachable (but not refusing) or cannot serve."""

    def __init__(
        self,
        message: str,
        context: ModelServiceErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumErrorCode.SERVICE_UNAVAILABLE,
            context=context,
            **extra_context,
        )


class RegistrationRejectedError(ServiceFoundationError):
    """Raised when the registry answers with a status outside the success band.

    Attributes:
        status_code: HTTP status returned by the registry
        body: Decoded response body (JSON value or text) for diagnostics

    Example:
        >>> raise RegistrationRejectedError(
        ...     "Registry rejected registration",
        ...     status_code=409,
        ...     body={"error": "duplicate guid"},
        ...     context=context,
        ... )
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        body: object = None,
        context: ModelServiceErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumErrorCode.REGISTRATION_REJECTED,
            context=context,
            status_code=status_code,
            **extra_context,
        )
        self.status_code: int = status_code
        self.body: object = body


__all__ = [
    "InfraConnectionError",
    "InfraTimeoutError",
    "InfraUnavailableError",
    "InvalidConfigError",
    "ProtocolConfigurationError",
    "RegistrationRejectedError",
    "ServiceFoundationError",
]
