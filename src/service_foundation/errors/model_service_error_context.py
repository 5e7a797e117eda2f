# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Error Context Model.

Structured fields attached to every service foundation error. Errors raised
while talking to a registry carry the remote endpoint and, for registration,
the attempt number, so a log line can be traced back to one attempt of the
retry loop.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from service_foundation.enums import EnumInfraTransportType
from service_foundation.models import ModelServiceEndpoint


class ModelServiceErrorContext(BaseModel):
    """Context bundled into a ServiceFoundationError.

    Attributes:
        transport_type: Transport the failing operation used.
        operation: Operation name (register, lookup, validate_config, ...).
        target_name: Schema, module or ``host:port`` the operation targeted.
        endpoint: Remote endpoint for registry operations.
        attempt: Registration attempt number (1-based).
        correlation_id: Correlation ID shared with the surrounding log records.

    Example:
        >>> context = ModelServiceErrorContext.for_endpoint(
        ...     EnumInfraTransportType.REGISTRY,
        ...     "register",
        ...     ModelServiceEndpoint(hostname="r2", port=9001),
        ...     attempt=3,
        ... )
        >>> context.target_name
        'r2:9001'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    transport_type: EnumInfraTransportType | None = None
    operation: str | None = None
    target_name: str | None = None
    endpoint: ModelServiceEndpoint | None = None
    attempt: int | None = Field(default=None, ge=1)
    correlation_id: UUID | None = None

    @classmethod
    def for_endpoint(
        cls,
        transport_type: EnumInfraTransportType,
        operation: str,
        endpoint: ModelServiceEndpoint,
        *,
        attempt: int | None = None,
        correlation_id: UUID | None = None,
    ) -> ModelServiceErrorContext:
        """Build the context of an operation against a remote endpoint."""
        return cls(
            transport_type=transport_type,
            operation=operation,
            target_name=str(endpoint),
            endpoint=endpoint,
            attempt=attempt,
            correlation_id=correlation_id,
        )


__all__: list[str] = ["ModelServiceErrorContext"]
