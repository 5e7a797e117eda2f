# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Endpoint Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MIN_PORT = 0
MAX_PORT = 65535


class ModelServiceEndpoint(BaseModel):
    """Network location of this process or of a remote service.

    Attributes:
        hostname: Host name or address.
        port: TCP port (0-65535).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    hostname: str = Field(..., min_length=1, description="Host name or address")
    port: int = Field(..., ge=MIN_PORT, le=MAX_PORT, description="TCP port")

    @property
    def base_url(self) -> str:
        """Return the plain-HTTP base URL of the endpoint."""
        return f"http://{self.hostname}:{self.port}"

    def __str__(self) -> str:
        return f"{self.hostname}:{self.port}"


__all__: list[str] = ["MAX_PORT", "MIN_PORT", "ModelServiceEndpoint"]
