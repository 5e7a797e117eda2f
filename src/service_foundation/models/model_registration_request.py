# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registration Request Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from service_foundation.models.model_service_endpoint import ModelServiceEndpoint
from service_foundation.models.model_service_identity import ModelServiceIdentity


class ModelRegistrationRequest(BaseModel):
    """Payload announcing this service to a registry.

    Built fresh from the current configuration on every attempt.

    Attributes:
        identity: Identity of this service.
        prefix: Route prefix the service is mounted under.
        endpoint: Where this service is reachable.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    identity: ModelServiceIdentity
    prefix: str
    endpoint: ModelServiceEndpoint

    def to_wire_body(self) -> dict[str, object]:
        """Return the JSON body sent to ``/v1/catalog/register``."""
        return {
            "guid": self.identity.guid,
            "name": self.identity.name,
            "version": self.identity.version,
            "prefix": self.prefix,
            "port": self.endpoint.port,
            "hostname": self.endpoint.hostname,
        }


__all__: list[str] = ["ModelRegistrationRequest"]
