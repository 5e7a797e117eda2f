# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registry Candidate Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from service_foundation.models.model_service_descriptor import ModelServiceDescriptor
from service_foundation.models.model_service_endpoint import ModelServiceEndpoint


class ModelRegistryCandidate(BaseModel):
    """Registry service eligible for selection.

    Candidates compare by priority only; two candidates with equal priority
    are neither less nor greater than each other.

    Attributes:
        endpoint: Where the registry is reachable.
        type: Service type tag taken from the descriptor.
        priority: Selection priority; higher wins.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: ModelServiceEndpoint
    type: str
    priority: int

    @classmethod
    def from_descriptor(cls, descriptor: ModelServiceDescriptor) -> ModelRegistryCandidate:
        """Build a candidate from a configured service entry.

        Raises:
            ValueError: If the entry has no type or no port.
        """
        if descriptor.type is None or descriptor.port is None:
            raise ValueError(
                f"Service entry at {descriptor.hostname!r} needs a type and a port"
            )
        return cls(
            endpoint=ModelServiceEndpoint(
                hostname=descriptor.hostname, port=descriptor.port
            ),
            type=descriptor.type,
            priority=descriptor.priority,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ModelRegistryCandidate):
            return NotImplemented
        return self.priority < other.priority

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ModelRegistryCandidate):
            return NotImplemented
        return self.priority > other.priority


__all__: list[str] = ["ModelRegistryCandidate"]
