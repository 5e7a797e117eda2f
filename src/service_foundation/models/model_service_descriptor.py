# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Descriptor Model.

One entry of the ``services`` list in the service configuration. Entries
describe external services this process knows about; only the ones tagged
``type: registry`` are interpreted by the core. Other entries (databases,
caches, untyped entries) carry whatever fields their consumers need, so
neither ``type`` nor ``port`` is required here.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from service_foundation.models.model_service_endpoint import MAX_PORT, MIN_PORT


class ModelServiceDescriptor(BaseModel):
    """Configured external service.

    Attributes:
        type: Service type tag (``"registry"`` marks registry candidates),
            or None for untyped entries.
        hostname: Host name of the service.
        port: TCP port of the service, or None for entries addressed some
            other way (for example by URL).
        priority: Selection priority; higher wins.
    """

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    hostname: str = Field(default="localhost", min_length=1)
    port: int | None = Field(default=None, ge=MIN_PORT, le=MAX_PORT)
    priority: int = 0


__all__: list[str] = ["ModelServiceDescriptor"]
