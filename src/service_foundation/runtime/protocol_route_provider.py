# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Route Provider Protocol.

Route providers supply the route groups a service mounts at startup. The
service only mounts what it is given; discovery (importing controller
modules, reading a manifest, building routes in code) happens inside the
provider so the service can be built and tested without a file system.

Example:
    ```python
    class InlineRouteProvider:
        def get_route_groups(self) -> list[ModelRouteGroup]:
            return [
                ModelRouteGroup(
                    source="inline",
                    routes=(ModelRouteDescriptor(method="GET", path="/ping", handler=ping),),
                )
            ]

    provider: ProtocolRouteProvider = InlineRouteProvider()
    service = Service(config, route_provider=provider)
    ```
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from service_foundation.models import ModelRouteGroup


@runtime_checkable
class ProtocolRouteProvider(Protocol):
    """Supplies route groups to mount."""

    def get_route_groups(self) -> Sequence[ModelRouteGroup]:
        """Return route groups in mount order."""
        ...


__all__: list[str] = ["ProtocolRouteProvider"]
