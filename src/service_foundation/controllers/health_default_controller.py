# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Default health controller.

``GET /`` under the service prefix reports the service identity and the
state of self-registration. Skipped when ``registerDefaultRoutes`` is false.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aiohttp import web

from service_foundation.models import ModelRouteDescriptor
from service_foundation.runtime.http_server import REQUEST_SERVICE_KEY

if TYPE_CHECKING:
    from service_foundation.runtime.service import Service


async def handle_root(request: web.Request) -> web.Response:
    service: Service = request[REQUEST_SERVICE_KEY]
    registration = None
    if service.registration_client is not None:
        registration = service.registration_client.state.value
    return web.json_response(
        {
            "status": "ok",
            "guid": service.config.guid,
            "name": service.config.name,
            "version": service.config.version,
            "registration": registration,
        }
    )


ROUTES = [
    ModelRouteDescriptor(method="GET", path="/", handler=handle_root),
]
