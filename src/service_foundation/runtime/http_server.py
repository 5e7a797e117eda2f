# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HTTP Transport for services.

Wraps an aiohttp application: mounts route groups under the service prefix,
attaches the owning service to every request before its handler runs, and
manages the listening socket.

Handlers reach the service through ``request[REQUEST_SERVICE_KEY]`` (or the
application through ``request.app[SERVICE_APP_KEY]``).

Example:
    >>> server = ServiceHttpServer(port=8080, prefix="/api")
    >>> server.mount(group, context=service)
    >>> await server.start()
    >>> # curl http://localhost:8080/api/
    >>> await server.stop()
"""

from __future__ import annotations

import functools
import logging

from aiohttp import web

from service_foundation.enums import EnumInfraTransportType
from service_foundation.errors import ModelServiceErrorContext, ServiceFoundationError
from service_foundation.models import ModelRouteDescriptor, ModelRouteGroup, RouteHandler
from service_foundation.utils import generate_correlation_id

logger = logging.getLogger(__name__)

DEFAULT_HTTP_HOST = "0.0.0.0"  # noqa: S104 - Required for container networking
REQUEST_SERVICE_KEY = "service"
SERVICE_APP_KEY: web.AppKey[object] = web.AppKey("service", object)


def normalize_prefix(prefix: str) -> str:
    """Return ``prefix`` with a leading slash and no trailing slash ("" stays "")."""
    stripped = prefix.strip().strip("/")
    return f"/{stripped}" if stripped else ""


def join_route_path(prefix: str, path: str) -> str:
    """Join a normalized prefix and a route path."""
    if not prefix:
        return path
    if path == "/":
        return prefix
    return f"{prefix}{path}"


def attach_context(handler: RouteHandler, context: object) -> RouteHandler:
    """Wrap ``handler`` so the request carries ``context`` when it runs."""

    @functools.wraps(handler)
    async def _handler(request: web.Request) -> web.StreamResponse:
        request[REQUEST_SERVICE_KEY] = context
        return await handler(request)

    return _handler


class ServiceHttpServer:
    """aiohttp transport of a service.

    Attributes:
        app: The aiohttp application routes are mounted on
        host: Host to bind to
        port: Port to listen on
        prefix: Normalized route prefix
    """

    def __init__(
        self,
        port: int,
        host: str = DEFAULT_HTTP_HOST,
        prefix: str = "",
        context: object = None,
    ) -> None:
        """Initialize the transport.

        Args:
            port: Port to listen on.
            host: Host to bind to (default: 0.0.0.0 for container networking).
            prefix: Prefix applied to every mounted route.
            context: Object stored in the application under SERVICE_APP_KEY.
        """
        self._port: int = port
        self._host: str = host
        self._prefix: str = normalize_prefix(prefix)
        self._app: web.Application = web.Application()
        self._app[SERVICE_APP_KEY] = context
        self._runner: web.AppRunner | None = None
        self._site: web.TCPSite | None = None
        self._is_running: bool = False
        self._mounted: list[tuple[str, str, str]] = []

        logger.debug(
            "ServiceHttpServer initialized",
            extra={"port": self._port, "host": self._host, "prefix": self._prefix},
        )

    @property
    def app(self) -> web.Application:
        return self._app

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def mounted_routes(self) -> list[tuple[str, str, str]]:
        """Return (method, path, source) of every mounted route."""
        return list(self._mounted)

    def mount(self, group: ModelRouteGroup, context: object) -> int:
        """Mount every route of ``group`` with ``context`` attached to requests.

        Returns:
            Number of routes mounted.
        """
        for route in group.routes:
            self._add_route(route, group.source, context)
        logger.info(
            "Mounted controller %s",
            group.source,
            extra={"route_count": len(group.routes), "prefix": self._prefix},
        )
        return len(group.routes)

    async def start(self) -> None:
        """Start listening on the configured host and port.

        Idempotent: starting a running server has no effect.

        Raises:
            ServiceFoundationError: If the socket cannot be bound.
        """
        if self._is_running:
            logger.debug("ServiceHttpServer already started, skipping")
            return

        correlation_id = generate_correlation_id()
        context = ModelServiceErrorContext(
            transport_type=EnumInfraTransportType.HTTP,
            operation="start_http_server",
            target_name=f"{self._host}:{self._port}",
            correlation_id=correlation_id,
        )

        try:
            self._runner = web.AppRunner(self._app)
            await self._runner.setup()
            self._site = web.TCPSite(self._runner, self._host, self._port)
            await self._site.start()
        except OSError as e:
            error_msg = f"Failed to start HTTP server on {self._host}:{self._port}: {e}"
            logger.exception(
                "%s (correlation_id=%s)",
                error_msg,
                correlation_id,
                extra={"error_type": type(e).__name__, "errno": e.errno},
            )
            await self._cleanup()
            raise ServiceFoundationError(error_msg, context=context) from e

        self._is_running = True
        logger.info(
            "HTTP server listening on %s:%s (correlation_id=%s)",
            self._host,
            self._port,
            correlation_id,
            extra={"route_count": len(self._mounted)},
        )

    async def stop(self) -> None:
        """Stop listening and release the runner. Idempotent."""
        if not self._is_running:
            logger.debug("ServiceHttpServer already stopped, skipping")
            return
        await self._cleanup()
        self._is_running = False
        logger.info("HTTP server stopped", extra={"port": self._port})

    def _add_route(self, route: ModelRouteDescriptor, source: str, context: object) -> None:
        path = join_route_path(self._prefix, route.path)
        self._app.router.add_route(route.method, path, attach_context(route.handler, context))
        self._mounted.append((route.method, path, source))

    async def _cleanup(self) -> None:
        if self._site is not None:
            try:
                await self._site.stop()
            except Exception as e:
                logger.warning(
                    "Error stopping TCPSite during shutdown",
                    extra={"error_type": type(e).__name__},
                )
            self._site = None
        if self._runner is not None:
            try:
                await self._runner.cleanup()
            except Exception as e:
                logger.warning(
                    "Error cleaning up AppRunner during shutdown",
                    extra={"error_type": type(e).__name__},
                )
            self._runner = None


__all__: list[str] = [
    "DEFAULT_HTTP_HOST",
    "REQUEST_SERVICE_KEY",
    "SERVICE_APP_KEY",
    "ServiceHttpServer",
    "attach_context",
    "join_route_path",
    "normalize_prefix",
]
