# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for ServiceHttpServer.

Tests the aiohttp transport including:
- Prefix normalization and path joining
- Route mounting with the request context attached
- Server lifecycle (start/stop) and bind failures
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from aiohttp import web
from aiohttp import test_utils

from service_foundation.errors import ServiceFoundationError
from service_foundation.models import ModelRouteDescriptor, ModelRouteGroup
from service_foundation.runtime.http_server import (
    DEFAULT_HTTP_HOST,
    REQUEST_SERVICE_KEY,
    SERVICE_APP_KEY,
    ServiceHttpServer,
    join_route_path,
    normalize_prefix,
)
from tests.helpers import get_aiohttp_bound_port


async def echo_context(request: web.Request) -> web.Response:
    return web.json_response(
        {"context": request[REQUEST_SERVICE_KEY], "path": request.path}
    )


def make_group(*paths: str, is_default: bool = False) -> ModelRouteGroup:
    return ModelRouteGroup(
        source="tests.echo_controller",
        routes=tuple(
            ModelRouteDescriptor(method="GET", path=path, handler=echo_context)
            for path in paths
        ),
        is_default=is_default,
    )


class TestPaths:
    """Tests for prefix handling."""

    @pytest.mark.parametrize(
        ("prefix", "expected"),
        [("", ""), ("/", ""), ("api", "/api"), ("/api/", "/api"), (" /v1/x ", "/v1/x")],
    )
    def test_normalize_prefix(self, prefix: str, expected: str) -> None:
        assert normalize_prefix(prefix) == expected

    @pytest.mark.parametrize(
        ("prefix", "path", "expected"),
        [
            ("", "/", "/"),
            ("", "/users", "/users"),
            ("/api", "/", "/api"),
            ("/api", "/users", "/api/users"),
        ],
    )
    def test_join_route_path(self, prefix: str, path: str, expected: str) -> None:
        assert join_route_path(prefix, path) == expected


class TestServiceHttpServerInit:
    """Tests for ServiceHttpServer initialization."""

    def test_init_with_defaults(self) -> None:
        server = ServiceHttpServer(port=8080)

        assert server.port == 8080
        assert server.host == DEFAULT_HTTP_HOST
        assert server.prefix == ""
        assert not server.is_running
        assert server.mounted_routes == []

    def test_context_stored_on_app(self) -> None:
        context = object()
        server = ServiceHttpServer(port=8080, context=context)

        assert server.app[SERVICE_APP_KEY] is context


class TestMounting:
    """Tests for route mounting."""

    def test_mount_applies_prefix(self) -> None:
        server = ServiceHttpServer(port=0, prefix="svc1/")

        mounted = server.mount(make_group("/", "/users"), context="ctx")

        assert mounted == 2
        assert server.mounted_routes == [
            ("GET", "/svc1", "tests.echo_controller"),
            ("GET", "/svc1/users", "tests.echo_controller"),
        ]

    async def test_context_attached_to_request(self) -> None:
        server = ServiceHttpServer(port=0, prefix="/svc1")
        server.mount(make_group("/users"), context="the-service")

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            response = await client.get("/svc1/users")
            assert response.status == 200
            assert await response.json() == {
                "context": "the-service",
                "path": "/svc1/users",
            }

            missing = await client.get("/users")
            assert missing.status == 404

    async def test_each_group_keeps_its_context(self) -> None:
        server = ServiceHttpServer(port=0)
        server.mount(make_group("/a"), context="first")
        server.mount(make_group("/b"), context="second")

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            assert (await (await client.get("/a")).json())["context"] == "first"
            assert (await (await client.get("/b")).json())["context"] == "second"


class TestServiceHttpServerLifecycle:
    """Tests for ServiceHttpServer start/stop lifecycle."""

    async def test_start_serves_and_stop_releases(self) -> None:
        server = ServiceHttpServer(port=0, host="127.0.0.1")
        server.mount(make_group("/"), context="ctx")

        await server.start()
        try:
            assert server.is_running
            port = get_aiohttp_bound_port(server)
            async with httpx.AsyncClient() as client:
                response = await client.get(f"http://127.0.0.1:{port}/")
            assert response.json()["context"] == "ctx"
        finally:
            await server.stop()

        assert not server.is_running

    async def test_start_and_stop_idempotent(self) -> None:
        server = ServiceHttpServer(port=0, host="127.0.0.1")

        await server.stop()
        await server.start()
        await server.start()
        assert server.is_running

        await server.stop()
        await server.stop()
        assert not server.is_running

    async def test_bind_failure_raises(self) -> None:
        server = ServiceHttpServer(port=8080, host="127.0.0.1")

        with patch("service_foundation.runtime.http_server.web.TCPSite") as mock_site:
            mock_site_instance = MagicMock()
            mock_site_instance.start = AsyncMock(
                side_effect=OSError(98, "Address already in use")
            )
            mock_site_instance.stop = AsyncMock()
            mock_site.return_value = mock_site_instance

            with pytest.raises(ServiceFoundationError, match="Failed to start HTTP server"):
                await server.start()

        assert not server.is_running
        mock_site_instance.stop.assert_awaited_once()
