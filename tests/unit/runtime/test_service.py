# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the Service orchestrator.

Tests service construction and lifecycle including:
- Configuration validation gating construction
- Route mounting (prefix, default routes toggle)
- Registry selection and client wiring
- Background self-registration on start
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
from aiohttp import test_utils, web

from service_foundation import Service
from service_foundation.enums import EnumRegistrationOutcome, EnumRegistrationState
from service_foundation.errors import InvalidConfigError, ProtocolConfigurationError
from service_foundation.models import ModelRouteDescriptor, ModelRouteGroup
from service_foundation.runtime import StaticRouteProvider
from tests.helpers import Hang, ManualRetryScheduler, Refused, RegistryStub


async def list_users(request: web.Request) -> web.Response:
    service = request["service"]
    return web.json_response({"served_by": service.config.name})


USERS_GROUP = ModelRouteGroup(
    source="tests.users_controller",
    routes=(ModelRouteDescriptor(method="GET", path="/users", handler=list_users),),
)


@pytest.fixture
def local_config(config_dict: dict[str, object]) -> dict[str, object]:
    """Configuration bound to an ephemeral loopback port."""
    config_dict["port"] = 0
    config_dict["settings"] = {"server": {"host": "127.0.0.1"}}
    return config_dict


@pytest.fixture
def scheduler() -> ManualRetryScheduler:
    return ManualRetryScheduler()


@pytest.fixture
async def stub_client() -> AsyncIterator[tuple[RegistryStub, httpx.AsyncClient]]:
    stub = RegistryStub.scripted([200])
    client = stub.make_client()
    yield stub, client
    await client.aclose()


class TestServiceConstruction:
    """Tests for Service construction."""

    def test_invalid_config_raises(self, config_dict: dict[str, object]) -> None:
        del config_dict["guid"]

        with pytest.raises(InvalidConfigError) as exc_info:
            Service(config_dict)

        assert exc_info.value.message == "Configuration file is invalid or doesn't exist"
        assert isinstance(exc_info.value, ProtocolConfigurationError)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidConfigError) as exc_info:
            Service(tmp_path / "absent.json")

        assert exc_info.value.context["config_source"].endswith("absent.json")

    def test_loads_from_file(self, tmp_path: Path, config_dict: dict[str, object]) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(config_dict), encoding="utf-8")

        service = Service(path)

        assert service.config.name == "svc1"
        assert service.server.port == 8080
        assert service.server.host == "0.0.0.0"

    def test_selects_highest_priority_registry(self, config_dict: dict[str, object]) -> None:
        service = Service(config_dict)

        assert service.registry_target is not None
        assert str(service.registry_target.endpoint) == "r2:9001"
        assert service.registry_client is not None
        assert service.registry_client.endpoint == service.registry_target.endpoint

    def test_no_registration_client_without_self_registry(
        self, config_dict: dict[str, object]
    ) -> None:
        service = Service(config_dict)

        assert service.registration_client is None
        assert service.registry_client is not None

    def test_registration_client_targets_selection(
        self, config_dict: dict[str, object]
    ) -> None:
        config_dict["self-registry"] = True

        service = Service(config_dict)

        assert service.registration_client is not None
        assert service.registration_client.target == service.registry_target
        assert service.registration_client.state is EnumRegistrationState.IDLE

    def test_no_registry_configured(self, config_dict: dict[str, object]) -> None:
        config_dict["services"] = [{"type": "database", "hostname": "db", "port": 5432}]
        config_dict["self-registry"] = True

        service = Service(config_dict)

        assert service.registry_target is None
        assert service.registry_client is None
        assert service.registration_client is not None
        assert service.registration_client.target is None

    def test_non_registry_entries_without_port(
        self, config_dict: dict[str, object]
    ) -> None:
        config_dict["services"] = [
            {"type": "database", "url": "postgres://db/app"},
            {"url": "amqp://broker"},
            {"type": "registry", "hostname": "r1", "port": 9000, "priority": 1},
        ]

        service = Service(config_dict)

        assert service.registry_target is not None
        assert str(service.registry_target.endpoint) == "r1:9000"
        assert service.config.services[0].model_extra == {"url": "postgres://db/app"}

    def test_default_routes_mounted_under_prefix(
        self, config_dict: dict[str, object]
    ) -> None:
        config_dict["prefix"] = "/svc1"

        service = Service(config_dict)

        assert service.server.mounted_routes == [
            ("GET", "/svc1", "service_foundation.controllers.health_default_controller")
        ]

    def test_default_routes_disabled(self, config_dict: dict[str, object]) -> None:
        config_dict["registerDefaultRoutes"] = False
        provider = StaticRouteProvider(
            [USERS_GROUP, ModelRouteGroup(source="tests.defaults", is_default=True)]
        )

        service = Service(config_dict, route_provider=provider)

        assert [source for _, _, source in service.server.mounted_routes] == [
            "tests.users_controller"
        ]


class TestServiceRoutes:
    """Tests for requests served through mounted routes."""

    async def test_handlers_receive_service(self, config_dict: dict[str, object]) -> None:
        config_dict["prefix"] = "api"
        service = Service(config_dict, route_provider=StaticRouteProvider([USERS_GROUP]))

        async with test_utils.TestClient(test_utils.TestServer(service.server.app)) as client:
            response = await client.get("/api/users")
            assert await response.json() == {"served_by": "svc1"}

    async def test_default_root_route(self, config_dict: dict[str, object]) -> None:
        config_dict["self-registry"] = True
        service = Service(config_dict)

        async with test_utils.TestClient(test_utils.TestServer(service.server.app)) as client:
            response = await client.get("/")
            assert response.status == 200
            assert await response.json() == {
                "status": "ok",
                "guid": config_dict["guid"],
                "name": "svc1",
                "version": "1.0.0",
                "registration": "idle",
            }


class TestServiceLifecycle:
    """Tests for Service start/stop."""

    async def test_start_without_self_registry(
        self, local_config: dict[str, object]
    ) -> None:
        service = Service(local_config)

        await service.start()
        try:
            assert service.server.is_running
            assert service.registration_task is None
        finally:
            await service.stop()

        assert not service.server.is_running

    async def test_registration_does_not_block_start(
        self,
        local_config: dict[str, object],
        scheduler: ManualRetryScheduler,
    ) -> None:
        local_config["self-registry"] = True
        stub = RegistryStub.scripted([Hang(seconds=5.0)])
        http_client = stub.make_client()
        service = Service(local_config, http_client=http_client, retry_scheduler=scheduler)

        await service.start()
        try:
            assert service.server.is_running
            assert service.registration_task is not None
            assert not service.registration_task.done()
        finally:
            await service.stop()
            await http_client.aclose()

        assert service.registration_task is None
        assert scheduler.delays == []

    async def test_background_registration_succeeds(
        self,
        local_config: dict[str, object],
        scheduler: ManualRetryScheduler,
        stub_client: tuple[RegistryStub, httpx.AsyncClient],
    ) -> None:
        local_config["self-registry"] = True
        local_config["prefix"] = "/svc1"
        stub, http_client = stub_client
        service = Service(local_config, http_client=http_client, retry_scheduler=scheduler)

        await service.start()
        try:
            assert service.registration_task is not None
            await service.registration_task

            assert service.registration_client is not None
            assert service.registration_client.resolved_kind is (
                EnumRegistrationOutcome.SUCCESS
            )
            assert stub.requests[0].url.host == "r2"
            assert stub.bodies[0]["prefix"] == "/svc1"
        finally:
            await service.stop()

    async def test_retry_uses_current_config(
        self,
        local_config: dict[str, object],
        scheduler: ManualRetryScheduler,
    ) -> None:
        local_config["self-registry"] = True
        stub = RegistryStub.scripted([Refused(), 200])
        http_client = stub.make_client()
        service = Service(local_config, http_client=http_client, retry_scheduler=scheduler)

        await service.start()
        try:
            assert service.registration_task is not None
            await service.registration_task
            client = service.registration_client
            assert client is not None
            assert client.state is EnumRegistrationState.SCHEDULED_RETRY

            service.config = service.config.model_copy(update={"version": "2.0.0"})
            assert scheduler.advance(10.0) == 1
            assert client.current_attempt is not None
            await client.current_attempt

            assert client.resolved_kind is EnumRegistrationOutcome.SUCCESS
            assert [body["version"] for body in stub.bodies] == ["1.0.0", "2.0.0"]
        finally:
            await service.stop()
            await http_client.aclose()

    async def test_stop_cancels_pending_retry(
        self,
        local_config: dict[str, object],
        scheduler: ManualRetryScheduler,
    ) -> None:
        local_config["self-registry"] = True
        stub = RegistryStub.scripted([Refused()])
        http_client = stub.make_client()
        service = Service(local_config, http_client=http_client, retry_scheduler=scheduler)

        await service.start()
        assert service.registration_task is not None
        await service.registration_task
        await service.stop()
        await http_client.aclose()

        assert scheduler.handles[0].cancelled
        assert scheduler.advance(10.0) == 0
