# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Orchestrator.

Owns the configuration, the HTTP transport and the registry clients of a
service and wires them together.

Construction Order:
    1. Load and validate configuration (InvalidConfigError aborts construction)
    2. Initialize the HTTP transport from the validated settings
    3. Mount route groups from the route provider
    4. Select the registry candidate and, if ``self-registry`` is enabled,
       prepare the registration client
    5. Build the registry lookup client whenever a candidate exists,
       independent of ``self-registry``

``start()`` binds the transport and launches registration as a background
task. Serving traffic never waits on registration, and registration
failures never reach the service: they are logged by the registration
client and either retried or dropped.

Example:
    >>> service = Service("/etc/svc1/config.json")
    >>> await service.start()
    >>> ...
    >>> await service.stop()
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping
from pathlib import Path

import httpx

from service_foundation.errors import InvalidConfigError
from service_foundation.models import ModelRegistryCandidate, ModelServiceConfig
from service_foundation.runtime.config_loader import load_config_from_file
from service_foundation.runtime.config_validator import (
    SERVICE_CONFIG_SCHEMA,
    ConfigurationValidator,
)
from service_foundation.runtime.http_server import DEFAULT_HTTP_HOST, ServiceHttpServer
from service_foundation.runtime.protocol_route_provider import ProtocolRouteProvider
from service_foundation.runtime.protocol_schema_provider import ProtocolSchemaProvider
from service_foundation.runtime.route_providers import ModuleRouteProvider
from service_foundation.services import (
    ProtocolRetryScheduler,
    RegistrationClient,
    RegistryLookupClient,
    select_registry,
)
from service_foundation.utils import generate_correlation_id

logger = logging.getLogger(__name__)

DEFAULT_CONTROLLERS_PACKAGE = "service_foundation.controllers"

ConfigSource = str | os.PathLike[str] | Mapping[str, object] | ModelServiceConfig


class Service:
    """A configured HTTP service with optional self-registration.

    Attributes:
        config: Validated service configuration. May be replaced at runtime;
            each registration attempt reads the current value.
        server: HTTP transport of the service.
        registry_target: Registry candidate selected from the configuration.
        registration_client: Self-registration client (None unless
            ``self-registry`` is enabled).
        registry_client: Lookup client for finding other services (None when
            no registry is configured).
    """

    def __init__(
        self,
        config: ConfigSource,
        config_format: str = "json",
        *,
        route_provider: ProtocolRouteProvider | None = None,
        schema_provider: ProtocolSchemaProvider | None = None,
        http_client: httpx.AsyncClient | None = None,
        retry_scheduler: ProtocolRetryScheduler | None = None,
    ) -> None:
        """Create a service.

        Args:
            config: Configuration file path, configuration mapping or model.
            config_format: Format of a configuration file (``json`` or ``yaml``).
            route_provider: Supplies routes to mount (default: controllers of
                the ``service_foundation.controllers`` package).
            schema_provider: Supplies configuration schemas to the validator.
            http_client: httpx client shared by the registry clients. When
                omitted each client owns its own.
            retry_scheduler: Scheduler for registration retries (default:
                event loop timer).

        Raises:
            InvalidConfigError: If the configuration is invalid or cannot be loaded.
        """
        self.validator = ConfigurationValidator(schema_provider)
        loaded = self._load_config(config, config_format)
        if loaded is None:
            raise InvalidConfigError(
                "Configuration file is invalid or doesn't exist",
                config_source=str(config) if isinstance(config, (str, os.PathLike)) else None,
            )
        self.config: ModelServiceConfig = loaded

        self.server: ServiceHttpServer = self._init_http_server()
        self.register_routes(
            route_provider or ModuleRouteProvider(DEFAULT_CONTROLLERS_PACKAGE),
            register_default_routes=self.config.register_default_routes,
        )

        self.registry_target: ModelRegistryCandidate | None = select_registry(
            self.config.services
        )
        if self.registry_target is None:
            logger.warning(
                "No registry service configured, running without registry integration",
                extra={"service_name": self.config.name},
            )

        self.registration_client: RegistrationClient | None = None
        if self.config.self_registry:
            self.registration_client = RegistrationClient(
                lambda: self.config,
                self.registry_target,
                http_client=http_client,
                scheduler=retry_scheduler,
            )

        self.registry_client: RegistryLookupClient | None = None
        if self.registry_target is not None:
            self.registry_client = RegistryLookupClient(
                self.registry_target.endpoint, http_client=http_client
            )

        self._registration_task: asyncio.Task[None] | None = None

    @property
    def registration_task(self) -> asyncio.Task[None] | None:
        return self._registration_task

    def register_routes(
        self, provider: ProtocolRouteProvider, register_default_routes: bool = True
    ) -> int:
        """Mount the route groups supplied by ``provider``.

        Args:
            provider: Route provider.
            register_default_routes: Mount default route groups too.

        Returns:
            Number of routes mounted.
        """
        mounted = 0
        for group in provider.get_route_groups():
            if group.is_default and not register_default_routes:
                logger.debug(
                    "Skipping default controller", extra={"controller": group.source}
                )
                continue
            mounted += self.server.mount(group, context=self)
        return mounted

    async def start(self) -> None:
        """Start serving and launch self-registration in the background.

        Raises:
            ServiceFoundationError: If the transport cannot be started.
        """
        correlation_id = generate_correlation_id()
        logger.info(
            "Starting service %s v%s (correlation_id=%s)",
            self.config.name,
            self.config.version,
            correlation_id,
            extra={"guid": self.config.guid, "port": self.config.port},
        )
        await self.server.start()

        if self.registration_client is not None and self._registration_task is None:
            self._registration_task = asyncio.create_task(
                self.registration_client.start(), name="service-registration"
            )

    async def stop(self) -> None:
        """Stop registration retries, the transport and the registry clients."""
        if self.registration_client is not None:
            await self.registration_client.close()
        task = self._registration_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._registration_task = None

        await self.server.stop()
        if self.registry_client is not None:
            await self.registry_client.close()
        logger.info("Service %s stopped", self.config.name)

    def _load_config(
        self, config: ConfigSource, config_format: str
    ) -> ModelServiceConfig | None:
        if isinstance(config, (str, os.PathLike)):
            return load_config_from_file(Path(config), config_format, self.validator)
        parsed = self.validator.parse(config, SERVICE_CONFIG_SCHEMA)
        if parsed is None or not isinstance(parsed, ModelServiceConfig):
            return None
        return parsed

    def _init_http_server(self) -> ServiceHttpServer:
        server_settings = self.config.settings.get("server") or {}
        host = DEFAULT_HTTP_HOST
        if isinstance(server_settings, Mapping):
            host = str(server_settings.get("host", DEFAULT_HTTP_HOST))
        return ServiceHttpServer(
            port=self.config.port,
            host=host,
            prefix=self.config.prefix,
            context=self,
        )


__all__: list[str] = ["DEFAULT_CONTROLLERS_PACKAGE", "Service"]
