# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registry Lookup Client.

Consumes the selected registry to find other services. This is the read
side of registry integration and is independent of self-registration: the
service builds it whenever a registry candidate exists.

Wire Call:
    GET http://{registry_host}:{registry_port}/v1/catalog/service/{name}
    Response: JSON array of objects carrying at least ``hostname`` and ``port``
    404: the registry knows no instance of ``name`` (empty result)
"""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from service_foundation.enums import EnumInfraTransportType
from service_foundation.errors import (
    InfraConnectionError,
    InfraTimeoutError,
    InfraUnavailableError,
    ModelServiceErrorContext,
)
from service_foundation.models import ModelServiceEndpoint
from service_foundation.utils import generate_correlation_id, is_connection_refused

logger = logging.getLogger(__name__)

LOOKUP_PATH = "/v1/catalog/service/{name}"
DEFAULT_LOOKUP_TIMEOUT_SECONDS: float = 1.0


class RegistryLookupClient:
    """Looks up service instances in a registry.

    Example:
        >>> client = RegistryLookupClient(ModelServiceEndpoint(hostname="r2", port=9001))
        >>> endpoints = await client.lookup("billing")
        >>> await client.close()
    """

    def __init__(
        self,
        endpoint: ModelServiceEndpoint,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    ) -> None:
        self._endpoint = endpoint
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._timeout_seconds = timeout_seconds

    @property
    def endpoint(self) -> ModelServiceEndpoint:
        return self._endpoint

    async def lookup(self, name: str) -> list[ModelServiceEndpoint]:
        """Return the endpoints the registry lists for ``name``.

        Args:
            name: Registered service name.

        Returns:
            Endpoints in registry order; empty if the registry answered 404.

        Raises:
            InfraConnectionError: If the registry refused the connection.
            InfraTimeoutError: If the registry did not answer in time.
            InfraUnavailableError: If the registry is unreachable, answered
                with an error status or returned an unreadable payload.
        """
        url = self._endpoint.base_url + LOOKUP_PATH.format(name=quote(name, safe=""))
        ctx = ModelServiceErrorContext.for_endpoint(
            EnumInfraTransportType.REGISTRY,
            "lookup",
            self._endpoint,
            correlation_id=generate_correlation_id(),
        )
        client = self._get_http_client()

        try:
            async with asyncio.timeout(self._timeout_seconds):
                response = await client.get(url)
        except (TimeoutError, httpx.TimeoutException) as e:
            raise InfraTimeoutError(
                f"Registry lookup timed out after {self._timeout_seconds}s",
                context=ctx,
                timeout_seconds=self._timeout_seconds,
            ) from e
        except httpx.ConnectError as e:
            if is_connection_refused(e):
                raise InfraConnectionError(
                    f"Registry at {self._endpoint} refused the connection", context=ctx
                ) from e
            raise InfraUnavailableError(
                f"Registry at {self._endpoint} is unreachable: {e}", context=ctx
            ) from e
        except httpx.HTTPError as e:
            raise InfraUnavailableError(
                f"HTTP error during registry lookup: {type(e).__name__}", context=ctx
            ) from e

        if response.status_code == 404:
            logger.debug("Registry lists no instances", extra={"service_name": name})
            return []
        if response.status_code >= 400:
            raise InfraUnavailableError(
                f"Registry lookup failed ({response.status_code})",
                context=ctx,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
            if not isinstance(payload, list):
                raise TypeError(f"expected a JSON array, got {type(payload).__name__}")
            return [
                ModelServiceEndpoint(hostname=item["hostname"], port=item["port"])
                for item in payload
            ]
        except (ValueError, TypeError, KeyError, ValidationError) as e:
            raise InfraUnavailableError(
                "Registry returned an unreadable lookup payload", context=ctx
            ) from e

    async def close(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout_seconds)
            )
        return self._http_client


__all__: list[str] = [
    "DEFAULT_LOOKUP_TIMEOUT_SECONDS",
    "LOOKUP_PATH",
    "RegistryLookupClient",
]
