# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Route Descriptor Models.

Route descriptors are supplied by a route provider; the core mounts them on
the transport without interpreting their routing semantics.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from aiohttp import web
from pydantic import BaseModel, ConfigDict, Field, field_validator

RouteHandler = Callable[[web.Request], Awaitable[web.StreamResponse]]

SUPPORTED_METHODS = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "*"}
)


class ModelRouteDescriptor(BaseModel):
    """Single route: method, path and handler coroutine.

    Attributes:
        method: HTTP method (upper-cased on validation, ``*`` for any).
        path: Route path relative to the service prefix.
        handler: aiohttp handler coroutine.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    method: str
    path: str = Field(..., min_length=1)
    handler: RouteHandler

    @field_validator("method")
    @classmethod
    def _normalize_method(cls, value: str) -> str:
        method = value.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {value!r}")
        return method

    @field_validator("path")
    @classmethod
    def _require_leading_slash(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Route path must start with '/': {value!r}")
        return value


class ModelRouteGroup(BaseModel):
    """Routes discovered from one source (usually one controller module).

    Attributes:
        source: Name of the source the routes came from.
        routes: Routes of the group, in mount order.
        is_default: True for built-in default routes, which are skipped when
            the configuration disables default routes.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str
    routes: tuple[ModelRouteDescriptor, ...] = ()
    is_default: bool = False


__all__: list[str] = [
    "SUPPORTED_METHODS",
    "ModelRouteDescriptor",
    "ModelRouteGroup",
    "RouteHandler",
]
