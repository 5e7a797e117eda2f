# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-process registry stub built on httpx.MockTransport.

Each request to the stub pops the next scripted reaction: an HTTP status
(with optional JSON body), an exception class to raise, a connect failure
shaped like the ones httpx raises, or a delay longer than the client
deadline.
"""

from __future__ import annotations

import asyncio
import errno
import json
import socket
from collections.abc import Iterable
from dataclasses import dataclass, field

import httpx

__all__ = ["Hang", "RegistryStub", "Refused", "Unresolvable"]


@dataclass(frozen=True)
class Hang:
    """Reaction that keeps the request open for ``seconds``."""

    seconds: float = 5.0


@dataclass(frozen=True)
class Refused:
    """Reaction failing the way httpx does when nothing listens on the port.

    httpx wraps the socket error twice; the ``ConnectionRefusedError`` sits
    at the bottom of the ``__cause__`` chain.
    """

    def build(self, request: httpx.Request) -> httpx.ConnectError:
        refused = ConnectionRefusedError(errno.ECONNREFUSED, "Connection refused")
        attempts = OSError("All connection attempts failed")
        attempts.__cause__ = refused
        error = httpx.ConnectError(str(attempts), request=request)
        error.__cause__ = attempts
        return error


@dataclass(frozen=True)
class Unresolvable:
    """Reaction failing the way httpx does when the host name does not resolve."""

    def build(self, request: httpx.Request) -> httpx.ConnectError:
        lookup = socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        error = httpx.ConnectError(
            f"[Errno {lookup.errno}] {lookup.strerror}", request=request
        )
        error.__cause__ = lookup
        return error


@dataclass
class RegistryStub:
    """Scripted registry reachable through ``make_client()``.

    Attributes:
        reactions: Remaining reactions, consumed one per request. The last
            reaction repeats once the script is exhausted.
        requests: Every request received, in order.
    """

    reactions: list[object] = field(default_factory=list)
    requests: list[httpx.Request] = field(default_factory=list)

    @classmethod
    def scripted(cls, reactions: Iterable[object]) -> RegistryStub:
        return cls(reactions=list(reactions))

    def make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    @property
    def bodies(self) -> list[dict[str, object]]:
        return [json.loads(request.content) for request in self.requests]

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reaction = self.reactions.pop(0) if len(self.reactions) > 1 else self.reactions[0]

        if isinstance(reaction, Hang):
            await asyncio.sleep(reaction.seconds)
            return httpx.Response(200)
        if isinstance(reaction, (Refused, Unresolvable)):
            raise reaction.build(request)
        if isinstance(reaction, type) and issubclass(reaction, Exception):
            raise reaction("scripted failure", request=request)
        if isinstance(reaction, tuple):
            status, body = reaction
            return httpx.Response(status, json=body)
        assert isinstance(reaction, int)
        return httpx.Response(reaction)
