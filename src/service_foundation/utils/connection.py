# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Connection failure inspection.

httpx reports every failure to open a connection as ``httpx.ConnectError``:
refused ports, unresolvable host names, unreachable networks and resets
alike. The underlying ``OSError`` survives in the exception chain
(``__cause__``/``__context__``, and inside exception groups raised by the
connection backend when several addresses were tried).
"""

from __future__ import annotations

import errno
import socket


def is_connection_refused(error: BaseException) -> bool:
    """Return True if ``error`` was caused by an actively refused connection.

    Walks the exception chain, including members of exception groups.
    Name resolution failures never count as refusals.
    """
    pending: list[BaseException] = [error]
    seen: set[int] = set()
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))

        if isinstance(current, ConnectionRefusedError):
            return True
        if (
            isinstance(current, OSError)
            and not isinstance(current, socket.gaierror)
            and current.errno == errno.ECONNREFUSED
        ):
            return True

        if isinstance(current, BaseExceptionGroup):
            pending.extend(current.exceptions)
        if current.__cause__ is not None:
            pending.append(current.__cause__)
        if current.__context__ is not None:
            pending.append(current.__context__)
    return False


__all__: list[str] = ["is_connection_refused"]
