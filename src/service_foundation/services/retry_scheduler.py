# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Retry Scheduling.

The registration client never sleeps or recurses to retry. It asks a
scheduler for a deferred callback and keeps the returned handle so a
pending retry can be cancelled on shutdown.

The default scheduler uses the running event loop's timer
(``loop.call_later``). Tests substitute a scheduler that records the
requested delay and fires callbacks on demand.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ProtocolTimerHandle(Protocol):
    """Handle of a scheduled callback."""

    def cancel(self) -> None: ...


@runtime_checkable
class ProtocolRetryScheduler(Protocol):
    """Schedules a callback after a delay."""

    def schedule(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> ProtocolTimerHandle: ...


class AsyncioRetryScheduler:
    """Scheduler backed by the running asyncio event loop.

    Must be called from within the loop (the registration client only
    schedules from its own coroutines and timer callbacks).
    """

    def schedule(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        logger.debug("Scheduling retry", extra={"delay_seconds": delay_seconds})
        return loop.call_later(delay_seconds, callback)


__all__: list[str] = [
    "AsyncioRetryScheduler",
    "ProtocolRetryScheduler",
    "ProtocolTimerHandle",
]
