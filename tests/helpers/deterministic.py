# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Deterministic test utilities for predictable testing.

ManualRetryScheduler stands in for the event loop timer used by the
registration client. It records every requested delay and fires callbacks
only when the test advances virtual time, so retry behavior can be checked
without sleeping.

Example usage:
    >>> scheduler = ManualRetryScheduler()
    >>> client = RegistrationClient(provider, target, scheduler=scheduler)
    >>> await client.start()           # first attempt fails with ECONNREFUSED
    >>> scheduler.delays
    [10.0]
    >>> scheduler.advance(10.0)        # fires the retry
    1
    >>> await client.current_attempt   # let the retry finish
"""

from __future__ import annotations

from collections.abc import Callable

__all__ = [
    "ManualRetryScheduler",
    "ManualTimerHandle",
]


class ManualTimerHandle:
    """Timer handle returned by ManualRetryScheduler.

    Attributes:
        due_at: Virtual time at which the callback fires.
        cancelled: True once cancel() was called.
        fired: True once the callback ran.
    """

    def __init__(self, due_at: float, callback: Callable[[], None]) -> None:
        self.due_at: float = due_at
        self.callback: Callable[[], None] = callback
        self.cancelled: bool = False
        self.fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualRetryScheduler:
    """Retry scheduler driven by virtual time.

    Attributes:
        now: Current virtual time in seconds.
        delays: Every delay requested so far, in request order.
        handles: Every handle issued so far, in request order.
    """

    def __init__(self) -> None:
        self.now: float = 0.0
        self.delays: list[float] = []
        self.handles: list[ManualTimerHandle] = []

    def schedule(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> ManualTimerHandle:
        handle = ManualTimerHandle(self.now + delay_seconds, callback)
        self.delays.append(delay_seconds)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualTimerHandle]:
        """Return handles that are neither cancelled nor fired."""
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, seconds: float) -> int:
        """Advance virtual time and fire every callback that became due.

        Must be called from a running event loop when the callbacks start
        tasks (the registration client's retry callback does).

        Returns:
            Number of callbacks fired.
        """
        self.now += seconds
        fired = 0
        for handle in sorted(self.pending, key=lambda h: h.due_at):
            if handle.due_at <= self.now:
                handle.fired = True
                handle.callback()
                fired += 1
        return fired
