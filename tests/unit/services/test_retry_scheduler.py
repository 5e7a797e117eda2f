# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the event loop retry scheduler."""

from __future__ import annotations

import asyncio

from service_foundation.services import AsyncioRetryScheduler


class TestAsyncioRetryScheduler:
    """Tests for AsyncioRetryScheduler."""

    async def test_callback_fires_after_delay(self) -> None:
        fired = asyncio.Event()

        AsyncioRetryScheduler().schedule(0.01, fired.set)

        await asyncio.wait_for(fired.wait(), timeout=1.0)

    async def test_cancelled_callback_never_fires(self) -> None:
        calls: list[int] = []

        handle = AsyncioRetryScheduler().schedule(0.01, lambda: calls.append(1))
        handle.cancel()
        await asyncio.sleep(0.05)

        assert calls == []
