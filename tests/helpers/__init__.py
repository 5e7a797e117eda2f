# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for service_foundation tests.

Available Utilities:
    Deterministic:
        - ManualRetryScheduler: Virtual-time stand-in for the retry timer
        - ManualTimerHandle: Handle issued by ManualRetryScheduler

    Registry:
        - RegistryStub: Scripted registry on httpx.MockTransport
        - Hang: Reaction keeping a request open past the client deadline
        - Refused: Reaction failing with a refused connection
        - Unresolvable: Reaction failing with an unresolvable host name

    Log Helpers:
        - filter_module_records: Filter log records by module and level
        - get_messages: Extract formatted messages from log records

    aiohttp:
        - get_aiohttp_bound_port: Port of a ServiceHttpServer started on port 0
"""

from tests.helpers.aiohttp_utils import get_aiohttp_bound_port
from tests.helpers.deterministic import ManualRetryScheduler, ManualTimerHandle
from tests.helpers.log_helpers import filter_module_records, get_messages
from tests.helpers.registry_stub import (
    Hang,
    RegistryStub,
    Refused,
    Unresolvable,
)

__all__ = [
    "Hang",
    "ManualRetryScheduler",
    "ManualTimerHandle",
    "Refused",
    "RegistryStub",
    "Unresolvable",
    "filter_module_records",
    "get_aiohttp_bound_port",
    "get_messages",
]
