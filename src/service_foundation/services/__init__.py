# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registry integration services.

    - select_registry: picks the highest-priority registry candidate
    - RegistrationClient: self-registration with outcome classification and retry
    - RegistryLookupClient: finds other services through the selected registry
"""

from service_foundation.services.retry_scheduler import (
    AsyncioRetryScheduler,
    ProtocolRetryScheduler,
    ProtocolTimerHandle,
)
from service_foundation.services.service_registration_client import (
    DEFAULT_REGISTER_TIMEOUT_SECONDS,
    DEFAULT_RETRY_DELAY_SECONDS,
    REGISTER_PATH,
    RegistrationClient,
    is_success_status,
)
from service_foundation.services.service_registry_lookup import (
    LOOKUP_PATH,
    RegistryLookupClient,
)
from service_foundation.services.service_registry_selector import (
    registry_candidates,
    select_registry,
)

__all__: list[str] = [
    "AsyncioRetryScheduler",
    "DEFAULT_REGISTER_TIMEOUT_SECONDS",
    "DEFAULT_RETRY_DELAY_SECONDS",
    "LOOKUP_PATH",
    "ProtocolRetryScheduler",
    "ProtocolTimerHandle",
    "REGISTER_PATH",
    "RegistrationClient",
    "RegistryLookupClient",
    "is_success_status",
    "registry_candidates",
    "select_registry",
]
