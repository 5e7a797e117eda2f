# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registration State Enumeration."""

from enum import Enum


class EnumRegistrationState(str, Enum):
    """States of the registration retry state machine.

    Transitions::

        IDLE ──start──> ATTEMPTING
        ATTEMPTING ──connection_failed──> SCHEDULED_RETRY
        SCHEDULED_RETRY ──timer──> ATTEMPTING
        ATTEMPTING ──success|rejected|unknown_error──> RESOLVED
        IDLE ──no target──> RESOLVED
    """

    IDLE = "idle"
    ATTEMPTING = "attempting"
    SCHEDULED_RETRY = "scheduled_retry"
    RESOLVED = "resolved"


__all__ = ["EnumRegistrationState"]
