# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error Code Enumeration.

Stable codes attached to every ServiceFoundationError for log filtering.
"""

from enum import Enum


class EnumErrorCode(str, Enum):
    """Error codes for service foundation errors."""

    OPERATION_FAILED = "OPERATION_FAILED"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    REGISTRATION_REJECTED = "REGISTRATION_REJECTED"


__all__ = ["EnumErrorCode"]
