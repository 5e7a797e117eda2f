# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registration Outcome Enumeration.

Classification of a single registration attempt. The outcome kind alone
decides whether the retry loop stops or schedules another attempt.
"""

from enum import Enum


class EnumRegistrationOutcome(str, Enum):
    """Outcome kinds of a registration attempt.

    Attributes:
        SUCCESS: Registry answered with a status in the success band.
        REJECTED: Registry answered with a status outside the success band.
        CONNECTION_FAILED: Registry refused the connection or did not answer
            before the attempt deadline. The only retried kind.
        UNKNOWN_ERROR: Any other failure shape.
    """

    SUCCESS = "success"
    REJECTED = "rejected"
    CONNECTION_FAILED = "connection_failed"
    UNKNOWN_ERROR = "unknown_error"

    @property
    def is_retryable(self) -> bool:
        """Return True if this outcome schedules another attempt."""
        return self is EnumRegistrationOutcome.CONNECTION_FAILED


__all__ = ["EnumRegistrationOutcome"]
