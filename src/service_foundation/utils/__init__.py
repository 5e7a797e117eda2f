# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Utility modules for service foundation.

    - correlation: Correlation ID generation for log and error tracing
    - connection: Inspection of connection failure chains
"""

from service_foundation.utils.connection import is_connection_refused
from service_foundation.utils.correlation import generate_correlation_id

__all__: list[str] = ["generate_correlation_id", "is_connection_refused"]
