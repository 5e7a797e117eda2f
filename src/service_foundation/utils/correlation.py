# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Correlation ID helpers for log and error tracing."""

from uuid import UUID, uuid4


def generate_correlation_id() -> UUID:
    """Return a new UUID4 correlation ID."""
    return uuid4()


__all__: list[str] = ["generate_correlation_id"]
