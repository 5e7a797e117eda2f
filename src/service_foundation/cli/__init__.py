# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Foundation command line interface."""

from service_foundation.cli.commands import cli

__all__: list[str] = ["cli"]
