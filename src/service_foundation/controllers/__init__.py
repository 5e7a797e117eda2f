# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Built-in controllers mounted by every service unless disabled."""
