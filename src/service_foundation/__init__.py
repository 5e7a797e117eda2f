# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Foundation.

Bootstraps an HTTP service from a declarative configuration: validates the
configuration, mounts route handlers supplied by a route provider and
optionally self-registers with the highest-priority registry service.
"""

from service_foundation.runtime.service import Service

__all__: list[str] = ["Service"]
