# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Schema Provider Protocol.

Schema providers supply the named schemas the configuration validator
checks documents against. How a provider finds its schemas (static
mapping, entry points, files following a ``.schema.json`` naming
convention) is the provider's concern, not the validator's.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class ProtocolSchemaProvider(Protocol):
    """Supplies named configuration schemas."""

    def get_schemas(self) -> Mapping[str, type[BaseModel]]:
        """Return schemas keyed by the name documents are validated against."""
        ...


__all__: list[str] = ["ProtocolSchemaProvider"]
