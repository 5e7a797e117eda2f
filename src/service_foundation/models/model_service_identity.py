# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Identity Model.

Identifies this process to a registry. Built from the loaded configuration
and never mutated afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# UUID with optional surrounding braces, e.g. "{0f8fad5b-d9cb-469f-a165-70867728950e}"
GUID_PATTERN = (
    r"^\{?[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\}?$"
)

# Names and domains must not start with whitespace
NAME_PATTERN = r"^\S"
NAME_MIN_LENGTH = 4
NAME_MAX_LENGTH = 255


class ModelServiceIdentity(BaseModel):
    """Immutable identity of this service.

    Attributes:
        guid: UUID-formatted identifier (braces optional).
        name: Service name (4-255 chars, no leading whitespace).
        version: Service version string.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    guid: str = Field(..., pattern=GUID_PATTERN)
    name: str = Field(
        ...,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        pattern=NAME_PATTERN,
    )
    version: str


__all__: list[str] = [
    "GUID_PATTERN",
    "NAME_MAX_LENGTH",
    "NAME_MIN_LENGTH",
    "NAME_PATTERN",
    "ModelServiceIdentity",
]
