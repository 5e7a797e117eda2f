# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registration Outcome Model."""

from __future__ import annotations


from pydantic import BaseModel, ConfigDict

from service_foundation.enums import EnumRegistrationOutcome


class ModelRegistrationOutcome(BaseModel):
    """Classified result of one registration attempt.

    Attributes:
        kind: Outcome kind; decides whether another attempt is scheduled.
        status_code: HTTP status when the registry answered.
        body: Decoded response body for rejected attempts.
        detail: Short description of the failure for the other kinds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: EnumRegistrationOutcome
    status_code: int | None = None
    body: object = None
    detail: str | None = None

    @classmethod
    def success(cls, status_code: int) -> ModelRegistrationOutcome:
        return cls(kind=EnumRegistrationOutcome.SUCCESS, status_code=status_code)

    @classmethod
    def rejected(cls, status_code: int, body: object) -> ModelRegistrationOutcome:
        return cls(
            kind=EnumRegistrationOutcome.REJECTED, status_code=status_code, body=body
        )

    @classmethod
    def connection_failed(cls, detail: str) -> ModelRegistrationOutcome:
        return cls(kind=EnumRegistrationOutcome.CONNECTION_FAILED, detail=detail)

    @classmethod
    def unknown_error(cls, detail: str) -> ModelRegistrationOutcome:
        return cls(kind=EnumRegistrationOutcome.UNKNOWN_ERROR, detail=detail)

    @property
    def is_retryable(self) -> bool:
        return self.kind.is_retryable


__all__: list[str] = ["ModelRegistrationOutcome"]
