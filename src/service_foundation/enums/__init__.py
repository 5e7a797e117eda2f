# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Enumerations for service foundation."""

from service_foundation.enums.enum_error_code import EnumErrorCode
from service_foundation.enums.enum_infra_transport_type import EnumInfraTransportType
from service_foundation.enums.enum_registration_outcome import EnumRegistrationOutcome
from service_foundation.enums.enum_registration_state import EnumRegistrationState
from service_foundation.enums.enum_service_type import EnumServiceType

__all__: list[str] = [
    "EnumErrorCode",
    "EnumInfraTransportType",
    "EnumRegistrationOutcome",
    "EnumRegistrationState",
    "EnumServiceType",
]
