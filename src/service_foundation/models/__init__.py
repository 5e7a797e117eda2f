# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pydantic models for service foundation."""

from service_foundation.models.model_registration_outcome import ModelRegistrationOutcome
from service_foundation.models.model_registration_request import ModelRegistrationRequest
from service_foundation.models.model_registry_candidate import ModelRegistryCandidate
from service_foundation.models.model_route_descriptor import (
    ModelRouteDescriptor,
    ModelRouteGroup,
    RouteHandler,
)
from service_foundation.models.model_service_config import ModelServiceConfig
from service_foundation.models.model_service_descriptor import ModelServiceDescriptor
from service_foundation.models.model_service_endpoint import ModelServiceEndpoint
from service_foundation.models.model_service_identity import ModelServiceIdentity

__all__: list[str] = [
    "ModelRegistrationOutcome",
    "ModelRegistrationRequest",
    "ModelRegistryCandidate",
    "ModelRouteDescriptor",
    "ModelRouteGroup",
    "ModelServiceConfig",
    "ModelServiceDescriptor",
    "ModelServiceEndpoint",
    "ModelServiceIdentity",
    "RouteHandler",
]
