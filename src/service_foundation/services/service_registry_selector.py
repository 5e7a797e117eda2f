# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registry Candidate Selection.

Picks the registry service this process registers with (and looks other
services up through) from the configured services list.

Selection Rules:
    1. Keep entries whose ``type`` equals ``"registry"``
    2. Order them by ``priority``, highest first
    3. Return the first one, or None when no entry is a registry

Equal priorities are not ordered relative to each other. The current
implementation keeps configuration order for ties (``sorted`` is stable),
but callers must not rely on it.

Example:
    >>> services = [
    ...     ModelServiceDescriptor(type="registry", hostname="r1", port=9000, priority=1),
    ...     ModelServiceDescriptor(type="registry", hostname="r2", port=9001, priority=5),
    ... ]
    >>> str(select_registry(services).endpoint)
    'r2:9001'
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from service_foundation.enums import EnumServiceType
from service_foundation.models import ModelRegistryCandidate, ModelServiceDescriptor

logger = logging.getLogger(__name__)


def registry_candidates(
    services: Sequence[ModelServiceDescriptor],
) -> list[ModelRegistryCandidate]:
    """Return all registry candidates ordered by descending priority.

    Args:
        services: Configured services list, in any order.

    Returns:
        Registry candidates, highest priority first. Empty when no entry
        is tagged as a registry. Registry entries without a port are
        skipped with a warning.
    """
    candidates: list[ModelRegistryCandidate] = []
    for index, service in enumerate(services):
        if service.type != EnumServiceType.REGISTRY.value:
            continue
        if service.port is None:
            logger.warning(
                "Registry service entry has no port, skipping",
                extra={"index": index, "hostname": service.hostname},
            )
            continue
        candidates.append(ModelRegistryCandidate.from_descriptor(service))
    return sorted(candidates, key=lambda candidate: candidate.priority, reverse=True)


def select_registry(
    services: Sequence[ModelServiceDescriptor],
) -> ModelRegistryCandidate | None:
    """Select the highest-priority registry service.

    Args:
        services: Configured services list, in any order.

    Returns:
        The selected candidate, or None if no service is tagged as a registry.
        None is a normal outcome: the service runs without registry integration.
    """
    candidates = registry_candidates(services)
    if not candidates:
        logger.debug(
            "No registry candidates in services list",
            extra={"total_services": len(services)},
        )
        return None

    selected = candidates[0]
    logger.debug(
        "Selected registry candidate",
        extra={
            "target": str(selected.endpoint),
            "priority": selected.priority,
            "total_candidates": len(candidates),
        },
    )
    return selected


__all__: list[str] = ["registry_candidates", "select_registry"]
