"""Pytest configuration and shared fixtures for service_foundation tests."""

from __future__ import annotations

import copy

import pytest

VALID_GUID = "0f8fad5b-d9cb-469f-a165-70867728950e"

BASE_CONFIG: dict[str, object] = {
    "guid": VALID_GUID,
    "name": "svc1",
    "domain": "svc1.local",
    "port": 8080,
    "version": "1.0.0",
    "services": [
        {"type": "registry", "hostname": "r1", "port": 9000, "priority": 1},
        {"type": "registry", "hostname": "r2", "port": 9001, "priority": 5},
    ],
}


@pytest.fixture
def config_dict() -> dict[str, object]:
    """Return a fresh, valid configuration document with two registries."""
    return copy.deepcopy(BASE_CONFIG)
