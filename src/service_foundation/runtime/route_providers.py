# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Route Providers.

StaticRouteProvider:
    Serves route groups built in code.

ModuleRouteProvider:
    Imports every ``*_controller`` module of a package (recursively) and
    reads its module-level ``ROUTES`` sequence. Each entry is either a
    ModelRouteDescriptor or a mapping with ``method``, ``path`` and
    ``handler`` keys. Modules named ``*_default_controller`` provide the
    default routes, which the service skips when default routes are
    disabled in its configuration.

Security Considerations:
    Importing a controller module executes it. Only point the module
    provider at packages you trust.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from collections.abc import Mapping, Sequence
from types import ModuleType

from pydantic import ValidationError

from service_foundation.enums import EnumInfraTransportType
from service_foundation.errors import ModelServiceErrorContext, ProtocolConfigurationError
from service_foundation.models import ModelRouteDescriptor, ModelRouteGroup

logger = logging.getLogger(__name__)

CONTROLLER_SUFFIX = "_controller"
DEFAULT_CONTROLLER_SUFFIX = "_default_controller"
ROUTES_ATTRIBUTE = "ROUTES"


class StaticRouteProvider:
    """Route provider serving a fixed list of route groups."""

    def __init__(self, groups: Sequence[ModelRouteGroup] | None = None) -> None:
        self._groups: list[ModelRouteGroup] = list(groups or [])

    def add_group(self, group: ModelRouteGroup) -> None:
        self._groups.append(group)

    def get_route_groups(self) -> Sequence[ModelRouteGroup]:
        return list(self._groups)


class ModuleRouteProvider:
    """Route provider importing controller modules from a package.

    Example:
        >>> provider = ModuleRouteProvider("myservice.controllers")
        >>> [group.source for group in provider.get_route_groups()]
        ['myservice.controllers.health_default_controller', 'myservice.controllers.users_controller']
    """

    def __init__(self, package: str) -> None:
        self._package = package

    @property
    def package(self) -> str:
        return self._package

    def get_route_groups(self) -> Sequence[ModelRouteGroup]:
        """Import controller modules and return one route group per module.

        Raises:
            ProtocolConfigurationError: If the package cannot be imported, or
                a controller has no ``ROUTES`` or an invalid route entry.
        """
        package = self._import(self._package)
        search_path = getattr(package, "__path__", None)
        if search_path is None:
            raise ProtocolConfigurationError(
                f"Controller source '{self._package}' is not a package",
                context=self._context(self._package),
            )

        module_names = sorted(
            info.name
            for info in pkgutil.walk_packages(search_path, prefix=f"{self._package}.")
            if not info.ispkg and info.name.endswith(CONTROLLER_SUFFIX)
        )

        groups: list[ModelRouteGroup] = []
        for module_name in module_names:
            module = self._import(module_name)
            groups.append(
                ModelRouteGroup(
                    source=module_name,
                    routes=self._read_routes(module),
                    is_default=module_name.endswith(DEFAULT_CONTROLLER_SUFFIX),
                )
            )
            logger.debug(
                "Discovered controller",
                extra={"controller": module_name, "route_count": len(groups[-1].routes)},
            )
        return groups

    def _read_routes(self, module: ModuleType) -> tuple[ModelRouteDescriptor, ...]:
        entries = getattr(module, ROUTES_ATTRIBUTE, None)
        if entries is None:
            raise ProtocolConfigurationError(
                f"Controller '{module.__name__}' does not define {ROUTES_ATTRIBUTE}",
                context=self._context(module.__name__),
            )

        routes: list[ModelRouteDescriptor] = []
        for index, entry in enumerate(entries):
            if isinstance(entry, ModelRouteDescriptor):
                routes.append(entry)
                continue
            if not isinstance(entry, Mapping):
                raise ProtocolConfigurationError(
                    f"Route {index} of '{module.__name__}' must be a mapping or "
                    f"ModelRouteDescriptor, got {type(entry).__name__}",
                    context=self._context(module.__name__),
                )
            try:
                routes.append(ModelRouteDescriptor.model_validate(entry))
            except ValidationError as e:
                raise ProtocolConfigurationError(
                    f"Route {index} of '{module.__name__}' is invalid",
                    context=self._context(module.__name__),
                    error_count=e.error_count(),
                ) from e
        return tuple(routes)

    def _import(self, module_name: str) -> ModuleType:
        try:
            return importlib.import_module(module_name)
        except ImportError as e:
            raise ProtocolConfigurationError(
                f"Failed to import controller module '{module_name}'",
                context=self._context(module_name),
            ) from e

    @staticmethod
    def _context(target_name: str) -> ModelServiceErrorContext:
        return ModelServiceErrorContext(
            transport_type=EnumInfraTransportType.HTTP,
            operation="discover_routes",
            target_name=target_name,
        )


__all__: list[str] = [
    "CONTROLLER_SUFFIX",
    "DEFAULT_CONTROLLER_SUFFIX",
    "ROUTES_ATTRIBUTE",
    "ModuleRouteProvider",
    "StaticRouteProvider",
]
