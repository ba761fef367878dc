"""
Controller registry for the Parse schema SDK.

This module provides the process-wide registry of pluggable controllers:
- SchemaController: get/create/update/delete/send against the schema endpoint
- RESTController: request(method, path, data, options) against the server

ParseSchema resolves its controller from the registry at every dispatch,
so swapping an implementation takes effect for the next call. This is the
seam for tests and for alternate transports (e.g. an offline schema store).

Example:
    >>> from parse_sdk import get_registry, MemorySchemaController
    >>>
    >>> get_registry().set_schema_controller(MemorySchemaController())
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Awaitable, Protocol, runtime_checkable

from .errors import ControllerNotConfiguredError, InvalidControllerError

logger = logging.getLogger(__name__)

SCHEMA_CONTROLLER = "SchemaController"
REST_CONTROLLER = "RESTController"

REQUIRED_METHODS: dict[str, tuple[str, ...]] = {
    SCHEMA_CONTROLLER: ("send", "get", "create", "update", "delete"),
    REST_CONTROLLER: ("request",),
}

# Global registry
_global_registry: ControllerRegistry | None = None
_registry_lock = threading.Lock()


@runtime_checkable
class SchemaController(Protocol):
    """Protocol for schema transports.

    Every operation returns an awaitable resolving to exactly one result.
    The empty class name passed to get() means "list all classes".
    """

    def send(
        self, class_name: str, method: str, params: dict[str, Any], options: dict[str, Any]
    ) -> Awaitable[Any]: ...

    def get(self, class_name: str, options: dict[str, Any]) -> Awaitable[Any]: ...

    def create(
        self, class_name: str, params: dict[str, Any], options: dict[str, Any]
    ) -> Awaitable[Any]: ...

    def update(
        self, class_name: str, params: dict[str, Any], options: dict[str, Any]
    ) -> Awaitable[Any]: ...

    def delete(self, class_name: str, options: dict[str, Any]) -> Awaitable[Any]: ...


@runtime_checkable
class RESTController(Protocol):
    """Protocol for the REST transport used by RestSchemaController."""

    def request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Awaitable[Any]: ...


class ControllerRegistry:
    """Registry of active controller implementations.

    Slots are keyed by capability name. Setting a slot only checks that the
    implementation exposes the slot's required operations.

    Example:
        >>> registry = ControllerRegistry()
        >>> registry.set_schema_controller(MemorySchemaController())
        >>> registry.get_schema_controller()
    """

    def __init__(self) -> None:
        """Initialize registry with empty slots."""
        self._controllers: dict[str, Any] = {}
        self._lock = threading.Lock()

    def set(self, name: str, controller: Any) -> None:
        """Install a controller, replacing any previous one.

        Args:
            name: Capability name (SchemaController, RESTController)
            controller: Implementation exposing the required operations

        Raises:
            KeyError: If name is not a known capability
            InvalidControllerError: If required operations are missing
        """
        if name not in REQUIRED_METHODS:
            raise KeyError(f"Unknown controller: {name}")

        missing = [
            method
            for method in REQUIRED_METHODS[name]
            if not callable(getattr(controller, method, None))
        ]
        if missing:
            raise InvalidControllerError(name, missing)

        with self._lock:
            self._controllers[name] = controller
        logger.debug("Installed %s: %s", name, type(controller).__name__)

    def get(self, name: str) -> Any:
        """Get the active controller for a capability.

        Raises:
            ControllerNotConfiguredError: If nothing is installed
        """
        controller = self._controllers.get(name)
        if controller is None:
            raise ControllerNotConfiguredError(name)
        return controller

    def is_configured(self, name: str) -> bool:
        """Whether a controller is installed for name."""
        return name in self._controllers

    def set_schema_controller(self, controller: SchemaController) -> None:
        self.set(SCHEMA_CONTROLLER, controller)

    def get_schema_controller(self) -> SchemaController:
        return self.get(SCHEMA_CONTROLLER)

    def set_rest_controller(self, controller: RESTController) -> None:
        self.set(REST_CONTROLLER, controller)

    def get_rest_controller(self) -> RESTController:
        return self.get(REST_CONTROLLER)


def _install_defaults(registry: ControllerRegistry) -> None:
    """Install the REST-backed controllers."""
    from ._rest_client import HttpxRestController
    from .controllers import RestSchemaController

    registry.set_rest_controller(HttpxRestController())
    registry.set_schema_controller(RestSchemaController())


def get_registry() -> ControllerRegistry:
    """Get the global controller registry, installing defaults on first use."""
    global _global_registry
    with _registry_lock:
        if _global_registry is None:
            _global_registry = ControllerRegistry()
            _install_defaults(_global_registry)
        return _global_registry


def set_schema_controller(controller: SchemaController) -> None:
    """Replace the schema controller in the global registry."""
    get_registry().set_schema_controller(controller)


def get_schema_controller() -> SchemaController:
    """Get the schema controller from the global registry."""
    return get_registry().get_schema_controller()


def set_rest_controller(controller: RESTController) -> None:
    """Replace the REST controller in the global registry."""
    get_registry().set_rest_controller(controller)


def get_rest_controller() -> RESTController:
    """Get the REST controller from the global registry."""
    return get_registry().get_rest_controller()


def reset_registry() -> None:
    """Reset the global registry (for testing only)."""
    global _global_registry
    with _registry_lock:
        _global_registry = None
