"""
Unit tests for the controller registry.

Tests cover:
- Setting and getting controllers
- Required-operation checks
- Unconfigured slots
- Global registry defaults and reset
"""

from unittest.mock import AsyncMock

import pytest

from parse_sdk import (
    HttpxRestController,
    MemorySchemaController,
    RestSchemaController,
)
from parse_sdk.errors import ControllerNotConfiguredError, InvalidControllerError
from parse_sdk.registry import (
    REST_CONTROLLER,
    SCHEMA_CONTROLLER,
    ControllerRegistry,
    SchemaController,
    get_registry,
    get_schema_controller,
    reset_registry,
    set_schema_controller,
)


class PartialController:
    """Schema controller missing send() and delete()."""

    async def get(self, class_name, options):
        return None

    async def create(self, class_name, params, options):
        return {}

    async def update(self, class_name, params, options):
        return {}


class TestControllerRegistry:
    """Tests for ControllerRegistry."""

    def test_new_registry_is_empty(self):
        """A bare registry has no controllers."""
        registry = ControllerRegistry()

        assert not registry.is_configured(SCHEMA_CONTROLLER)
        assert not registry.is_configured(REST_CONTROLLER)

    def test_get_unconfigured_raises(self):
        """Getting an empty slot raises ControllerNotConfiguredError."""
        registry = ControllerRegistry()

        with pytest.raises(ControllerNotConfiguredError, match="SchemaController") as exc:
            registry.get_schema_controller()

        assert exc.value.code == "CONTROLLER_NOT_CONFIGURED"

    def test_set_and_get_schema_controller(self):
        """Installed controller is returned."""
        registry = ControllerRegistry()
        controller = MemorySchemaController()

        registry.set_schema_controller(controller)

        assert registry.get_schema_controller() is controller

    def test_set_replaces_previous(self):
        """Setting again replaces the active controller."""
        registry = ControllerRegistry()
        first = MemorySchemaController()
        second = AsyncMock()

        registry.set_schema_controller(first)
        registry.set_schema_controller(second)

        assert registry.get_schema_controller() is second

    def test_missing_operations_raise(self):
        """Controllers missing required operations are rejected."""
        registry = ControllerRegistry()

        with pytest.raises(InvalidControllerError) as exc:
            registry.set_schema_controller(PartialController())

        assert exc.value.missing == ["send", "delete"]
        assert not registry.is_configured(SCHEMA_CONTROLLER)

    def test_rest_controller_needs_request(self):
        """REST controllers must implement request()."""
        registry = ControllerRegistry()

        with pytest.raises(InvalidControllerError, match="request"):
            registry.set_rest_controller(object())

    def test_unknown_slot_raises(self):
        """Only known capability names can be set."""
        registry = ControllerRegistry()

        with pytest.raises(KeyError):
            registry.set("QueryController", MemorySchemaController())

    def test_memory_controller_satisfies_protocol(self):
        """Bundled controllers satisfy the SchemaController protocol."""
        assert isinstance(MemorySchemaController(), SchemaController)
        assert isinstance(RestSchemaController(), SchemaController)


class TestGlobalRegistry:
    """Tests for the process-wide registry."""

    def test_defaults_installed(self):
        """Global registry starts with the REST-backed controllers."""
        registry = get_registry()

        assert isinstance(registry.get_schema_controller(), RestSchemaController)
        assert isinstance(registry.get_rest_controller(), HttpxRestController)

    def test_same_instance_returned(self):
        """get_registry() returns a singleton."""
        assert get_registry() is get_registry()

    def test_module_level_setters(self):
        """Module helpers operate on the global registry."""
        controller = MemorySchemaController()

        set_schema_controller(controller)

        assert get_schema_controller() is controller
        assert get_registry().get_schema_controller() is controller

    def test_reset_restores_defaults(self):
        """reset_registry() drops installed controllers."""
        set_schema_controller(MemorySchemaController())

        reset_registry()

        assert isinstance(get_schema_controller(), RestSchemaController)
