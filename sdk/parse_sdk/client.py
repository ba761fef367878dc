"""
ParseSchema builder for the Parse schema SDK.

This module provides the main client interface:
- ParseSchema: Fluent builder for one class schema plus the lifecycle
  operations that push it to (or read it from) the server

Example:
    >>> schema = ParseSchema("GameScore")
    >>> schema.add_number("score").add_pointer("player", "_User")
    >>> schema.add_index("score_idx", {"score": 1})
    >>> result = await schema.save({"useMasterKey": True})

Invariants:
    - Argument validation fails immediately, before anything is dispatched
    - Lifecycle operations return awaitables; remote failures surface on await
    - Payloads are snapshots of the builder at call time
    - The controller is resolved from the registry at every dispatch
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Awaitable, Mapping

from .errors import (
    InvalidClassNameError,
    InvalidFieldNameError,
    InvalidIndexError,
    InvalidIndexNameError,
    InvalidTargetClassError,
    SchemaNotFoundError,
)
from .registry import ControllerRegistry, SchemaController, get_registry
from .schema import DELETE, FieldDecl, FieldSpec, FieldType, IndexDecl, IndexSpec

logger = logging.getLogger(__name__)

# Class names stored under a reserved, underscore-prefixed name
_RESERVED_CLASS_NAMES = {"User": "_User"}


class ParseSchema:
    """Builder for a single class schema.

    Mutators validate their arguments and return the builder for chaining.
    Lifecycle operations (save, update, get, delete, all) serialize the
    current state and dispatch through the registered SchemaController.

    A successful get() does not repopulate the builder; the remote
    description is only returned to the caller.

    Example:
        >>> schema = ParseSchema("User")
        >>> schema.class_name
        '_User'
        >>> schema.add_string("nickname").delete_field("legacy")
    """

    def __init__(
        self,
        class_name: str | None = None,
        *,
        registry: ControllerRegistry | None = None,
    ) -> None:
        """Initialize a schema builder.

        Args:
            class_name: Class to describe; "User" maps to "_User"
            registry: Optional controller registry (global registry if omitted)
        """
        if isinstance(class_name, str):
            class_name = _RESERVED_CLASS_NAMES.get(class_name, class_name)
        self._class_name = class_name
        self._registry = registry
        self._fields: dict[str, FieldSpec] = {}
        self._indexes: dict[str, IndexSpec] = {}
        self._class_level_permissions: Mapping[str, Any] | None = None

    @property
    def class_name(self) -> str | None:
        return self._class_name

    @property
    def fields(self) -> dict[str, FieldSpec]:
        """Current field specs (copy)."""
        return dict(self._fields)

    @property
    def indexes(self) -> dict[str, IndexSpec]:
        """Current index specs (copy)."""
        return dict(self._indexes)

    @property
    def class_level_permissions(self) -> Mapping[str, Any] | None:
        return self._class_level_permissions

    def assert_class_name(self) -> None:
        """Check that the builder has a usable class name.

        Raises:
            InvalidClassNameError: If class name is missing or empty
        """
        if not self._class_name or not isinstance(self._class_name, str):
            raise InvalidClassNameError()

    def add_field(
        self,
        name: str,
        type: str | FieldType | None = FieldType.STRING,
        target_class: str | None = None,
        *,
        required: bool = False,
        default_value: Any = None,
    ) -> ParseSchema:
        """Declare a field.

        Args:
            name: Field name
            type: One of the ten field kinds (default String, also used when falsy)
            target_class: Target class, required for Pointer and Relation
            required: Ask the server to require the field
            default_value: Default value applied by the server

        Returns:
            Self for chaining

        Raises:
            InvalidFieldNameError: If name is missing or empty
            InvalidFieldTypeError: If type is not recognized
            InvalidTargetClassError: If a Pointer/Relation has no target class
        """
        if not name:
            raise InvalidFieldNameError()
        field_type = FieldType.from_str(type or FieldType.STRING)
        if field_type.needs_target_class and not target_class:
            raise InvalidTargetClassError(field_type.value, name)

        self._fields[name] = FieldDecl(
            type=field_type,
            target_class=target_class if field_type.needs_target_class else None,
            required=required,
            default_value=default_value,
        )
        return self

    def add_string(self, name: str, **options: Any) -> ParseSchema:
        return self.add_field(name, FieldType.STRING, **options)

    def add_number(self, name: str, **options: Any) -> ParseSchema:
        return self.add_field(name, FieldType.NUMBER, **options)

    def add_boolean(self, name: str, **options: Any) -> ParseSchema:
        return self.add_field(name, FieldType.BOOLEAN, **options)

    def add_date(self, name: str, **options: Any) -> ParseSchema:
        return self.add_field(name, FieldType.DATE, **options)

    def add_file(self, name: str, **options: Any) -> ParseSchema:
        return self.add_field(name, FieldType.FILE, **options)

    def add_geo_point(self, name: str, **options: Any) -> ParseSchema:
        return self.add_field(name, FieldType.GEO_POINT, **options)

    def add_array(self, name: str, **options: Any) -> ParseSchema:
        return self.add_field(name, FieldType.ARRAY, **options)

    def add_object(self, name: str, **options: Any) -> ParseSchema:
        return self.add_field(name, FieldType.OBJECT, **options)

    def add_pointer(self, name: str, target_class: str, **options: Any) -> ParseSchema:
        """Declare a Pointer field to target_class."""
        return self.add_field(name, FieldType.POINTER, target_class, **options)

    def add_relation(self, name: str, target_class: str, **options: Any) -> ParseSchema:
        """Declare a Relation field to target_class."""
        return self.add_field(name, FieldType.RELATION, target_class, **options)

    def delete_field(self, name: str) -> ParseSchema:
        """Mark an existing remote field for removal.

        Raises:
            InvalidFieldNameError: If name is missing or empty
        """
        if not name:
            raise InvalidFieldNameError()
        self._fields[name] = DELETE
        return self

    def add_index(self, name: str, index: Any) -> ParseSchema:
        """Declare an index.

        Args:
            name: Index name
            index: Index definition, e.g. {"score": 1}; any non-null value is sent as-is

        Returns:
            Self for chaining

        Raises:
            InvalidIndexNameError: If name is missing or empty
            InvalidIndexError: If index is None
        """
        if not name:
            raise InvalidIndexNameError()
        if index is None:
            raise InvalidIndexError(name)
        self._indexes[name] = IndexDecl(index)
        return self

    def delete_index(self, name: str) -> ParseSchema:
        """Mark an existing remote index for removal.

        Raises:
            InvalidIndexNameError: If name is missing or empty
        """
        if not name:
            raise InvalidIndexNameError()
        self._indexes[name] = DELETE
        return self

    def set_class_level_permissions(self, permissions: Mapping[str, Any] | None) -> ParseSchema:
        """Set (or clear with None) the class-level permissions sent on save/update."""
        self._class_level_permissions = permissions
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize current state into a create/update payload.

        Raises:
            InvalidClassNameError: If class name is missing or empty
        """
        self.assert_class_name()
        payload: dict[str, Any] = {
            "className": self._class_name,
            "fields": {name: spec.to_dict() for name, spec in self._fields.items()},
            "indexes": {name: spec.to_dict() for name, spec in self._indexes.items()},
        }
        if self._class_level_permissions is not None:
            payload["classLevelPermissions"] = copy.deepcopy(dict(self._class_level_permissions))
        return payload

    def _controller(self) -> SchemaController:
        return _resolve_controller(self._registry)

    def save(self, options: dict[str, Any] | None = None) -> Awaitable[Any]:
        """Create the class on the server.

        Returns:
            Awaitable resolving to the controller's result, unchanged
        """
        payload = self.to_payload()
        controller = self._controller()
        logger.debug("Creating schema %s", self._class_name)
        return controller.create(self._class_name, payload, _options(options))

    def update(self, options: dict[str, Any] | None = None) -> Awaitable[Any]:
        """Apply field/index additions and deletions to an existing class.

        Returns:
            Awaitable resolving to the controller's result, unchanged
        """
        payload = self.to_payload()
        controller = self._controller()
        logger.debug("Updating schema %s", self._class_name)
        return controller.update(self._class_name, payload, _options(options))

    def get(self, options: dict[str, Any] | None = None) -> Awaitable[Any]:
        """Fetch the remote description of this class.

        Returns:
            Awaitable resolving to the remote description

        Raises (on await):
            SchemaNotFoundError: If the controller resolves to None
        """
        self.assert_class_name()
        controller = self._controller()
        logger.debug("Fetching schema %s", self._class_name)
        return _require_found(controller.get(self._class_name, _options(options)), self._class_name)

    def delete(self, options: dict[str, Any] | None = None) -> Awaitable[Any]:
        """Delete the class on the server.

        Returns:
            Awaitable resolving to the controller's result, unchanged
        """
        self.assert_class_name()
        controller = self._controller()
        logger.debug("Deleting schema %s", self._class_name)
        return controller.delete(self._class_name, _options(options))

    @classmethod
    def all(
        cls,
        options: dict[str, Any] | None = None,
        *,
        registry: ControllerRegistry | None = None,
    ) -> Awaitable[list[Any]]:
        """Fetch the descriptions of every class on the server.

        Returns:
            Awaitable resolving to the list of descriptions

        Raises (on await):
            SchemaNotFoundError: If the server reports no classes
        """
        controller = _resolve_controller(registry)
        logger.debug("Fetching all schemas")
        return _unwrap_results(controller.get("", _options(options)))

    def __repr__(self) -> str:
        return (
            f"ParseSchema({self._class_name!r}, fields={len(self._fields)}, "
            f"indexes={len(self._indexes)})"
        )


def _options(options: dict[str, Any] | None) -> dict[str, Any]:
    return options if options is not None else {}


def _resolve_controller(registry: ControllerRegistry | None) -> SchemaController:
    return (registry or get_registry()).get_schema_controller()


async def _require_found(pending: Awaitable[Any], class_name: str | None) -> Any:
    result = await pending
    if result is None:
        raise SchemaNotFoundError(class_name)
    return result


async def _unwrap_results(pending: Awaitable[Any]) -> list[Any]:
    # An empty class list is reported the same way as a missing class
    response = await pending
    results = response.get("results") if isinstance(response, Mapping) else None
    if not results:
        raise SchemaNotFoundError()
    return results
