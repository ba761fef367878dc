"""
Schema controller implementations.

This module provides the two bundled SchemaController implementations:
- RestSchemaController: Maps schema operations onto the REST controller
- MemorySchemaController: In-process schema store for tests and offline use

Both satisfy the SchemaController protocol from registry.py and can be
installed with set_schema_controller().
"""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any

from .errors import SchemaConflictError, SchemaNotFoundError
from .registry import ControllerRegistry, get_registry

logger = logging.getLogger(__name__)


class RestSchemaController:
    """SchemaController that talks to the server's /schemas endpoint.

    The REST controller is looked up at every send, so replacing it in the
    registry takes effect immediately.

    Example:
        >>> controller = RestSchemaController()
        >>> await controller.get("GameScore", {"useMasterKey": True})
    """

    def __init__(self, registry: ControllerRegistry | None = None) -> None:
        self._registry = registry

    def _rest(self) -> Any:
        registry = self._registry or get_registry()
        return registry.get_rest_controller()

    async def send(
        self,
        class_name: str,
        method: str,
        params: dict[str, Any],
        options: dict[str, Any],
    ) -> Any:
        path = f"schemas/{class_name}" if class_name else "schemas"
        return await self._rest().request(method, path, params, options)

    async def get(self, class_name: str, options: dict[str, Any]) -> Any:
        return await self.send(class_name, "GET", {}, options)

    async def create(self, class_name: str, params: dict[str, Any], options: dict[str, Any]) -> Any:
        return await self.send(class_name, "POST", params, options)

    async def update(self, class_name: str, params: dict[str, Any], options: dict[str, Any]) -> Any:
        return await self.send(class_name, "PUT", params, options)

    async def delete(self, class_name: str, options: dict[str, Any]) -> Any:
        return await self.send(class_name, "DELETE", {}, options)


class MemorySchemaController:
    """In-memory implementation of SchemaController.

    Stores schema descriptions in a dict. Useful for:
    - Unit tests that need real create/update/delete behavior
    - Local development without a server

    Invariants:
        - All data is lost on process exit
        - Returned descriptions are copies; mutating them never touches the store
        - Deletion markers are applied on update and skipped on create

    Example:
        >>> store = MemorySchemaController()
        >>> set_schema_controller(store)
        >>> await ParseSchema("GameScore").add_number("score").save()
    """

    def __init__(self) -> None:
        self._schemas: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def send(
        self,
        class_name: str,
        method: str,
        params: dict[str, Any],
        options: dict[str, Any],
    ) -> Any:
        method = method.upper()
        if method == "GET":
            return await self.get(class_name, options)
        if method == "POST":
            return await self.create(class_name, params, options)
        if method == "PUT":
            return await self.update(class_name, params, options)
        if method == "DELETE":
            return await self.delete(class_name, options)
        raise ValueError(f"Unsupported method: {method}")

    async def get(self, class_name: str, options: dict[str, Any]) -> Any:
        async with self._lock:
            if not class_name:
                return {"results": [copy.deepcopy(s) for s in self._schemas.values()]}
            schema = self._schemas.get(class_name)
            return copy.deepcopy(schema) if schema is not None else None

    async def create(self, class_name: str, params: dict[str, Any], options: dict[str, Any]) -> Any:
        async with self._lock:
            if class_name in self._schemas:
                raise SchemaConflictError(f"Class {class_name} already exists.", class_name)

            schema: dict[str, Any] = {
                "className": class_name,
                "fields": {
                    name: copy.deepcopy(spec)
                    for name, spec in params.get("fields", {}).items()
                    if not _is_delete(spec)
                },
                "indexes": {
                    name: copy.deepcopy(spec)
                    for name, spec in params.get("indexes", {}).items()
                    if not _is_delete(spec)
                },
            }
            if params.get("classLevelPermissions") is not None:
                schema["classLevelPermissions"] = copy.deepcopy(params["classLevelPermissions"])

            self._schemas[class_name] = schema
            logger.debug("Created schema %s", class_name)
            return copy.deepcopy(schema)

    async def update(self, class_name: str, params: dict[str, Any], options: dict[str, Any]) -> Any:
        async with self._lock:
            current = self._schemas.get(class_name)
            if current is None:
                raise SchemaNotFoundError(class_name)

            # Validate everything before touching the stored copy
            schema = copy.deepcopy(current)
            _apply_changes(class_name, "Field", schema["fields"], params.get("fields", {}))
            _apply_changes(class_name, "Index", schema["indexes"], params.get("indexes", {}))
            if params.get("classLevelPermissions") is not None:
                schema["classLevelPermissions"] = copy.deepcopy(params["classLevelPermissions"])

            self._schemas[class_name] = schema
            logger.debug("Updated schema %s", class_name)
            return copy.deepcopy(schema)

    async def delete(self, class_name: str, options: dict[str, Any]) -> Any:
        async with self._lock:
            self._schemas.pop(class_name, None)
            logger.debug("Deleted schema %s", class_name)
            return {}


def _is_delete(spec: Any) -> bool:
    return isinstance(spec, dict) and spec.get("__op") == "Delete"


def _apply_changes(
    class_name: str,
    kind: str,
    existing: dict[str, Any],
    changes: dict[str, Any],
) -> None:
    """Apply additions and deletion markers to one section of a schema."""
    for name, spec in changes.items():
        if _is_delete(spec):
            if name not in existing:
                raise SchemaConflictError(
                    f"{kind} {name} does not exist, cannot delete.", class_name
                )
            del existing[name]
        else:
            if name in existing:
                raise SchemaConflictError(f"{kind} {name} exists, cannot update.", class_name)
            existing[name] = copy.deepcopy(spec)
