"""
Field and index spec types for the Parse schema SDK.

This module provides the values a ParseSchema holds:
- FieldType: The ten recognized field kinds
- FieldDecl: Declaration of a field (type, target class, options)
- IndexDecl: Opaque index definition
- DeleteOp: Deletion marker for an existing remote field or index

A field spec is either a FieldDecl or a DeleteOp; an index spec is either
an IndexDecl or a DeleteOp. Each serializes to its wire form via to_dict().

Invariants:
    - Pointer and Relation declarations always carry a target class
    - Other declarations never carry a target class
    - DeleteOp serializes to {"__op": "Delete"}

Example:
    >>> FieldDecl(FieldType.POINTER, target_class="_User").to_dict()
    {'type': 'Pointer', 'targetClass': '_User'}
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .errors import InvalidFieldTypeError, InvalidTargetClassError


class FieldType(Enum):
    """Supported field types."""

    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    DATE = "Date"
    FILE = "File"
    GEO_POINT = "GeoPoint"
    ARRAY = "Array"
    OBJECT = "Object"
    POINTER = "Pointer"
    RELATION = "Relation"

    @classmethod
    def from_str(cls, value: str | FieldType) -> FieldType:
        """Convert wire spelling to FieldType."""
        if isinstance(value, cls):
            return value
        for kind in cls:
            if kind.value == value:
                return kind
        raise InvalidFieldTypeError(value)

    @property
    def needs_target_class(self) -> bool:
        return self in (FieldType.POINTER, FieldType.RELATION)


@dataclass(frozen=True)
class DeleteOp:
    """Marks a remote field or index for removal on the next save/update."""

    def to_dict(self) -> dict[str, Any]:
        return {"__op": "Delete"}


DELETE = DeleteOp()


@dataclass(frozen=True)
class FieldDecl:
    """Field declaration within a schema.

    Attributes:
        type: Field kind
        target_class: Target class for Pointer and Relation fields
        required: Whether the remote store should require the field
        default_value: Default applied by the remote store
    """

    type: FieldType
    target_class: str | None = None
    required: bool = False
    default_value: Any = None

    def __post_init__(self) -> None:
        """Validate declaration."""
        if self.type.needs_target_class:
            if not self.target_class:
                raise InvalidTargetClassError(self.type.value)
        elif self.target_class is not None:
            raise ValueError(f"{self.type.value} fields do not take a targetClass")

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire form."""
        result: dict[str, Any] = {"type": self.type.value}
        if self.target_class is not None:
            result["targetClass"] = self.target_class
        if self.required:
            result["required"] = True
        if self.default_value is not None:
            result["defaultValue"] = copy.deepcopy(self.default_value)
        return result


@dataclass(frozen=True)
class IndexDecl:
    """Opaque index definition consumed by the remote store.

    Usually a mapping of field name to direction, but any non-null value
    is passed through as-is.

    Example:
        >>> IndexDecl({"name": 1}).to_dict()
        {'name': 1}
    """

    definition: Any

    def to_dict(self) -> Any:
        # Payloads are snapshots, never live references
        return copy.deepcopy(self.definition)


FieldSpec = Union[FieldDecl, DeleteOp]
IndexSpec = Union[IndexDecl, DeleteOp]
