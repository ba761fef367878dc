"""
Error types for the Parse schema SDK.

This module defines all exception types raised by the SDK:
- ParseSdkError: Base exception
- Invalid*Error: Builder argument validation failures (raised immediately)
- ControllerNotConfiguredError / InvalidControllerError: Registry misuse
- SchemaNotFoundError: Remote schema lookup came back empty
- SchemaConflictError: Schema change rejected by the store
- RequestError: REST transport failure

Invariants:
    - All errors inherit from ParseSdkError
    - Validation errors also inherit from ValueError
    - Every error carries a stable code for programmatic handling
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ParseSdkError(Exception):
    """Base exception for all Parse SDK errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "PARSE_SDK_ERROR"
        self.details = details or {}


class SchemaValidationError(ParseSdkError, ValueError):
    """A builder argument failed validation before any dispatch."""


class InvalidClassNameError(SchemaValidationError):
    """Builder has no usable class name."""

    def __init__(self, message: str = "You must set a Class Name before making any request.") -> None:
        super().__init__(message, code="INVALID_CLASS_NAME")


class InvalidFieldNameError(SchemaValidationError):
    """Field name is missing or empty."""

    def __init__(self, message: str = "field name may not be null.") -> None:
        super().__init__(message, code="INVALID_FIELD_NAME")


class InvalidFieldTypeError(SchemaValidationError):
    """Field type is not one of the recognized kinds."""

    def __init__(self, field_type: Any) -> None:
        super().__init__(
            f"{field_type} is not a valid type.",
            code="INVALID_FIELD_TYPE",
            details={"type": field_type},
        )
        self.field_type = field_type


class InvalidTargetClassError(SchemaValidationError):
    """Pointer or Relation field declared without a target class."""

    def __init__(self, field_type: str, field_name: Optional[str] = None) -> None:
        super().__init__(
            f"You need to set the targetClass of the {field_type}.",
            code="INVALID_TARGET_CLASS",
            details={"type": field_type, "field": field_name},
        )
        self.field_name = field_name


class InvalidIndexNameError(SchemaValidationError):
    """Index name is missing or empty."""

    def __init__(self, message: str = "index name may not be null.") -> None:
        super().__init__(message, code="INVALID_INDEX_NAME")


class InvalidIndexError(SchemaValidationError):
    """Index definition is missing."""

    def __init__(self, index_name: Optional[str] = None) -> None:
        super().__init__(
            "index may not be null.",
            code="INVALID_INDEX",
            details={"index": index_name},
        )
        self.index_name = index_name


class ControllerNotConfiguredError(ParseSdkError):
    """No implementation is registered for a controller slot."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"{name} has not been configured",
            code="CONTROLLER_NOT_CONFIGURED",
            details={"controller": name},
        )
        self.name = name


class InvalidControllerError(ParseSdkError, TypeError):
    """Controller is missing operations required by its slot."""

    def __init__(self, name: str, missing: list[str]) -> None:
        super().__init__(
            f"{name} must implement {', '.join(f'{m}()' for m in missing)}",
            code="INVALID_CONTROLLER",
            details={"controller": name, "missing": missing},
        )
        self.name = name
        self.missing = missing


class SchemaNotFoundError(ParseSdkError):
    """Remote schema (or schema list) came back empty."""

    def __init__(self, class_name: Optional[str] = None) -> None:
        super().__init__(
            "Schema not found.",
            code="SCHEMA_NOT_FOUND",
            details={"class_name": class_name},
        )
        self.class_name = class_name


class SchemaConflictError(ParseSdkError):
    """Schema change conflicts with what the store already holds.

    Raised when:
    - Creating a class that already exists
    - Adding a field or index that already exists
    - Deleting a field or index that does not exist
    """

    def __init__(self, message: str, class_name: Optional[str] = None) -> None:
        super().__init__(
            message,
            code="SCHEMA_CONFLICT",
            details={"class_name": class_name},
        )
        self.class_name = class_name


class RequestError(ParseSdkError):
    """REST request failed.

    Attributes:
        status_code: HTTP status, None when the server was never reached
        server_code: Numeric error code reported by the server, if any
    """

    def __init__(
        self,
        message: str,
        code: str = "REQUEST_ERROR",
        status_code: Optional[int] = None,
        server_code: Optional[int] = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            details={"status_code": status_code, "server_code": server_code},
        )
        self.status_code = status_code
        self.server_code = server_code
