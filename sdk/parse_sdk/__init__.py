"""
Parse Schema SDK - Schema builder and sync client for Parse servers.

This SDK lets you describe a class schema in Python and push it to the server:
- ParseSchema builder (fields, indexes, class-level permissions)
- Lifecycle operations (save, update, get, delete, all)
- Pluggable controllers (REST by default, in-memory for tests)

Example:
    >>> from parse_sdk import ParseSchema
    >>>
    >>> schema = ParseSchema("GameScore")
    >>> schema.add_number("score").add_pointer("player", "_User")
    >>> await schema.save({"useMasterKey": True})
    >>>
    >>> for description in await ParseSchema.all({"useMasterKey": True}):
    ...     print(description["className"])

Invariants:
    - Validation errors are raised immediately, before dispatch
    - Every lifecycle operation is a single request/response round trip
    - The active controller is read from the registry at each dispatch

Version: 1.0.0
"""

__version__ = "1.0.0"

from ._rest_client import HttpxRestController
from .client import ParseSchema
from .config import ParseSettings
from .controllers import MemorySchemaController, RestSchemaController
from .errors import (
    ControllerNotConfiguredError,
    InvalidClassNameError,
    InvalidControllerError,
    InvalidFieldNameError,
    InvalidFieldTypeError,
    InvalidIndexError,
    InvalidIndexNameError,
    InvalidTargetClassError,
    ParseSdkError,
    RequestError,
    SchemaConflictError,
    SchemaNotFoundError,
    SchemaValidationError,
)
from .registry import (
    ControllerRegistry,
    RESTController,
    SchemaController,
    get_registry,
    get_rest_controller,
    get_schema_controller,
    reset_registry,
    set_rest_controller,
    set_schema_controller,
)
from .schema import (
    DeleteOp,
    FieldDecl,
    FieldSpec,
    FieldType,
    IndexDecl,
    IndexSpec,
)

__all__ = [
    # Version
    "__version__",
    # Builder
    "ParseSchema",
    # Spec types
    "FieldType",
    "FieldDecl",
    "IndexDecl",
    "DeleteOp",
    "FieldSpec",
    "IndexSpec",
    # Registry
    "ControllerRegistry",
    "SchemaController",
    "RESTController",
    "get_registry",
    "reset_registry",
    "set_schema_controller",
    "get_schema_controller",
    "set_rest_controller",
    "get_rest_controller",
    # Controllers
    "RestSchemaController",
    "MemorySchemaController",
    "HttpxRestController",
    # Config
    "ParseSettings",
    # Errors
    "ParseSdkError",
    "SchemaValidationError",
    "InvalidClassNameError",
    "InvalidFieldNameError",
    "InvalidFieldTypeError",
    "InvalidTargetClassError",
    "InvalidIndexNameError",
    "InvalidIndexError",
    "ControllerNotConfiguredError",
    "InvalidControllerError",
    "SchemaNotFoundError",
    "SchemaConflictError",
    "RequestError",
]
