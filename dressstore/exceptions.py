"""
DressStore Backend: Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the two outcomes a caller can see
       besides success.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    DressStoreError (base)
    ├── NotFoundError     → 404 {"message": ...}
    └── PersistenceError  → 500 {"error": ...}

The split is deliberately coarse. Malformed identifiers, schema validation
failures, constraint violations and connectivity problems are all
PersistenceError; only "no record has this identifier" is NotFoundError.
"""

from typing import Any, Dict, Optional


class DressStoreError(Exception):
    """
    Base exception for all DressStore application errors.

    Attributes:
        message:  Text returned to the client
        context:  Additional debug info (logged, not returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(DressStoreError):
    """
    Raised when no record matches the requested identifier.

    HTTP:    404 Not Found
    Example: NotFoundError("Product", "3f2b...") → "Product not found"
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class PersistenceError(DressStoreError):
    """
    Raised when a persistence operation fails for any reason other than a
    missing record.

    HTTP:    500 Internal Server Error
    The underlying failure text is carried in `message` and returned to the
    client as-is.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
