"""
Storefront Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios of the catalogue.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers registered in main.py turn them into structured
       JSON responses with the right HTTP status code.
Who:   Raised by decorators and services; caught by the global handlers.

Exception Hierarchy:
    StorefrontError (base)
    ├── ValidationError       → 400 Bad Request (client can fix)
    ├── NotFoundError         → 404 Not Found
    ├── DatabaseError         → 500 Internal Server Error
    └── UnsupportedOperation  → 500 Internal Server Error (programming error)
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all Storefront application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Raised when client input breaks a business rule.

    When:    Blank item name, unknown listing scope, selling an item twice.
    HTTP:    400 Bad Request

    Schema-level problems (wrong types, negative prices) are rejected earlier
    by FastAPI with a 422; this error covers the rules Pydantic cannot see.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(StorefrontError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts that
    None into this exception so the handler can answer with a 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(StorefrontError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the context (query
    target, original exception type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnsupportedOperation(StorefrontError, AttributeError):
    """
    Raised when an operation is neither declared by a decorator nor supported
    by the entity it wraps.

    It is also an AttributeError, so `hasattr(decorator, name)` and
    `getattr(decorator, name, default)` keep working on decorators.

    Attributes:
        operation:    The requested operation name
        entity_type:  Class name of the wrapped entity
    """

    def __init__(
        self,
        operation: str,
        entity_type: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"'{entity_type}' does not support operation '{operation}'"
        ctx = context or {}
        ctx["operation"] = operation
        ctx["entity_type"] = entity_type
        super().__init__(message=message, context=ctx)
        self.operation = operation
        self.entity_type = entity_type
        # AttributeError.name, read by the interpreter's "Did you mean" hint
        self.name = operation
