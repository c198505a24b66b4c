"""
Storefront Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    StorefrontError (base)       → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (missing/blank required field)
    ├── MalformedInputError      → 400 Bad Request (unparsable request body or parameter)
    ├── NotFoundError            → 404 Not Found
    └── CatalogReadError         → 500 Internal Server Error (images directory unreadable)
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all Storefront application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, and returned only where the handler says so)
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
    Raised when a required field is missing or blank.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "username required",
            "details": {"field": "username"}
        }
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


class MalformedInputError(StorefrontError):
    """
    Raised when the request body or a parameter cannot be parsed at all.

    When:    Invalid JSON, a body of the wrong shape, a non-integer order id.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "invalid json",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(StorefrontError):
    """
    Raised when an operation targets a resource that does not exist.

    When:    DELETE /api/orders/{id} with an id no stored order carries.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class CatalogReadError(StorefrontError):
    """
    Raised when a category directory cannot be listed.

    When:    Folder missing, permission denied, path is not a directory.
    HTTP:    500 Internal Server Error

    The underlying OS error is appended to the message so operators can
    diagnose the failure straight from the response.
    """

    def __init__(
        self,
        cause: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = "Failed to read images directory"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message=message, context=context)
