"""
TravelMap Backend - Custom Exception Hierarchy
===============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": message}` JSON bodies with the matching HTTP status.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    TravelMapError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class TravelMapError(Exception):
    """
    Base exception for all TravelMap application errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info (logged, not returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TravelMapError):
    """
    Raised when client input fails validation.

    When:    Missing or non-numeric bounding-box query parameters.
    HTTP:    400 Bad Request

    Body validation of JSON payloads is handled by Pydantic; FastAPI's
    RequestValidationError is mapped to the same 400 response in main.py.
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


class NotFoundError(TravelMapError):
    """
    Raised when a requested resource does not exist.

    When:    PUT /updatetravelpoint with a gid that matches no row.
    HTTP:    404 Not Found

    Deletes never raise this: deleting a missing row reports success.
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


class DatabaseError(TravelMapError):
    """
    Raised when a database statement fails.

    What:    A query, insert, update or delete failed in the driver or server.
    When:    Connection lost, constraint violation, pool timeout, bad geometry, etc.
    HTTP:    500 Internal Server Error

    The driver's message is carried through to the client verbatim; the
    failing operation is recorded in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
