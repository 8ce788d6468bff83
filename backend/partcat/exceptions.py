"""
PartCat Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by records, services and the authentication guard.

Exception Hierarchy:
    PartCatError (base)
    ├── ValidationError     → 400 Bad Request (client can fix)
    ├── NotFoundError       → 404 Not Found
    ├── UnauthorizedError   → 401 Unauthorized
    └── PersistenceError    → 400 Bad Request (statement failed or matched no row)
"""

from typing import Any, Dict, Optional


class PartCatError(Exception):
    """
    Base exception for all PartCat application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PartCatError):
    """
    Raised when a field is missing or invalid before anything is persisted.

    When:    Empty email, unreadable image path, negative quantity,
             mandatory field unset at save() time.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "Image path 'missing.png' does not reference a readable file.",
            "details": {"field": "path"}
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


class NotFoundError(PartCatError):
    """
    Raised when a requested record does not exist.

    Records return None for missing rows; services convert None into this
    exception so the handler can answer 404.

    HTTP:    404 Not Found, message "<Resource> not found."
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class UnauthorizedError(PartCatError):
    """
    Raised by the authentication guard.

    When:    Missing Email/Password headers, unknown email, or wrong password.
    HTTP:    401 Unauthorized

    The message is identical for every cause so a caller cannot probe which
    emails are registered.
    """

    def __init__(
        self,
        message: str = "Email and/or password incorrect.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PersistenceError(PartCatError):
    """
    Raised when a statement fails or does not affect the expected row.

    When:    Constraint violation (duplicate email), update/delete matching
             zero rows, use of a deleted record, lost connection.
    HTTP:    400 Bad Request

    Security Note:
        The message returned to the client is always generic. The driver
        error and statement are logged server-side only.
    """

    def __init__(
        self,
        message: str = "The operation could not be completed.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
