"""
MemoPad Backend — Custom Exception Hierarchy
==============================================

What:  Defines the closed set of application errors.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.
When:  During request processing when an operation cannot complete.

Exception Hierarchy:
    MemoPadError (base)
    ├── NotFoundError        → 404 Not Found
    ├── ConflictError        → 409 Conflict
    ├── UnauthorizedError    → 401 Unauthorized
    └── InternalError        → 500 Internal Server Error
        ├── DatabaseError
        └── HashingError

Absence of a session is NOT an exception at the store level; handlers
decide whether it becomes a NotFoundError.
"""

from typing import Any, Dict, Optional


class MemoPadError(Exception):
    """
    Base exception for all MemoPad application errors.

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


class NotFoundError(MemoPadError):
    """
    Raised when a user, memo or session does not exist.

    HTTP:  404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id is not None:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConflictError(MemoPadError):
    """
    Raised when an email address is already registered.

    HTTP:  409 Conflict
    """

    def __init__(
        self,
        message: str = "This email address is already in use.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(MemoPadError):
    """
    Raised when a supplied password does not match the stored hash.

    HTTP:  401 Unauthorized
    The message never says which half of the credentials was wrong.
    """

    def __init__(
        self,
        message: str = "Invalid username or password.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalError(MemoPadError):
    """
    Raised for failures the client cannot fix.

    HTTP:  500 Internal Server Error
    The response body is always generic; `context` is logged server-side.
    """

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(InternalError):
    """
    Raised when a query, insert, update or delete fails unexpectedly.

    Detailed error info (statement, constraint name) stays in `context`
    and is never exposed to the API consumer.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class HashingError(InternalError):
    """Raised when bcrypt cannot produce a digest (e.g. resource exhaustion)."""

    def __init__(
        self,
        message: str = "Password hashing failed.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
