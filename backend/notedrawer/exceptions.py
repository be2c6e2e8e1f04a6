"""
NoteDrawer Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every failure a request can hit.
How:   Each exception carries a client-safe message, an HTTP status code, a
       machine-readable code and an optional context dict (logged only).
       Global handlers in main.py turn them into JSON error responses.
Who:   Raised by services and the auth gateway; caught by global handlers.

Exception Hierarchy:
    NoteDrawerError (base)                → 500
    ├── ValidationError                   → 400 missing/invalid fields
    ├── DuplicateError                    → 400 email / drawer name taken
    ├── InvalidCredentialsError           → 400 generic login failure
    ├── InvalidTokenError                 → 401 bad signature / expired
    ├── UnauthenticatedError              → 401 missing or unusable token
    ├── ForbiddenError                    → 403 owner pair mismatch
    ├── NotFoundError                     → 404 note id absent
    └── DatabaseError                     → 500 store failure
"""

from typing import Any, Dict, Optional


class NoteDrawerError(Exception):
    """
    Base exception for all NoteDrawer application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteDrawerError):
    """Raised when client input is missing required fields or malformed."""

    status_code = 400
    code = "validation_error"

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


class DuplicateError(NoteDrawerError):
    """
    Raised when a unique identity (user email, drawer name) is already taken.

    HTTP: 400 Bad Request, matching the registration contract clients
    already depend on.
    """

    status_code = 400
    code = "duplicate"

    def __init__(
        self,
        message: str = "Already in use",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidCredentialsError(NoteDrawerError):
    """
    Raised on any failed login.

    Unknown identity and wrong password produce the same message so the
    response cannot be used to enumerate accounts or drawers.
    """

    status_code = 400
    code = "invalid_credentials"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid credentials", context=context)


class InvalidTokenError(NoteDrawerError):
    """Raised by the token service when a token cannot be verified."""

    status_code = 401
    code = "invalid_token"

    def __init__(
        self,
        message: str = "Invalid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthenticatedError(NoteDrawerError):
    """Raised by the auth gateway when a protected route has no usable token."""

    status_code = 401
    code = "unauthenticated"

    def __init__(
        self,
        message: str = "No auth token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(NoteDrawerError):
    """Raised when a principal touches a note owned by another owner pair."""

    status_code = 403
    code = "forbidden"

    def __init__(
        self,
        message: str = "forbidden",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(NoteDrawerError):
    """
    Raised when a requested resource does not exist.

    A malformed note id is reported the same way as an unknown one.
    """

    status_code = 404
    code = "not_found"

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


class DatabaseError(NoteDrawerError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the original
    error type is kept in `context` for the server log.
    """

    status_code = 500
    code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
