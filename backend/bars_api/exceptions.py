"""
Bars API Backend - Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Services raise typed errors and stay free of HTTP knowledge; the global
       handlers registered in main.py are the single place that maps an error
       to a status code and a JSON body.
How:   Each exception class carries a message and optional context dict.
Who:   Raised by services and the auth dependency.
When:  During request processing; every error is terminal for the request.

Exception Hierarchy:
    BarsApiError (base)
    ├── NotFoundError            → 404 Not Found
    ├── OwnershipError           → 401 Unauthorized (requester is not the owner)
    ├── AuthenticationError      → 401 Unauthorized (missing/invalid bearer token)
    ├── BadCredentialsError      → 401 Unauthorized (wrong email/password)
    ├── BadParamsError           → 422 Unprocessable Entity
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class BarsApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned where a handler
                  chooses to expose it as `details`)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(BarsApiError):
    """
    Raised when a requested record does not exist.

    When:    GET/PATCH/DELETE /bars/{id} with an id that resolves to nothing.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the service layer converts that
    None into this exception.
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


class OwnershipError(BarsApiError):
    """
    Raised when the authenticated requester does not own the record.

    When:    PATCH or DELETE on a bar created by another user.
    HTTP:    401 Unauthorized

    Raised before any write is issued; the request's session is then rolled
    back by get_db_session.
    """

    def __init__(
        self,
        message: str = "The provided token does not match the owner of this document",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(BarsApiError):
    """
    Raised when a protected route is called without a valid bearer token.

    HTTP:    401 Unauthorized, with `WWW-Authenticate: Bearer`
    """

    def __init__(
        self,
        message: str = "A valid bearer token is required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class BadCredentialsError(BarsApiError):
    """
    Raised when sign-in or change-password receives a wrong password.

    HTTP:    401 Unauthorized

    The message never says which half (email or password) was wrong.
    """

    def __init__(
        self,
        message: str = "The provided username or password is incorrect",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class BadParamsError(BarsApiError):
    """
    Raised when request parameters are well-formed but unusable.

    When:    Password confirmation mismatch, empty new password, duplicate email.
    HTTP:    422 Unprocessable Entity
    """

    def __init__(
        self,
        message: str = "A required parameter was omitted or invalid",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(BarsApiError):
    """
    Raised when database operations fail unexpectedly.

    What:    A query, insert, update or delete failed in the driver.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        The original exception type is kept in `context` and logged
        server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

