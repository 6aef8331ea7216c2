"""
Practice CMS Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages, without leaking internals.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and middleware; caught by global handlers.

Exception Hierarchy:
    PracticeCMSError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── AuthenticationError      → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict (stale version)
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PracticeCMSError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (returned only by 4xx handlers)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PracticeCMSError):
    """
    Raised when client input fails validation.

    When:    Malformed reorder envelope, empty reorder list, invalid config key,
             unknown custom-code location.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Reorder data must be a non-empty array",
            "details": {"field": "body"}
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


class AuthenticationError(PracticeCMSError):
    """Raised by the admin gate when the bearer token is missing or wrong. HTTP 401."""

    def __init__(
        self,
        message: str = "Admin credentials are missing or invalid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PracticeCMSError):
    """
    Raised when a requested resource does not exist.

    When:    PUT /api/admin/faq/{id} or POST .../publish with an unknown id.
    HTTP:    404 Not Found

    Delete never raises this; deleting a missing row is a successful no-op.
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


class ConflictError(PracticeCMSError):
    """
    Raised when an optimistic-concurrency check fails.

    When:    A config write carried an expected version that no longer matches
             the stored row (another editor saved first).
    HTTP:    409 Conflict — client should reload and re-apply its edit.
    """

    def __init__(
        self,
        key: str,
        expected_version: int,
        current_version: Optional[int],
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Config '{key}' was modified by someone else "
            f"(expected version {expected_version}, found {current_version or 0}). "
            f"Reload and try again."
        )
        ctx = context or {}
        ctx.update(
            key=key,
            expected_version=expected_version,
            current_version=current_version or 0,
        )
        super().__init__(message=message, context=ctx)
        self.current_version = current_version or 0


class DatabaseError(PracticeCMSError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Details (SQL,
    constraint names) are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(PracticeCMSError):
    """Raised when a client exceeds the admin mutation rate limit. HTTP 429."""

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
