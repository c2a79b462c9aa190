"""Error taxonomy shared by the store, the auth boundary and the HTTP handlers.

Every error a client may see is an ``AccountError`` carrying its HTTP status;
the exception handlers in ``accounts.main`` render them as
``{"error": message, "details": ...}``.
"""

from typing import Any


class ConfigError(Exception):
    """Raised at process start when configuration is missing or invalid."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AccountError(Exception):
    """Base class for errors that map to a client-visible HTTP response."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AccountError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid data"


class AuthError(AccountError):
    """Missing, invalid or expired token, or the token's user no longer exists."""

    status_code = 401
    default_message = "Please authenticate."


class ForbiddenError(AccountError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(AccountError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AccountError):
    """Duplicate value for a unique key."""

    status_code = 409
    default_message = "Duplicate key error"


class RateLimitedError(AccountError):
    status_code = 429
    default_message = "Too many requests, please try again later."


class InternalError(AccountError):
    """Anything unanticipated; detail is logged, never returned."""

    status_code = 500
