"""
Application error taxonomy.

Every handled failure is an AppError subclass carrying the HTTP status it maps
to and a client-facing message. The exception handlers in
jobtracker.api.handlers render them into the JSON envelope.

- AuthError (401): missing, invalid or expired token. Always rendered with the
  same "Unauthorized" message so clients cannot tell the cases apart.
- 400 family: validation, not found, conflict, ownership and login failures.
- InfrastructureError (503): store unavailable or connection pool exhausted.
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors rendered into the response envelope."""

    status_code: int = 400
    message: str = "Bad request"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# --- Authentication ---------------------------------------------------------

class AuthError(AppError):
    status_code = 401
    message = "Unauthorized"


class MissingTokenError(AuthError):
    message = "Authorization header missing"


class TokenInvalidError(AuthError):
    message = "Token is invalid"


class TokenExpiredError(AuthError):
    message = "Token has expired"


class TokenConfigurationError(AppError):
    """Raised when a token is requested but no signing secret is configured."""

    status_code = 500
    message = "Token signing secret is not configured"


# --- Business logic ---------------------------------------------------------

class ValidationError(AppError):
    message = "Invalid request"


class NotFoundError(AppError):
    message = "Resource not found"


class ConflictError(AppError):
    message = "Resource already exists"


class OwnershipError(AppError):
    message = "Not allowed to access resources of another user"


class UserNotFoundError(AppError):
    message = "User not found"


class IncorrectPasswordError(AppError):
    message = "Incorrect password"


# --- Infrastructure ---------------------------------------------------------

class InfrastructureError(AppError):
    status_code = 503
    message = "Service temporarily unavailable, please retry"
