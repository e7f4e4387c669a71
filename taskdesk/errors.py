"""
Domain errors for TaskDesk.

Each error carries the HTTP status and the client-facing message it maps to,
so services can raise them and the API layer renders them uniformly.
"""

from typing import List, Dict, Optional


class TaskDeskError(Exception):
    """Base class for all expected, client-facing failures."""
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(TaskDeskError, ValueError):
    """Malformed or out-of-policy input, detected before persistence."""
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class DuplicateEmailError(TaskDeskError, ValueError):
    """Registration or profile update collides with another account's email."""
    status_code = 400
    message = "User with this email already exists"


class AuthenticationError(TaskDeskError):
    """Caller could not be authenticated."""
    status_code = 401
    message = "Not authorized"


class MissingCredentialsError(AuthenticationError):
    message = "Not authorized, no token"


class InvalidTokenError(AuthenticationError):
    # Same message for malformed, tampered and expired tokens
    status_code = 403
    message = "Forbidden: Invalid or expired token"


class UnknownUserError(AuthenticationError):
    message = "User not found"


class InvalidCredentialsError(AuthenticationError):
    message = "Invalid email or password"


class NotFoundError(TaskDeskError):
    """Resource is absent or not owned by the caller."""
    status_code = 404
    message = "Not found"


class UserNotFoundError(NotFoundError, ValueError):
    message = "User not found"


class TaskNotFoundError(NotFoundError):
    message = "Task not found"
