"""Errors raised by the user service.

Each error carries the HTTP status it maps to and a message that is safe to
show to clients.
"""


class UserServiceError(Exception):
    """Base exception for user service failures."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class EmailExistsError(UserServiceError):
    """Raised when an email is already held by another user."""

    status_code = 400
    default_message = "Email already exists"


class RoleNotFoundError(UserServiceError):
    """Raised when a role ID does not resolve to a role."""

    status_code = 400
    default_message = "Role not found"


class UserNotFoundError(UserServiceError):
    """Raised when a user does not exist."""

    status_code = 404
    default_message = "User not found"


class InvalidCredentialsError(UserServiceError):
    """Raised when a password does not match the stored digest."""

    status_code = 401
    default_message = "Invalid credentials"
