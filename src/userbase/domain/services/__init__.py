"""Domain services for UserBase.

Services contain the business rules of the user account operations.
"""

from userbase.domain.services.user_errors import (
    EmailExistsError,
    InvalidCredentialsError,
    RoleNotFoundError,
    UserNotFoundError,
    UserServiceError,
)
from userbase.domain.services.user_service import UserService
from userbase.domain.services.user_validator import UserValidator

__all__ = [
    "EmailExistsError",
    "InvalidCredentialsError",
    "RoleNotFoundError",
    "UserNotFoundError",
    "UserService",
    "UserServiceError",
    "UserValidator",
]
