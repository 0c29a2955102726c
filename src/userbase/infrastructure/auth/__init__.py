"""Authentication infrastructure components.

This module provides password hashing and JWT token services.
"""

from userbase.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
)
from userbase.infrastructure.auth.password_hasher import PasswordHasher

__all__ = [
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "PasswordHasher",
    "TokenExpiredError",
]
