"""API request and response schemas."""

from userbase.infrastructure.api.schemas.auth_schemas import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from userbase.infrastructure.api.schemas.users_schemas import (
    MessageResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
