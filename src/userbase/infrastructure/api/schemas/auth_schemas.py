"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, Field

from userbase.infrastructure.api.schemas.users_schemas import UserCreateRequest


class RegisterRequest(UserCreateRequest):
    """Request body for self-registration.

    Carries the same fields as an administrator-created user.
    """


class LoginRequest(BaseModel):
    """Request body for login."""

    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class TokenResponse(BaseModel):
    """Response for a successful login."""

    token: str = Field(..., description="JWT access token")
