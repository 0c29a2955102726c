"""Pydantic schemas for User CRUD operations.

Wire names follow the public API (``firstName``, ``birthDate``...); requests
also accept the snake_case field names. Responses never expose the password
digest.
"""

from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator

MAX_PASSWORD_BYTES = 72


def check_password_length(value: str | None) -> str | None:
    """bcrypt only reads the first 72 bytes of a password."""
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class UserCreateRequest(BaseModel):
    """Request schema for creating a user."""

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("firstName", "first_name"),
    )
    last_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("lastName", "last_name"),
    )
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")
    birth_date: date | None = Field(
        None,
        validation_alias=AliasChoices("birthDate", "birth_date"),
    )
    phone_number: str | None = Field(
        None,
        max_length=32,
        validation_alias=AliasChoices("phoneNumber", "phone_number"),
    )
    role_id: int = Field(
        ...,
        ge=1,
        description="Role ID (must exist)",
        validation_alias=AliasChoices("role_id", "roleId"),
    )

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return check_password_length(v)


class UserUpdateRequest(BaseModel):
    """Request schema for updating a user.

    All fields are optional. Only provided fields are applied.
    """

    first_name: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("firstName", "first_name"),
    )
    last_name: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("lastName", "last_name"),
    )
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=1)
    birth_date: date | None = Field(
        None,
        validation_alias=AliasChoices("birthDate", "birth_date"),
    )
    phone_number: str | None = Field(
        None,
        max_length=32,
        validation_alias=AliasChoices("phoneNumber", "phone_number"),
    )
    role_id: int | None = Field(
        None,
        ge=1,
        validation_alias=AliasChoices("role_id", "roleId"),
    )

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str | None) -> str | None:
        return check_password_length(v)


class UserResponse(BaseModel):
    """Response schema for a single user."""

    id: int = Field(..., description="User ID")
    first_name: str = Field(..., serialization_alias="firstName")
    last_name: str = Field(..., serialization_alias="lastName")
    email: str = Field(..., description="User's email address")
    birth_date: date | None = Field(None, serialization_alias="birthDate")
    phone_number: str | None = Field(None, serialization_alias="phoneNumber")
    role_id: int = Field(..., description="Role ID")
    created_at: datetime | None = Field(None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(None, serialization_alias="updatedAt")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Plain acknowledgement or error message."""

    message: str
