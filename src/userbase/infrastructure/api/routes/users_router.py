"""Router for user management.

All endpoints require a valid access token.
"""

from fastapi import APIRouter, status

from userbase.infrastructure.api.dependencies import AuthenticatedUser, UserServiceDep
from userbase.infrastructure.api.schemas import (
    MessageResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)
from userbase.infrastructure.persistence.models import UserModel

router = APIRouter(tags=["users"])


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
)
async def list_users(
    current_user: AuthenticatedUser,
    user_service: UserServiceDep,
) -> list[UserModel]:
    """Return every user."""
    return await user_service.list_users()


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the authenticated user",
)
async def get_logged_user(current_user: AuthenticatedUser) -> UserModel:
    """Return the user resolved from the access token."""
    return current_user


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
)
async def create_user(
    user_data: UserCreateRequest,
    current_user: AuthenticatedUser,
    user_service: UserServiceDep,
) -> UserModel:
    """Create a user.

    The email must be unused and the role must exist. The password is
    hashed before it is stored.
    """
    return await user_service.create_user(user_data.model_dump())


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
)
async def update_user(
    user_id: int,
    user_data: UserUpdateRequest,
    current_user: AuthenticatedUser,
    user_service: UserServiceDep,
) -> UserModel:
    """Update the supplied fields of a user and return the updated record."""
    return await user_service.update_user(user_id, user_data.model_dump(exclude_unset=True))


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
)
async def delete_user(
    user_id: int,
    current_user: AuthenticatedUser,
    user_service: UserServiceDep,
) -> MessageResponse:
    """Delete a user by ID."""
    await user_service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")
