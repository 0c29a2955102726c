"""Authentication routes for login and self-registration.

Routes:
    POST /login - Exchange email and password for an access token
    POST /register - Create an account without authentication
"""

from fastapi import APIRouter, status

from userbase.infrastructure.api.dependencies import UserServiceDep
from userbase.infrastructure.api.schemas import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from userbase.infrastructure.persistence.models import UserModel

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in",
)
async def login(
    request: LoginRequest,
    user_service: UserServiceDep,
) -> TokenResponse:
    """Authenticate a user and return a JWT access token.

    Returns 404 when no user has the email and 401 when the password
    does not match.
    """
    token = await user_service.login(request.email, request.password)
    return TokenResponse(token=token)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: RegisterRequest,
    user_service: UserServiceDep,
) -> UserModel:
    """Register a new user.

    Applies the same email and role checks as user creation and stores
    only the password hash.
    """
    return await user_service.register_user(request.model_dump())
