"""FastAPI dependencies for services and authentication.

The password hasher and token issuer are built once by the application
factory and stored on ``app.state``; request handlers receive them through
these dependencies.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from userbase.core.logging import get_logger
from userbase.domain.services import UserService
from userbase.infrastructure.auth import (
    InvalidTokenError,
    JWTService,
    PasswordHasher,
    TokenExpiredError,
)
from userbase.infrastructure.persistence.database import get_db_session
from userbase.infrastructure.persistence.models import UserModel
from userbase.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


def get_password_hasher(request: Request) -> PasswordHasher:
    """Get the process-wide password hasher."""
    return request.app.state.password_hasher


def get_jwt_service(request: Request) -> JWTService:
    """Get the process-wide token issuer."""
    return request.app.state.jwt_service


def get_user_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
) -> UserService:
    """Build a user service bound to the request's session."""
    return UserService(session, password_hasher, jwt_service)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> UserModel:
    """Resolve the user behind the Authorization header.

    Returns:
        UserModel: The authenticated user, freshly loaded from the database.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired, or
            if its user no longer exists.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise _unauthorized("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise _unauthorized("Could not validate credentials")

    try:
        payload = jwt_service.validate_access_token(parts[1])
        user_id = int(payload["user_id"])
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise _unauthorized("Token has expired")
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise _unauthorized("Invalid token")
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Authentication failed: bad user_id claim", error=str(e))
        raise _unauthorized("Invalid token")

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        logger.info("Authentication failed: user no longer exists", user_id=user_id)
        raise _unauthorized("Could not validate credentials")

    return user


AuthenticatedUser = Annotated[UserModel, Depends(get_current_user)]
