"""User service for account management business logic.

Implements listing, creation, update, deletion, registration and login of
users. Every password that reaches the database goes through the injected
PasswordHasher, whichever operation wrote it.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from userbase.core.logging import get_logger
from userbase.domain.services.user_errors import (
    EmailExistsError,
    InvalidCredentialsError,
    UserNotFoundError,
    UserServiceError,
)
from userbase.domain.services.user_validator import UserValidator
from userbase.infrastructure.auth import JWTService, PasswordHasher
from userbase.infrastructure.persistence.models import UserModel
from userbase.infrastructure.persistence.repositories import (
    RoleRepository,
    UserRepository,
)

logger = get_logger(__name__)

USER_COLUMNS = frozenset(
    {
        "first_name",
        "last_name",
        "email",
        "password",
        "birth_date",
        "phone_number",
        "role_id",
    }
)
NULLABLE_COLUMNS = frozenset({"birth_date", "phone_number"})


class UserService:
    """Service for user account operations."""

    def __init__(
        self,
        session: AsyncSession,
        password_hasher: PasswordHasher,
        jwt_service: JWTService | None = None,
    ) -> None:
        """Initialize the user service.

        Args:
            session: SQLAlchemy async session.
            password_hasher: Hasher used for every stored password.
            jwt_service: Token issuer, required only for login.
        """
        self.session = session
        self.password_hasher = password_hasher
        self.jwt_service = jwt_service
        self.user_repo = UserRepository(session)
        self.role_repo = RoleRepository(session)
        self.validator = UserValidator(self.user_repo, self.role_repo)

    async def list_users(self) -> list[UserModel]:
        """Return all users."""
        return await self.user_repo.list_all()

    async def get_user(self, user_id: int) -> UserModel:
        """Return a user by ID.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def create_user(self, fields: dict[str, Any]) -> UserModel:
        """Create a user from administrator-supplied fields.

        Raises:
            EmailExistsError: If the email is already taken.
            RoleNotFoundError: If the role does not exist.
        """
        user = await self._insert_user(fields)
        logger.info("User created", user_id=user.id, role_id=user.role_id)
        return user

    async def register_user(self, fields: dict[str, Any]) -> UserModel:
        """Register a new user through the public sign-up flow.

        Raises:
            EmailExistsError: If the email is already taken.
            RoleNotFoundError: If the role does not exist.
        """
        user = await self._insert_user(fields)
        logger.info("User registered", user_id=user.id, role_id=user.role_id)
        return user

    async def update_user(self, user_id: int, changes: dict[str, Any]) -> UserModel:
        """Apply the supplied fields to a user and return the fresh record.

        Raises:
            UserNotFoundError: If the user does not exist.
            EmailExistsError: If another user holds the new email.
            RoleNotFoundError: If the new role does not exist.
        """
        await self.get_user(user_id)

        values = self._clean_fields(changes)
        await self.validator.validate_changes(user_id, values)

        if "password" in values:
            values["password"] = self.password_hasher.hash(values["password"])

        if values:
            try:
                updated = await self.user_repo.update_by_id(user_id, values)
                if not updated:
                    raise UserNotFoundError()
                await self.session.commit()
            except IntegrityError as e:
                await self.session.rollback()
                raise self._integrity_error(e) from e

        user = await self.get_user(user_id)
        await self.session.refresh(user)

        logger.info("User updated", user_id=user_id, fields=sorted(values))
        return user

    async def delete_user(self, user_id: int) -> None:
        """Delete a user.

        Raises:
            UserNotFoundError: If no user was deleted.
        """
        deleted = await self.user_repo.delete_by_id(user_id)
        if not deleted:
            raise UserNotFoundError()
        await self.session.commit()
        logger.info("User deleted", user_id=user_id)

    async def login(self, email: str, password: str) -> str:
        """Authenticate a user and return an access token.

        Raises:
            UserNotFoundError: If no user has this email.
            InvalidCredentialsError: If the password does not match.
        """
        if self.jwt_service is None:
            raise UserServiceError("Token issuer is not configured")

        user = await self.user_repo.get_by_email(email)
        if user is None:
            logger.info("Login failed: user not found")
            raise UserNotFoundError()

        if not self.password_hasher.verify(password, user.password):
            logger.info("Login failed: invalid password", user_id=user.id)
            raise InvalidCredentialsError()

        role = await self.role_repo.get_by_id(user.role_id)

        logger.info("User logged in", user_id=user.id)
        return self.jwt_service.create_access_token(
            user_id=user.id,
            email=user.email,
            role_id=user.role_id,
            role=role.name if role else None,
        )

    async def _insert_user(self, fields: dict[str, Any]) -> UserModel:
        values = self._clean_fields(fields)
        await self.validator.validate_new_user(values["email"], values["role_id"])

        values["password"] = self.password_hasher.hash(values["password"])

        try:
            user = await self.user_repo.create(UserModel(**values))
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise self._integrity_error(e) from e

        await self.session.refresh(user)
        return user

    @staticmethod
    def _clean_fields(fields: dict[str, Any]) -> dict[str, Any]:
        """Keep known columns, dropping nulls for required ones."""
        return {
            key: value
            for key, value in fields.items()
            if key in USER_COLUMNS and (value is not None or key in NULLABLE_COLUMNS)
        }

    @staticmethod
    def _integrity_error(error: IntegrityError) -> UserServiceError:
        # Unique violations lost to a concurrent writer surface here
        if "email" in str(error.orig).lower():
            return EmailExistsError()
        logger.error("Integrity error while saving user", error=str(error.orig))
        return UserServiceError("Could not save user")
