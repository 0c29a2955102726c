"""User repository for database operations."""

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from userbase.infrastructure.persistence.database import is_storable_id
from userbase.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model, with its generated ID populated.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: int) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID.

        Returns:
            User model if found, None otherwise.
        """
        if not is_storable_id(user_id):
            return None

        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email address.

        Args:
            email: User's email address.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: int | None = None) -> bool:
        """Check if an email is already held by a user.

        Args:
            email: Email to check.
            exclude_id: ID of a user to ignore, so that a user keeping their
                own email does not count as a duplicate.

        Returns:
            True if another user holds the email, False otherwise.
        """
        query = select(UserModel.id).where(UserModel.email == email)
        if exclude_id is not None and is_storable_id(exclude_id):
            query = query.where(UserModel.id != exclude_id)

        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[UserModel]:
        """List all users ordered by ID."""
        result = await self.session.execute(select(UserModel).order_by(UserModel.id))
        return list(result.scalars().all())

    async def update_by_id(self, user_id: int, values: dict[str, Any]) -> int:
        """Apply column values to a user.

        Args:
            user_id: ID of the user to update.
            values: Mapping of column name to new value.

        Returns:
            Number of rows updated (0 or 1).
        """
        if not is_storable_id(user_id):
            return 0

        result = await self.session.execute(
            update(UserModel).where(UserModel.id == user_id).values(**values)
        )
        await self.session.flush()
        return result.rowcount

    async def delete_by_id(self, user_id: int) -> int:
        """Delete a user.

        Args:
            user_id: ID of the user to delete.

        Returns:
            Number of rows deleted (0 or 1).
        """
        if not is_storable_id(user_id):
            return 0

        result = await self.session.execute(
            delete(UserModel).where(UserModel.id == user_id)
        )
        await self.session.flush()
        return result.rowcount
