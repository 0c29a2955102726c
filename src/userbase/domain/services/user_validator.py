"""Shared precondition checks for user writes.

Create, register and update all require that the email is not held by
another user and that the role exists.
"""

from userbase.domain.services.user_errors import EmailExistsError, RoleNotFoundError
from userbase.infrastructure.persistence.models import RoleModel
from userbase.infrastructure.persistence.repositories import (
    RoleRepository,
    UserRepository,
)


class UserValidator:
    """Validates user fields against the user and role directories."""

    def __init__(self, user_repo: UserRepository, role_repo: RoleRepository) -> None:
        self.user_repo = user_repo
        self.role_repo = role_repo

    async def ensure_email_available(
        self, email: str, exclude_id: int | None = None
    ) -> None:
        """Raise EmailExistsError if another user holds ``email``.

        Args:
            email: Email address to check.
            exclude_id: User being updated; their own email is not a conflict.
        """
        if await self.user_repo.email_exists(email, exclude_id=exclude_id):
            raise EmailExistsError()

    async def ensure_role_exists(self, role_id: int) -> RoleModel:
        """Return the role for ``role_id`` or raise RoleNotFoundError."""
        role = await self.role_repo.get_by_id(role_id)
        if role is None:
            raise RoleNotFoundError()
        return role

    async def validate_new_user(self, email: str, role_id: int) -> RoleModel:
        """Run the checks required before inserting a user.

        Returns:
            The resolved role.
        """
        await self.ensure_email_available(email)
        return await self.ensure_role_exists(role_id)

    async def validate_changes(self, user_id: int, changes: dict) -> None:
        """Run the checks that apply to the fields present in ``changes``."""
        if changes.get("email") is not None:
            await self.ensure_email_available(changes["email"], exclude_id=user_id)
        if changes.get("role_id") is not None:
            await self.ensure_role_exists(changes["role_id"])
