"""Persistence repositories for database operations."""

from userbase.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)
from userbase.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "RoleRepository",
    "UserRepository",
]
