"""SQLAlchemy models for the UserBase tables.

All models inherit from the Base class defined in database.py and are
created by ``init_database``.
"""

from userbase.infrastructure.persistence.models.role import RoleModel
from userbase.infrastructure.persistence.models.user import UserModel

__all__ = [
    "RoleModel",
    "UserModel",
]
