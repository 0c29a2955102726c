"""Infrastructure layer - External dependencies and implementations.

This layer contains all external dependencies including:
- Database adapters (SQLAlchemy)
- API routes (FastAPI)
- Authentication (bcrypt, JWT)
"""

from userbase.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    close_database,
    get_db_manager,
    get_db_session,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "get_db_session",
    "init_database",
    "close_database",
]
