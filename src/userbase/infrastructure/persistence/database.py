"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine configuration
for SQLAlchemy with async support. It supports both SQLite (aiosqlite) and
PostgreSQL (asyncpg) drivers.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from userbase.core.config import Settings, get_settings
from userbase.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ROLES = [
    {"id": 1, "name": "admin", "description": "Administrator with full access"},
    {"id": 2, "name": "user", "description": "Regular user with limited access"},
]

# Integer primary keys are 32-bit on PostgreSQL
MAX_ID = 2**31 - 1


def is_storable_id(value: int) -> bool:
    """Check whether an ID fits the integer primary key columns."""
    return -MAX_ID - 1 <= value <= MAX_ID


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class DatabaseManager:
    """Database connection and session manager.

    Owns the async engine and session factory. Both are created lazily on
    first use so that importing the module never opens a connection.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the database manager.

        Args:
            settings: Settings to read the connection parameters from.
                Defaults to the cached application settings.
        """
        self.settings = settings or get_settings()
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            if self.settings.is_sqlite:
                # SQLite uses a single-file pool, so sizing options do not apply
                self._engine = create_async_engine(
                    self.settings.database_url,
                    echo=self.settings.db_echo,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_async_engine(
                    self.settings.database_url,
                    echo=self.settings.db_echo,
                    pool_size=self.settings.db_pool_size,
                    max_overflow=self.settings.db_max_overflow,
                    pool_recycle=self.settings.db_pool_recycle,
                )
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all tables registered on ``Base.metadata``."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def disconnect(self) -> None:
        """Close the database engine and all connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session scope that rolls back on error.

        Example:
            async with db.session() as session:
                result = await session.execute(select(UserModel))
                users = result.scalars().all()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if the database connection is working."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.debug("Database connection check successful")
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


# Global database manager instance
_db_manager: DatabaseManager | None = None


def get_db_manager(settings: Settings | None = None) -> DatabaseManager:
    """Get the global database manager instance.

    Args:
        settings: Settings the manager must be built from. When they differ
            from the current manager's settings, a new manager replaces it.
    """
    global _db_manager
    if _db_manager is None or (settings is not None and _db_manager.settings is not settings):
        _db_manager = DatabaseManager(settings)
    return _db_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request.

    Example:
        @app.get("/users")
        async def list_users(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    db = get_db_manager()
    async with db.session() as session:
        yield session


async def init_database(db: DatabaseManager | None = None) -> None:
    """Initialize the database.

    Creates the SQLite directory if needed, checks connectivity, creates
    tables and seeds the default roles.

    Raises:
        RuntimeError: If the database is unreachable.
    """
    # Models must be imported so that they are registered on Base.metadata
    from userbase.infrastructure.persistence.models import RoleModel, UserModel  # noqa: F401

    db = db or get_db_manager()
    settings = db.settings

    if settings.is_sqlite and ":memory:" not in settings.database_url:
        # Extract path from sqlite+aiosqlite:///path/to/file.db
        db_file = Path(settings.database_url.split(":///")[-1])
        db_file.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Database directory ensured", path=str(db_file.parent))

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")

    await db.create_tables()
    await seed_default_roles(db)


async def seed_default_roles(db: DatabaseManager) -> None:
    """Insert the default roles that do not exist yet."""
    from userbase.infrastructure.persistence.models import RoleModel
    from userbase.infrastructure.persistence.repositories import RoleRepository

    async with db.session() as session:
        role_repo = RoleRepository(session)
        for role_data in DEFAULT_ROLES:
            if await role_repo.get_by_name(role_data["name"]) is None:
                await role_repo.create(RoleModel(**role_data))
                logger.info("Seeded default role", role_name=role_data["name"])

        await session.commit()


async def close_database() -> None:
    """Close the global database connection."""
    db = get_db_manager()
    await db.disconnect()
