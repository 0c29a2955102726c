"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from userbase.infrastructure.auth import JWTService, PasswordHasher
from userbase.infrastructure.persistence.database import Base
from userbase.infrastructure.persistence.models import RoleModel, UserModel

TEST_PASSWORD = "Secret123!"


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Low-cost hasher so tests stay fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key="test-secret-key", expire_minutes=5)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database seeded with the 'admin' (id 1) and
    'user' (id 2) roles.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        session.add_all(
            [
                RoleModel(id=1, name="admin", description="Administrator"),
                RoleModel(id=2, name="user", description="Standard User"),
            ]
        )
        await session.commit()

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    password_hasher: PasswordHasher,
    jwt_service: JWTService,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the test database session."""
    from userbase.infrastructure.api.app import app
    from userbase.infrastructure.persistence.database import get_db_session

    original_hasher = app.state.password_hasher
    original_jwt_service = app.state.jwt_service

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.state.password_hasher = password_hasher
    app.state.jwt_service = jwt_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}
    app.state.password_hasher = original_hasher
    app.state.jwt_service = original_jwt_service


@pytest_asyncio.fixture
async def existing_user(db_session: AsyncSession, password_hasher: PasswordHasher) -> UserModel:
    """Create a regular user whose password is TEST_PASSWORD."""
    user = UserModel(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password=password_hasher.hash(TEST_PASSWORD),
        phone_number="+44 20 7946 0000",
        role_id=2,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession, password_hasher: PasswordHasher) -> UserModel:
    """Create a second user to collide with."""
    user = UserModel(
        first_name="Grace",
        last_name="Hopper",
        email="grace@example.com",
        password=password_hasher.hash("AnotherSecret1"),
        role_id=1,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(existing_user: UserModel, jwt_service: JWTService) -> dict[str, str]:
    """Authorization header for existing_user."""
    token = jwt_service.create_access_token(
        user_id=existing_user.id,
        email=existing_user.email,
        role_id=existing_user.role_id,
        role="user",
    )
    return {"Authorization": f"Bearer {token}"}
