"""Unit tests for UserRepository."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from userbase.infrastructure.persistence.models import UserModel
from userbase.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)


@pytest.fixture
def mock_session():
    """Create a mock database session."""
    session = AsyncMock(spec=AsyncSession)
    return session


@pytest.fixture
def repository(mock_session):
    """Create a UserRepository instance with a mock session."""
    return UserRepository(mock_session)


@pytest.fixture
def sample_user():
    """Create a sample user model."""
    return UserModel(
        id=1,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password="$2b$10$hash",
        role_id=2,
    )


@pytest.mark.asyncio
async def test_create(repository, mock_session, sample_user):
    result = await repository.create(sample_user)

    mock_session.add.assert_called_once_with(sample_user)
    mock_session.flush.assert_called_once()
    assert result == sample_user


@pytest.mark.asyncio
async def test_get_by_email(repository, mock_session, sample_user):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_user
    mock_session.execute.return_value = mock_result

    result = await repository.get_by_email("ada@example.com")

    assert result is sample_user
    mock_session.execute.assert_called_once()


@pytest.mark.asyncio
async def test_email_exists_true(repository, mock_session):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = 1
    mock_session.execute.return_value = mock_result

    assert await repository.email_exists("ada@example.com") is True


@pytest.mark.asyncio
async def test_email_exists_excludes_given_id(repository, mock_session):
    """The excluded ID ends up in the WHERE clause."""
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_session.execute.return_value = mock_result

    assert await repository.email_exists("ada@example.com", exclude_id=1) is False

    query = mock_session.execute.call_args[0][0]
    compiled = str(query.compile(compile_kwargs={"literal_binds": True}))
    assert "users.id != 1" in compiled


@pytest.mark.asyncio
async def test_update_by_id_returns_rowcount(repository, mock_session):
    mock_session.execute.return_value = MagicMock(rowcount=1)

    updated = await repository.update_by_id(1, {"first_name": "Augusta"})

    assert updated == 1
    mock_session.flush.assert_called_once()


@pytest.mark.asyncio
async def test_update_by_id_missing_user(repository, mock_session):
    mock_session.execute.return_value = MagicMock(rowcount=0)

    assert await repository.update_by_id(99, {"first_name": "Nobody"}) == 0


@pytest.mark.asyncio
async def test_delete_by_id_returns_rowcount(repository, mock_session):
    mock_session.execute.return_value = MagicMock(rowcount=1)

    assert await repository.delete_by_id(1) == 1
    mock_session.flush.assert_called_once()


@pytest.mark.asyncio
async def test_list_all(repository, mock_session, sample_user):
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = [sample_user]
    mock_session.execute.return_value = mock_result

    assert await repository.list_all() == [sample_user]


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [2**31, 99999999999999999999, -(2**31) - 1])
async def test_ids_outside_integer_range_never_reach_database(repository, mock_session, user_id):
    """Such IDs cannot exist, and the drivers overflow when binding them."""
    assert await repository.get_by_id(user_id) is None
    assert await repository.update_by_id(user_id, {"first_name": "X"}) == 0
    assert await repository.delete_by_id(user_id) == 0

    mock_session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_email_exists_ignores_unstorable_exclude_id(repository, mock_session):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_session.execute.return_value = mock_result

    await repository.email_exists("ada@example.com", exclude_id=2**40)

    query = mock_session.execute.call_args[0][0]
    compiled = str(query.compile(compile_kwargs={"literal_binds": True}))
    assert "users.id !=" not in compiled
