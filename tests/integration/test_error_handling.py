"""Integration tests for storage and unexpected failures."""

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from userbase.infrastructure.persistence.repositories import UserRepository


@pytest.mark.asyncio
async def test_database_error_returns_500(client: AsyncClient, auth_headers):
    error = OperationalError("SELECT users.id FROM users", {}, Exception("disk I/O error"))

    with patch.object(UserRepository, "list_all", side_effect=error):
        response = await client.get("/users", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"message": "Database error"}
    assert "disk I/O error" not in response.text


@pytest.mark.asyncio
async def test_database_error_on_write_returns_500(client: AsyncClient, auth_headers, existing_user):
    error = OperationalError("DELETE FROM users", {}, Exception("database is locked"))

    with patch.object(UserRepository, "delete_by_id", side_effect=error):
        response = await client.delete(f"/users/{existing_user.id}", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"message": "Database error"}


@pytest.mark.asyncio
async def test_unexpected_error_returns_500_without_details(client: AsyncClient, auth_headers):
    from userbase.infrastructure.api.app import app

    # Starlette re-raises unhandled errors after responding; keep the response
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    with patch.object(UserRepository, "list_all", side_effect=RuntimeError("secret detail")):
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/users", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert "secret detail" not in response.text
    assert "Traceback" not in response.text
