"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt  # PyJWT
import pytest

from userbase.core.config import Settings
from userbase.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)

SECRET_KEY = "unit-test-secret"


@pytest.fixture
def jwt_service():
    return JWTService(secret_key=SECRET_KEY, expire_minutes=30)


class TestJWTService:

    def test_create_access_token(self, jwt_service):
        """Token carries the user's identity and role."""
        token = jwt_service.create_access_token(
            user_id=7,
            email="test@example.com",
            role_id=2,
            role="user",
        )

        decoded = jwt.decode(token, SECRET_KEY, algorithms=["HS256"], issuer="userbase")

        assert decoded["sub"] == "7"
        assert decoded["user_id"] == 7
        assert decoded["email"] == "test@example.com"
        assert decoded["role_id"] == 2
        assert decoded["role"] == "user"
        assert decoded["type"] == "access"
        assert "iat" in decoded
        assert "exp" in decoded

    def test_default_expiration_uses_service_lifetime(self, jwt_service):
        start_time = datetime.now(timezone.utc)
        token = jwt_service.create_access_token(user_id=1, email="a@b.co", role_id=1)
        decoded = jwt.decode(token, SECRET_KEY, algorithms=["HS256"], issuer="userbase")

        exp_dt = datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)
        expected = start_time + timedelta(minutes=30)

        assert expected - timedelta(seconds=2) <= exp_dt <= expected + timedelta(seconds=2)

    def test_custom_expiration(self, jwt_service):
        start_time = datetime.now(timezone.utc)
        token = jwt_service.create_access_token(
            user_id=1,
            email="a@b.co",
            role_id=1,
            expires_delta=timedelta(minutes=5),
        )
        decoded = jwt.decode(token, SECRET_KEY, algorithms=["HS256"], issuer="userbase")

        exp_dt = datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)
        expected = start_time + timedelta(minutes=5)

        assert expected - timedelta(seconds=2) <= exp_dt <= expected + timedelta(seconds=2)

    def test_decode_token_valid(self, jwt_service):
        token = jwt_service.create_access_token(user_id=3, email="a@b.co", role_id=1)

        payload = jwt_service.decode_token(token)

        assert payload["user_id"] == 3

    def test_decode_token_invalid(self, jwt_service):
        with pytest.raises(InvalidTokenError):
            jwt_service.decode_token("invalid_token")

    def test_decode_token_wrong_secret(self, jwt_service):
        other = JWTService(secret_key="another-secret")
        token = other.create_access_token(user_id=3, email="a@b.co", role_id=1)

        with pytest.raises(InvalidTokenError):
            jwt_service.decode_token(token)

    def test_decode_token_expired(self, jwt_service):
        token = jwt_service.create_access_token(
            user_id=3,
            email="a@b.co",
            role_id=1,
            expires_delta=timedelta(seconds=-10),
        )

        with pytest.raises(TokenExpiredError):
            jwt_service.decode_token(token)

    def test_validate_access_token_rejects_other_types(self, jwt_service):
        token = jwt.encode(
            {
                "iss": JWTService.ISSUER,
                "sub": "3",
                "user_id": 3,
                "type": "refresh",
                "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
            },
            SECRET_KEY,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            jwt_service.validate_access_token(token)

    def test_validate_access_token(self, jwt_service):
        token = jwt_service.create_access_token(user_id=3, email="a@b.co", role_id=1)

        assert jwt_service.validate_access_token(token)["type"] == "access"

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            JWTService(secret_key="")

    def test_from_settings(self):
        settings = Settings(secret_key="from-settings", access_token_expire_minutes=15)

        service = JWTService.from_settings(settings)
        token = service.create_access_token(user_id=1, email="a@b.co", role_id=1)

        assert service.expire_minutes == 15
        assert jwt.decode(token, "from-settings", algorithms=["HS256"], issuer="userbase")
