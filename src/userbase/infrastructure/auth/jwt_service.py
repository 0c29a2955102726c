"""JWT token service.

Provides creation and validation of the signed, time-bound bearer tokens
returned by login.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from userbase.core.config import Settings


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTService:
    """Service for creating and validating JWT access tokens.

    The signing key and lifetime are fixed when the service is built; the
    application creates one instance at startup with ``from_settings``.
    """

    ALGORITHM = "HS256"
    ISSUER = "userbase"

    def __init__(self, secret_key: str, expire_minutes: int = 60) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens.
            expire_minutes: Default lifetime of access tokens.
        """
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTService":
        """Build a service from application settings."""
        return cls(
            secret_key=settings.secret_key,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def create_access_token(
        self,
        user_id: int,
        email: str,
        role_id: int,
        role: str | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: The user's identifier.
            email: The user's email address.
            role_id: The user's role ID.
            role: The user's role name, when known.
            expires_delta: Custom expiration time. Defaults to the service lifetime.

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": str(user_id),
            "iat": now,
            "exp": now + expires_delta,
            "user_id": user_id,
            "email": email,
            "role_id": role_id,
            "role": role,
            "type": "access",
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT token.

        Args:
            token: The encoded JWT token.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Decode a token and check that it is an access token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or not an access token.
        """
        payload = self.decode_token(token)
        if payload.get("type") != "access":
            raise InvalidTokenError("Not an access token")
        return payload
