"""JWT token service.

Bearer tokens are issued by the external auth provider and signed with the
shared ``secret_key``. This service validates them and, for development
and tests, can mint tokens with the same claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from outletbase.core.config import Settings, get_settings


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
    """Service for creating and validating access tokens."""

    def __init__(self, secret_key: str | None = None, settings: Settings | None = None) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
            settings: Settings to read issuer, algorithm and expiry from.
        """
        self._secret_key = secret_key
        self._settings = settings

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def secret_key(self) -> str:
        """Get the secret key for signing tokens."""
        if self._secret_key:
            return self._secret_key
        return self.settings.secret_key

    def create_access_token(
        self,
        user_id: str,
        email: str,
        name: str | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: The user's unique identifier.
            email: The user's email address.
            name: Optional display name.
            expires_delta: Custom expiration time. Defaults to config value.

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.settings.access_token_expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.settings.auth_issuer,
            "sub": user_id,
            "iat": now,
            "exp": now + expires_delta,
            "user_id": user_id,
            "email": email,
            "type": "access",
        }
        if name:
            payload["name"] = name

        return jwt.encode(payload, self.secret_key, algorithm=self.settings.auth_algorithm)

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
                self.secret_key,
                algorithms=[self.settings.auth_algorithm],
                issuer=self.settings.auth_issuer,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate that a token is an access token and decode it.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid, not an access token
                or lacks the identity claims.
        """
        payload = self.decode_token(token)
        if payload.get("type", "access") != "access":
            raise InvalidTokenError("Not an access token")
        if not (payload.get("user_id") or payload.get("sub")) or not payload.get("email"):
            raise InvalidTokenError("Token is missing identity claims")
        return payload


# Global JWT service instance
jwt_service = JWTService()
