"""Session token service.

Issues and validates the JWT session credentials handed out by
register-or-login and presented on every authenticated operation.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from classalarm.core.config import get_settings


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
    """Service for creating and validating session tokens."""

    ALGORITHM = "HS256"
    ISSUER = "classalarm"

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
        """
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    def create_session_token(
        self,
        account_id: str,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a session token for an account.

        Args:
            account_id: The account's unique identifier.
            username: The account's login name.
            expires_delta: Custom expiration time. Defaults to config value.

        Returns:
            Encoded JWT session token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": account_id,
            "iat": now,
            "exp": now + expires_delta,
            "username": username,
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a session token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or not a session token.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

        if payload.get("type") != "access" or not payload.get("sub"):
            raise InvalidTokenError("Not a session token")
        return payload


# Default JWT service instance
jwt_service = JWTService()
