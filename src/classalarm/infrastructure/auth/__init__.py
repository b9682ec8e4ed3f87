"""Authentication infrastructure components.

Secret hashing, session tokens and caller authentication.
"""

from classalarm.infrastructure.auth.authenticator import Authenticator
from classalarm.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
    jwt_service,
)
from classalarm.infrastructure.auth.secret_hasher import hash_secret, verify_secret

__all__ = [
    "Authenticator",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "TokenExpiredError",
    "hash_secret",
    "jwt_service",
    "verify_secret",
]
