"""Hashing of derived device secrets using Argon2id."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError

_hasher = PasswordHasher()


def hash_secret(secret: str) -> str:
    """Hash a device secret for storage.

    Example:
        >>> hash_secret("4f1c...").startswith("$argon2id$")
        True
    """
    return _hasher.hash(secret)


def verify_secret(secret: str, hashed: str) -> bool:
    """Check a device secret against its stored hash in constant time."""
    try:
        return _hasher.verify(hashed, secret)
    except (VerifyMismatchError, InvalidHashError):
        return False
