"""Deterministic credentials derived from a device identifier.

Anyone who knows a device identifier and the salt can recompute its
secret. The derivation is kept in this one class so it can be replaced
(for example by a server-issued random secret) without touching the
register-or-login flow.
"""

import hashlib
import hmac
import uuid
from dataclasses import dataclass

from classalarm.core.config import get_settings

# Namespace for account ids derived from device identifiers
DEVICE_ACCOUNT_NAMESPACE = uuid.UUID("0d6b3a8e-5f7c-4b7e-9a61-3c2f5d8e1a47")


@dataclass(frozen=True)
class DeviceCredentials:
    username: str
    account_id: str
    secret: str


class DeviceCredentialDeriver:
    """Derives the account id, login name and secret for a device."""

    def __init__(self, salt: str | None = None) -> None:
        self._salt = salt

    @property
    def salt(self) -> str:
        if self._salt:
            return self._salt
        return get_settings().device_secret_salt

    def derive(self, device_id: str) -> DeviceCredentials:
        secret = hmac.new(
            self.salt.encode("utf-8"),
            device_id.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
        return DeviceCredentials(
            username=device_id,
            account_id=str(uuid.uuid5(DEVICE_ACCOUNT_NAMESPACE, device_id)),
            secret=secret,
        )
