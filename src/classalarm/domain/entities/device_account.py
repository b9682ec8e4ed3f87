"""Device account and caller identity entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class DeviceAccount:
    """Account bound to one device identifier.

    Attributes:
        id: Account id, derived deterministically from the device id.
        username: Login name (the device id).
        secret_hash: Hash of the derived secret.
        created_at: Timestamp when the account was registered.
        last_login: Timestamp of the most recent register-or-login.
    """

    id: str
    username: str
    secret_hash: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_login: datetime | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Account ID is required")
        if not self.username:
            raise ValueError("Username is required")


@dataclass(frozen=True)
class CallerContext:
    """Identity of the authenticated caller of an operation."""

    user_id: str
    username: str | None = None


@dataclass
class Installation:
    """Push target registered by a device for its owning account."""

    user_id: str
    device_token: str
    platform: str = "ios"
