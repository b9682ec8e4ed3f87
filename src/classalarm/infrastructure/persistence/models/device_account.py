"""SQLAlchemy model for the device_accounts table."""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from classalarm.infrastructure.persistence.database import Base


class DeviceAccountModel(Base):
    """SQLAlchemy model for the device_accounts table.

    Attributes:
        id: Account id derived from the device identifier.
        username: Device identifier, unique.
        secret_hash: Argon2 hash of the derived secret.
        created_at: Timestamp when the account was registered.
        last_login: Timestamp of the most recent register-or-login.
    """

    __tablename__ = "device_accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Account ID (UUID)")
    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Device identifier",
    )
    secret_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<DeviceAccount(id={self.id})>"
