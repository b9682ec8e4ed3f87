"""SQLAlchemy model for the installations table (push targets)."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from classalarm.infrastructure.persistence.database import Base


class InstallationModel(Base):
    """One push-capable device, owned by a device account.

    Attributes:
        id: Primary key (UUID string).
        user_id: Owning account.
        device_token: APNs/FCM token, unique across installations.
        platform: ios or android.
        updated_at: Timestamp of the last registration.
    """

    __tablename__ = "installations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("device_accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    device_token: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    platform: Mapped[str] = mapped_column(String(16), nullable=False, default="ios")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Installation(user_id={self.user_id}, platform={self.platform})>"
