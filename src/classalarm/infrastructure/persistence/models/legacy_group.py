"""SQLAlchemy model for the legacy ``Class`` object class.

Column names follow the original schema. Deployments created after the
migration do not have this table at all.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from classalarm.infrastructure.persistence.database import Base

LEGACY_GROUP_TABLE = "Class"


class LegacyGroupModel(Base):
    """SQLAlchemy model for pre-migration group records."""

    __tablename__ = LEGACY_GROUP_TABLE

    object_id: Mapped[str] = mapped_column("objectId", String(36), primary_key=True)
    class_code: Mapped[str] = mapped_column("classCode", String(6), nullable=False, index=True)
    members: Mapped[list[str] | None] = mapped_column("members", JSON, nullable=True)
    member_count: Mapped[int | None] = mapped_column("memberCount", Integer, nullable=True)
    last_alarm_time: Mapped[datetime | None] = mapped_column(
        "lastAlarmTime", DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        return f"<LegacyGroup(objectId={self.object_id}, classCode={self.class_code})>"
