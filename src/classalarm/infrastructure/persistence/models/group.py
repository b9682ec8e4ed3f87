"""SQLAlchemy model for the class_groups table (current schema)."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from classalarm.domain.entities import CURRENT_SCHEMA_VERSION, EPOCH
from classalarm.infrastructure.persistence.database import Base


class GroupModel(Base):
    """SQLAlchemy model for the class_groups table.

    Attributes:
        id: Surrogate primary key (UUID string), internal only.
        code: Unique six-character group code.
        members: JSON list of member user ids.
        member_count: Cached length of members.
        last_alarm_at: Time of the last accepted broadcast, epoch if never.
        schema_version: Record shape version.
        created_at: Timestamp when the group was created.
        updated_at: Timestamp when the group was last updated.
    """

    __tablename__ = "class_groups"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Group ID (UUID)",
    )
    code: Mapped[str] = mapped_column(
        String(6),
        nullable=False,
        unique=True,
        index=True,
        comment="Six-character group code",
    )
    members: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Member user ids",
    )
    member_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    last_alarm_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=EPOCH,
    )
    schema_version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=CURRENT_SCHEMA_VERSION,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Group(code={self.code}, member_count={self.member_count})>"
