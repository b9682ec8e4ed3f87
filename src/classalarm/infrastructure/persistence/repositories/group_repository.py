"""Store adapters for current-schema and legacy group records."""

from __future__ import annotations

import uuid
from datetime import timezone

from sqlalchemy import delete, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from classalarm.core.logging import get_logger
from classalarm.domain.entities import EPOCH, Group, LegacyGroupRecord
from classalarm.domain.stores import GroupStore, LegacyGroupStore, RecordExistsError, StoreError
from classalarm.infrastructure.persistence.errors import is_missing_table_error
from classalarm.infrastructure.persistence.models import GroupModel, LegacyGroupModel

logger = get_logger(__name__)


def _to_entity(model: GroupModel) -> Group:
    return Group(
        id=model.id,
        code=model.code,
        members=list(model.members or []),
        member_count=model.member_count,
        last_alarm_at=model.last_alarm_at or EPOCH,
        schema_version=model.schema_version,
    )


class GroupRepository(GroupStore):
    """Group store backed by the class_groups table.

    Every mutating call commits, so it is durable when it returns.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find(self, code: str) -> Group | None:
        """Get a group by code, or None (also when the table is missing)."""
        try:
            result = await self.session.execute(select(GroupModel).where(GroupModel.code == code))
            model = result.scalar_one_or_none()
        except DBAPIError as e:
            if is_missing_table_error(e):
                await self.session.rollback()
                logger.warning("Group table does not exist, treating as not found", group_code=code)
                return None
            raise StoreError("Group lookup failed") from e
        except SQLAlchemyError as e:
            raise StoreError("Group lookup failed") from e
        return _to_entity(model) if model is not None else None

    async def create(self, group: Group) -> Group:
        """Insert a new group.

        Raises:
            RecordExistsError: If the code is already taken.
            StoreError: On any other database failure.
        """
        model = GroupModel(
            id=str(uuid.uuid4()),
            code=group.code,
            members=list(group.members),
            member_count=len(group.members),
            last_alarm_at=group.last_alarm_at,
            schema_version=group.schema_version,
        )
        created = _to_entity(model)
        try:
            self.session.add(model)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise RecordExistsError(f"Group code '{group.code}' already exists") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError("Group create failed") from e
        return created

    async def save(self, group: Group) -> Group:
        """Overwrite members, count and alarm time of an existing group.

        This is an unconditional update: the last writer wins. Adding a
        ``member_count``/``last_alarm_at`` equality check to the WHERE clause
        turns it into a compare-and-swap.
        """
        try:
            result = await self.session.execute(
                update(GroupModel)
                .where(GroupModel.code == group.code)
                .values(
                    members=list(group.members),
                    member_count=len(group.members),
                    last_alarm_at=group.last_alarm_at,
                )
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError("Group save failed") from e

        if result.rowcount == 0:
            logger.warning("Saved group no longer exists", group_code=group.code)
        group.member_count = len(group.members)
        return group

    async def delete(self, group: Group) -> None:
        try:
            await self.session.execute(delete(GroupModel).where(GroupModel.code == group.code))
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError("Group delete failed") from e


class LegacyGroupRepository(LegacyGroupStore):
    """Read-and-delete adapter for the legacy ``Class`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(self, code: str) -> LegacyGroupRecord | None:
        """Get a legacy record by its old ``classCode`` key."""
        try:
            result = await self.session.execute(
                select(LegacyGroupModel).where(LegacyGroupModel.class_code == code).limit(1)
            )
            model = result.scalar_one_or_none()
        except DBAPIError as e:
            if is_missing_table_error(e):
                await self.session.rollback()
                logger.debug("Legacy group table does not exist", group_code=code)
                return None
            raise StoreError("Legacy group lookup failed") from e
        except SQLAlchemyError as e:
            raise StoreError("Legacy group lookup failed") from e

        if model is None:
            return None

        last_alarm_time = model.last_alarm_time
        if last_alarm_time is not None and last_alarm_time.tzinfo is None:
            last_alarm_time = last_alarm_time.replace(tzinfo=timezone.utc)
        return LegacyGroupRecord(
            object_id=model.object_id,
            class_code=model.class_code,
            members=list(model.members or []),
            member_count=model.member_count,
            last_alarm_time=last_alarm_time,
        )

    async def delete(self, record: LegacyGroupRecord) -> None:
        try:
            await self.session.execute(
                delete(LegacyGroupModel).where(LegacyGroupModel.object_id == record.object_id)
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError("Legacy group delete failed") from e
