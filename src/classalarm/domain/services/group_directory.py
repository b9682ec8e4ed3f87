"""Group lookup by code, with lazy migration of legacy records.

The directory is the single lookup entry point for every operation.
Callers above it only ever see current-schema Group records: a code
that still lives in the legacy store is migrated on first access.
"""

from classalarm.core.exceptions import GroupNotFoundError
from classalarm.core.logging import get_logger
from classalarm.domain.entities import EPOCH, Group, LegacyGroupRecord
from classalarm.domain.stores import GroupStore, LegacyGroupStore, RecordExistsError, StoreError

logger = get_logger(__name__)


class LegacyMigrator:
    """Moves a legacy group record into the current schema.

    Two first accesses racing on the same legacy code can both try to
    create the migrated record; the store's unique code rejects the second
    create and that caller adopts the record the first one wrote.
    """

    def __init__(self, group_store: GroupStore, legacy_store: LegacyGroupStore) -> None:
        self.group_store = group_store
        self.legacy_store = legacy_store

    @staticmethod
    def upgrade(record: LegacyGroupRecord) -> Group:
        """Build the current-schema group for a legacy record."""
        members = list(record.members or [])
        group = Group(
            code=record.class_code,
            members=members,
            last_alarm_at=record.last_alarm_time or EPOCH,
        )
        if record.member_count is not None and record.member_count != group.member_count:
            logger.warning(
                "Legacy member count disagrees with members, using member list",
                group_code=record.class_code,
                legacy_member_count=record.member_count,
                member_count=group.member_count,
            )
        return group

    async def migrate(self, code: str) -> Group | None:
        """Migrate the legacy record for ``code`` if there is one.

        Returns:
            The migrated group, or None if the legacy store has no record or
            the record has no members.
        """
        record = await self.legacy_store.find(code)
        if record is None:
            return None

        upgraded = self.upgrade(record)
        if upgraded.is_empty:
            # A memberless group is never stored
            logger.info("Discarding legacy group record without members", group_code=code)
            await self._discard(record)
            return None

        try:
            group = await self.group_store.create(upgraded)
            logger.info(
                "Migrated legacy group record",
                group_code=code,
                member_count=group.member_count,
            )
        except RecordExistsError:
            group = await self.group_store.find(code)
            logger.info("Legacy group already migrated by a concurrent request", group_code=code)

        # The migrated record is authoritative from here on
        await self._discard(record)
        return group

    async def _discard(self, record: LegacyGroupRecord) -> None:
        """Delete a legacy record, logging instead of raising on failure."""
        try:
            await self.legacy_store.delete(record)
        except (StoreError, TimeoutError) as e:
            logger.warning(
                "Failed to delete legacy group record",
                group_code=record.class_code,
                legacy_object_id=record.object_id,
                error=str(e),
            )


class GroupDirectory:
    """Resolves group codes to current-schema groups."""

    def __init__(self, group_store: GroupStore, legacy_store: LegacyGroupStore) -> None:
        self.group_store = group_store
        self.migrator = LegacyMigrator(group_store, legacy_store)

    async def resolve(self, code: str) -> Group | None:
        """Look up a group, migrating it from the legacy store if needed."""
        group = await self.group_store.find(code)
        if group is not None:
            return group
        return await self.migrator.migrate(code)

    async def require(self, code: str) -> Group:
        """Like ``resolve`` but raises when the code is unknown.

        Raises:
            GroupNotFoundError: If neither store has the code.
        """
        group = await self.resolve(code)
        if group is None:
            raise GroupNotFoundError()
        return group
