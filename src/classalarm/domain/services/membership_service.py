"""Group membership management.

Creates groups, adds and removes members, and deletes a group once its
last member leaves. Capacity and uniqueness are checked against the
record read from the directory; see ``classalarm.domain.stores`` for the
consistency this gives under concurrent writers.
"""

from dataclasses import dataclass
from datetime import datetime

from classalarm.core.config import get_settings
from classalarm.core.exceptions import CapacityExceededError, DuplicateCodeError
from classalarm.core.logging import get_logger
from classalarm.domain.entities import Group
from classalarm.domain.services.cooldown_gate import CooldownGate
from classalarm.domain.services.group_directory import GroupDirectory
from classalarm.domain.services.input_validator import InputValidator, default_input_validator
from classalarm.domain.stores import GroupStore, RecordExistsError

logger = get_logger(__name__)


@dataclass(frozen=True)
class LeaveOutcome:
    """Result of a leave: the group after removal and whether it was deleted."""

    group: Group
    deleted: bool


@dataclass(frozen=True)
class GroupInfo:
    """Read-only view of a group for one caller."""

    code: str
    member_count: int
    is_member: bool
    cooldown_remaining: int


class MembershipManager:
    """Service for group lifecycle and membership business rules."""

    def __init__(
        self,
        directory: GroupDirectory,
        group_store: GroupStore,
        cooldown_gate: CooldownGate | None = None,
        max_members: int | None = None,
        validator: InputValidator | None = None,
    ) -> None:
        """Initialize the membership manager.

        Args:
            directory: Group lookup entry point.
            group_store: Store the mutations are written to.
            cooldown_gate: Gate used to report remaining cooldown.
            max_members: Capacity limit. Defaults to ``max_members`` setting (20).
            validator: Parameter validator.
        """
        self.directory = directory
        self.group_store = group_store
        self.cooldown_gate = cooldown_gate or CooldownGate()
        self.max_members = max_members if max_members is not None else get_settings().max_members
        self.validator = validator or default_input_validator

    async def create_group(self, code: str, creator_id: str) -> Group:
        """Create a group whose only member is its creator.

        Raises:
            InvalidInputError: If the code is malformed.
            DuplicateCodeError: If a group with the code exists.
        """
        self.validator.validate_group_code(code)
        if await self.directory.resolve(code) is not None:
            raise DuplicateCodeError()

        try:
            group = await self.group_store.create(Group(code=code, members=[creator_id]))
        except RecordExistsError as e:
            # Lost a race with another create for the same code
            raise DuplicateCodeError() from e

        logger.info("Group created", group_code=code, user_id=creator_id)
        return group

    async def join_group(self, code: str, user_id: str) -> Group:
        """Add ``user_id`` to a group. Joining again is a no-op.

        Raises:
            GroupNotFoundError: If the group does not exist.
            CapacityExceededError: If the group is full and the user is new.
        """
        group = await self.directory.require(code)
        if group.has_member(user_id):
            logger.debug("Rejoin ignored, already a member", group_code=code, user_id=user_id)
            return group

        if group.member_count >= self.max_members:
            raise CapacityExceededError(f"Group is full ({self.max_members} members).")

        group.add_member(user_id)
        group = await self.group_store.save(group)
        logger.info("Joined group", group_code=code, user_id=user_id, member_count=group.member_count)
        return group

    async def leave_group(self, code: str, user_id: str) -> LeaveOutcome:
        """Remove ``user_id`` from a group, deleting the group if it empties.

        Raises:
            GroupNotFoundError: If the group does not exist.
        """
        group = await self.directory.require(code)
        group.remove_member(user_id)

        if group.is_empty:
            await self.group_store.delete(group)
            logger.info("Last member left, group deleted", group_code=code, user_id=user_id)
            return LeaveOutcome(group=group, deleted=True)

        group = await self.group_store.save(group)
        logger.info("Left group", group_code=code, user_id=user_id, member_count=group.member_count)
        return LeaveOutcome(group=group, deleted=False)

    async def get_info(self, code: str, user_id: str, now: datetime) -> GroupInfo:
        """Describe a group from the point of view of ``user_id``.

        Raises:
            GroupNotFoundError: If the group does not exist.
        """
        group = await self.directory.require(code)
        return GroupInfo(
            code=group.code,
            member_count=group.member_count,
            is_member=group.has_member(user_id),
            cooldown_remaining=self.cooldown_gate.remaining(group, now),
        )
