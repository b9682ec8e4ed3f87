"""Group entity shared by the devices of one class.

A group is identified solely by its code. Membership is set-like even
though it is kept as an ordered list for storage.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

# "Never alarmed" marker for last_alarm_at
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

CURRENT_SCHEMA_VERSION = 2


@dataclass
class Group:
    """Current-schema group record.

    Attributes:
        code: Immutable lookup key (six characters by default).
        members: Member user ids, no duplicates.
        member_count: Cached ``len(members)``.
        last_alarm_at: Time of the most recently accepted broadcast.
        id: Store surrogate key, never exposed to callers.
        schema_version: Record shape version.
    """

    code: str
    members: list[str] = field(default_factory=list)
    member_count: int = 0
    last_alarm_at: datetime = EPOCH
    id: str | None = None
    schema_version: int = CURRENT_SCHEMA_VERSION

    def __post_init__(self) -> None:
        """Normalise membership and timestamps after initialization."""
        if not self.code:
            raise ValueError("Group code is required")
        self.members = list(dict.fromkeys(self.members))
        self.member_count = len(self.members)
        if self.last_alarm_at.tzinfo is None:
            self.last_alarm_at = self.last_alarm_at.replace(tzinfo=timezone.utc)

    def has_member(self, user_id: str) -> bool:
        return user_id in self.members

    def add_member(self, user_id: str) -> None:
        if user_id not in self.members:
            self.members.append(user_id)
        self.member_count = len(self.members)

    def remove_member(self, user_id: str) -> None:
        if user_id in self.members:
            self.members.remove(user_id)
        self.member_count = len(self.members)

    @property
    def is_empty(self) -> bool:
        return self.member_count == 0
