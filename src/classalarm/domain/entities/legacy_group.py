"""Pre-migration group record shape.

Only the legacy migrator reads this shape. Older records may lack the
cached count and the alarm timestamp entirely.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class LegacyGroupRecord:
    """Group record as stored by the original schema.

    Attributes:
        object_id: Store key of the legacy record.
        class_code: The six-character code under its old field name.
        members: Member user ids.
        member_count: Cached count, missing on the oldest records.
        last_alarm_time: Last broadcast time, missing on the oldest records.
    """

    object_id: str
    class_code: str
    members: list[str] = field(default_factory=list)
    member_count: int | None = None
    last_alarm_time: datetime | None = None
