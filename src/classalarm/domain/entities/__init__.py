"""Domain entities for ClassAlarm.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from classalarm.domain.entities.device_account import (
    CallerContext,
    DeviceAccount,
    Installation,
)
from classalarm.domain.entities.group import CURRENT_SCHEMA_VERSION, EPOCH, Group
from classalarm.domain.entities.legacy_group import LegacyGroupRecord

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "CallerContext",
    "DeviceAccount",
    "EPOCH",
    "Group",
    "Installation",
    "LegacyGroupRecord",
]
