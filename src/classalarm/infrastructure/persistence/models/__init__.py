"""SQLAlchemy ORM models."""

from sqlalchemy import Table

from classalarm.infrastructure.persistence.models.device_account import DeviceAccountModel
from classalarm.infrastructure.persistence.models.group import GroupModel
from classalarm.infrastructure.persistence.models.installation import InstallationModel
from classalarm.infrastructure.persistence.models.legacy_group import (
    LEGACY_GROUP_TABLE,
    LegacyGroupModel,
)


def current_tables() -> list[Table]:
    """Tables of the current schema, i.e. everything except the legacy one."""
    return [
        DeviceAccountModel.__table__,
        GroupModel.__table__,
        InstallationModel.__table__,
    ]


__all__ = [
    "DeviceAccountModel",
    "GroupModel",
    "InstallationModel",
    "LEGACY_GROUP_TABLE",
    "LegacyGroupModel",
    "current_tables",
]
