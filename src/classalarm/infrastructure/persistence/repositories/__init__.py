"""Store adapters backed by SQLAlchemy."""

from classalarm.infrastructure.persistence.repositories.device_account_repository import (
    DeviceAccountRepository,
)
from classalarm.infrastructure.persistence.repositories.group_repository import (
    GroupRepository,
    LegacyGroupRepository,
)
from classalarm.infrastructure.persistence.repositories.installation_repository import (
    InstallationRepository,
)

__all__ = [
    "DeviceAccountRepository",
    "GroupRepository",
    "InstallationRepository",
    "LegacyGroupRepository",
]
