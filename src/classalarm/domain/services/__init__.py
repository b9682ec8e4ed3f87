"""Domain services for ClassAlarm.

Services contain the group, cooldown, broadcast and identity rules.
"""

from classalarm.domain.services.alert_composer import AlertPayload, compose_alert
from classalarm.domain.services.broadcast_dispatcher import BroadcastDispatcher, BroadcastResult
from classalarm.domain.services.cooldown_gate import CooldownGate
from classalarm.domain.services.device_credentials import (
    DeviceCredentialDeriver,
    DeviceCredentials,
)
from classalarm.domain.services.device_identity_service import (
    DeviceIdentityService,
    InstallationService,
    SessionGrant,
)
from classalarm.domain.services.group_directory import GroupDirectory, LegacyMigrator
from classalarm.domain.services.input_validator import InputValidator, default_input_validator
from classalarm.domain.services.membership_service import (
    GroupInfo,
    LeaveOutcome,
    MembershipManager,
)

__all__ = [
    "AlertPayload",
    "BroadcastDispatcher",
    "BroadcastResult",
    "CooldownGate",
    "DeviceCredentialDeriver",
    "DeviceCredentials",
    "DeviceIdentityService",
    "GroupDirectory",
    "GroupInfo",
    "InputValidator",
    "InstallationService",
    "LeaveOutcome",
    "LegacyMigrator",
    "MembershipManager",
    "SessionGrant",
    "compose_alert",
    "default_input_validator",
]
