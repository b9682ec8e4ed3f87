"""Alarm broadcast to the other members of a group.

Order of a broadcast: resolve the group, check membership, pass the
cooldown gate, persist the new alarm time, then deliver. The alarm time is
committed before delivery and is never rolled back, so a slow or failed
delivery still consumes the window.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from classalarm.core.exceptions import DependencyFailureError, ForbiddenError
from classalarm.core.logging import get_logger
from classalarm.domain.entities import Group
from classalarm.domain.services.alert_composer import AlertPayload, compose_alert
from classalarm.domain.services.cooldown_gate import CooldownGate
from classalarm.domain.services.group_directory import GroupDirectory
from classalarm.domain.stores import GroupStore, InstallationStore
from classalarm.infrastructure.services.push import PushDeliveryError, PushProvider

logger = get_logger(__name__)


@dataclass(frozen=True)
class BroadcastResult:
    """Outcome of an accepted broadcast."""

    count: int
    member_count: int


class BroadcastDispatcher:
    """Composes alerts, resolves recipients and hands them to the push provider."""

    def __init__(
        self,
        directory: GroupDirectory,
        group_store: GroupStore,
        installation_store: InstallationStore,
        push_provider: PushProvider,
        cooldown_gate: CooldownGate | None = None,
    ) -> None:
        self.directory = directory
        self.group_store = group_store
        self.installation_store = installation_store
        self.push_provider = push_provider
        self.cooldown_gate = cooldown_gate or CooldownGate()

    @staticmethod
    def compose_alert(alarm_type: Any = None) -> AlertPayload:
        return compose_alert(alarm_type)

    @staticmethod
    def resolve_recipients(group: Group, sender_id: str) -> list[str]:
        """Every member except the sender."""
        return [member for member in group.members if member != sender_id]

    async def dispatch(self, recipients: list[str], payload: AlertPayload) -> int:
        """Deliver ``payload`` to the installations of ``recipients``.

        Returns:
            Number of recipient accounts addressed.

        Raises:
            DependencyFailureError: If the push provider fails.
        """
        if not recipients:
            return 0

        device_tokens = await self.installation_store.list_tokens_for_users(recipients)
        if not device_tokens:
            logger.info("Recipients have no registered installations", recipient_count=len(recipients))
            return len(recipients)

        try:
            devices = await self.push_provider.send(device_tokens, payload.to_dict())
        except (PushDeliveryError, TimeoutError) as e:
            logger.error(
                "Push delivery failed",
                recipient_count=len(recipients),
                device_count=len(device_tokens),
                error=str(e),
            )
            raise DependencyFailureError("Push delivery failed, please try again later.") from e

        logger.info("Alarm pushed", recipient_count=len(recipients), device_count=devices)
        return len(recipients)

    async def send_alarm(
        self,
        code: str,
        alarm_type: Any,
        sender_id: str,
        now: datetime,
    ) -> BroadcastResult:
        """Broadcast an alarm from ``sender_id`` to the rest of the group.

        Raises:
            GroupNotFoundError: If the group does not exist.
            ForbiddenError: If the sender is not a member.
            RateLimitedError: If the group is cooling down.
            DependencyFailureError: If delivery fails (the cooldown stays consumed).
        """
        group = await self.directory.require(code)
        if not group.has_member(sender_id):
            raise ForbiddenError()

        self.cooldown_gate.try_accept(group, now)
        group = await self.group_store.save(group)

        payload = self.compose_alert(alarm_type)
        recipients = self.resolve_recipients(group, sender_id)
        if not recipients:
            logger.info("No other members to notify", group_code=code, user_id=sender_id)
            return BroadcastResult(count=0, member_count=group.member_count)

        count = await self.dispatch(recipients, payload)
        return BroadcastResult(count=count, member_count=group.member_count)
