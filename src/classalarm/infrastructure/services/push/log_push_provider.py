"""Push provider that only logs deliveries.

Used in development and tests where no push gateway is available.
"""

from typing import Any

from classalarm.core.logging import get_logger
from classalarm.infrastructure.services.push.push_provider import PushProvider

logger = get_logger(__name__)


class LogPushProvider(PushProvider):
    """Writes each delivery to the log and remembers it."""

    def __init__(self) -> None:
        self.sent: list[tuple[list[str], dict[str, Any]]] = []

    async def send(self, device_tokens: list[str], payload: dict[str, Any]) -> int:
        self.sent.append((list(device_tokens), dict(payload)))
        logger.info(
            "Push delivery (log provider)",
            device_count=len(device_tokens),
            alert=payload.get("alert"),
        )
        return len(device_tokens)

    async def test_connection(self) -> tuple[bool, str | None]:
        return True, None
