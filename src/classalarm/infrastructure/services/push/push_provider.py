"""Abstract base class for push providers.

Defines the interface that all push-delivery providers must implement.
"""

from abc import ABC, abstractmethod
from typing import Any


class PushDeliveryError(Exception):
    """Raised when the push transport rejects or fails a delivery."""

    pass


class PushProvider(ABC):
    """Abstract base class for push providers.

    Providers receive device tokens that were already resolved from the
    recipients' installations, plus the alert payload.
    """

    @abstractmethod
    async def send(self, device_tokens: list[str], payload: dict[str, Any]) -> int:
        """Deliver ``payload`` to every token.

        Args:
            device_tokens: Installation device tokens to address.
            payload: Alert payload (alert, sound, badge, ...).

        Returns:
            Number of devices the delivery was attempted for.

        Raises:
            PushDeliveryError: If the transport fails.
        """
        pass

    @abstractmethod
    async def test_connection(self) -> tuple[bool, str | None]:
        """Test the push provider connection.

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        pass
