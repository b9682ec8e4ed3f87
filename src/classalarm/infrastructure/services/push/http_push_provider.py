"""Push provider backed by an HTTP push gateway.

Posts ``{"tokens": [...], "data": {...}}`` to the configured gateway,
which owns the APNs/FCM connections.
"""

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from classalarm.core.logging import get_logger
from classalarm.infrastructure.services.push.push_provider import PushDeliveryError, PushProvider

logger = get_logger(__name__)


class HttpPushSettings(BaseModel):
    """Configuration settings for the HTTP push provider."""

    model_config = ConfigDict(from_attributes=True)

    gateway_url: str
    api_key: str | None = None
    timeout_seconds: float = 10.0


class HttpPushProvider(PushProvider):
    """Sends pushes through an HTTP gateway using httpx."""

    def __init__(
        self,
        settings: HttpPushSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP push provider.

        Args:
            settings: Gateway configuration.
            transport: Optional httpx transport, used by tests.
        """
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Content-Type": "application/json"}
        if self.settings.api_key:
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return httpx.AsyncClient(
            headers=headers,
            timeout=self.settings.timeout_seconds,
            transport=self._transport,
        )

    async def send(self, device_tokens: list[str], payload: dict[str, Any]) -> int:
        """Send the payload to all tokens in one gateway request.

        Raises:
            PushDeliveryError: On timeout, transport error or non-2xx status.
        """
        if not device_tokens:
            return 0

        body = {"tokens": device_tokens, "data": payload}
        try:
            async with self._client() as client:
                response = await client.post(self.settings.gateway_url, json=body)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise PushDeliveryError("Push gateway timed out") from e
        except httpx.HTTPStatusError as e:
            raise PushDeliveryError(
                f"Push gateway returned status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise PushDeliveryError(f"Push gateway request failed: {e}") from e

        logger.info("Push sent via gateway", device_count=len(device_tokens))
        return len(device_tokens)

    async def test_connection(self) -> tuple[bool, str | None]:
        try:
            async with self._client() as client:
                response = await client.head(self.settings.gateway_url)
            if response.status_code >= 500:
                return False, f"Gateway returned status {response.status_code}"
            return True, None
        except httpx.HTTPError as e:
            return False, str(e)
