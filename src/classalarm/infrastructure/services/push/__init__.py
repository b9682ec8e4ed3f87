"""Push delivery providers."""

from classalarm.infrastructure.services.push.http_push_provider import (
    HttpPushProvider,
    HttpPushSettings,
)
from classalarm.infrastructure.services.push.log_push_provider import LogPushProvider
from classalarm.infrastructure.services.push.push_provider import (
    PushDeliveryError,
    PushProvider,
)

__all__ = [
    "HttpPushProvider",
    "HttpPushSettings",
    "LogPushProvider",
    "PushDeliveryError",
    "PushProvider",
]
