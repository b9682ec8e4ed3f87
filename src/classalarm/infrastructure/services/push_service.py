"""Selection of the configured push provider."""

from classalarm.core.config import Settings, get_settings
from classalarm.core.logging import get_logger
from classalarm.infrastructure.services.push import (
    HttpPushProvider,
    HttpPushSettings,
    LogPushProvider,
    PushProvider,
)

logger = get_logger(__name__)


def get_push_provider(settings: Settings | None = None) -> PushProvider:
    """Build the push provider named by ``push_provider``.

    Raises:
        ValueError: If the HTTP provider is selected without a gateway URL.
    """
    settings = settings or get_settings()

    if settings.push_provider == "http":
        if not settings.push_gateway_url:
            raise ValueError("push_gateway_url is required when push_provider is 'http'")
        return HttpPushProvider(
            HttpPushSettings(
                gateway_url=settings.push_gateway_url,
                api_key=settings.push_api_key,
                timeout_seconds=settings.push_timeout_seconds,
            )
        )

    if settings.is_production:
        logger.warning("Log push provider selected in production, alarms will not be delivered")
    return LogPushProvider()
