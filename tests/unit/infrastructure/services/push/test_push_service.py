"""Unit tests for push provider selection."""

import pytest

from classalarm.core.config import Settings
from classalarm.infrastructure.services.push import HttpPushProvider, LogPushProvider
from classalarm.infrastructure.services.push_service import get_push_provider


def test_log_provider_by_default():
    assert isinstance(get_push_provider(Settings()), LogPushProvider)


def test_http_provider():
    settings = Settings(push_provider="http", push_gateway_url="https://push.example.com/send")

    provider = get_push_provider(settings)

    assert isinstance(provider, HttpPushProvider)
    assert provider.settings.gateway_url == "https://push.example.com/send"


def test_http_provider_requires_gateway():
    with pytest.raises(ValueError, match="push_gateway_url"):
        get_push_provider(Settings(push_provider="http"))


@pytest.mark.asyncio
async def test_log_provider_records_deliveries():
    provider = LogPushProvider()

    count = await provider.send(["t1"], {"alert": "hi"})

    assert count == 1
    assert provider.sent == [(["t1"], {"alert": "hi"})]
