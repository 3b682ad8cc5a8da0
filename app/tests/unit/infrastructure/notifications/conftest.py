"""Test fixtures for notification pipeline tests."""

import pytest
from typing import Optional
from unittest.mock import MagicMock

from infrastructure.configuration.infrastructure import FailureLogSettings
from infrastructure.notifications import (
    ChannelConfiguration,
    ChannelTransport,
    ChannelType,
    FailureLog,
    Subscription,
)
from infrastructure.operations import OperationResult
from infrastructure.ratelimit import RateLimiter, RateLimitRule

KEY1_URL = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=key1"
KEY2_URL = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=key2"


@pytest.fixture
def subscription_factory():
    """Factory for creating Subscription instances from the stored shape.

    Example:
        subscription = subscription_factory(id="2", wechatBotKeys="key1")
    """

    def _factory(
        id: str = "1",
        name: str = "Global Sub",
        expiryDate: str = "2025-01-01T00:00:00Z",
        wechatBotKeys: Optional[str] = None,
        emailAddresses: Optional[str] = None,
        **extra,
    ) -> Subscription:
        data = {
            "id": id,
            "name": name,
            "expiryDate": expiryDate,
            "isActive": True,
            "autoRenew": True,
            **extra,
        }
        if wechatBotKeys is not None:
            data["wechatBotKeys"] = wechatBotKeys
        if emailAddresses is not None:
            data["emailAddresses"] = emailAddresses
        return Subscription.model_validate(data)

    return _factory


@pytest.fixture
def mixed_subscriptions(subscription_factory):
    """Global, bot-pinned, email-pinned and mixed subscriptions."""
    return [
        subscription_factory(id="1", name="Global Sub"),
        subscription_factory(id="2", name="Bot1 Sub", wechatBotKeys="key1"),
        subscription_factory(
            id="3", name="Email1 Sub", emailAddresses="user1@test.com"
        ),
        subscription_factory(
            id="4",
            name="Mixed Sub",
            wechatBotKeys="key2",
            emailAddresses="user2@test.com",
        ),
    ]


@pytest.fixture
def channel_config_factory():
    """Factory for ChannelConfiguration from the stored camelCase document.

    Example:
        config = channel_config_factory(webhook="")
    """

    def _factory(
        enabled=("wechatbot", "email"),
        webhook: str = f"{KEY1_URL}|{KEY2_URL}",
        msg_type: str = "text",
        to_email: str = "global1@test.com|global2@test.com",
        from_email: str = "test@from.com",
        api_key: str = "test",
    ) -> ChannelConfiguration:
        return ChannelConfiguration.model_validate(
            {
                "enabledNotifiers": list(enabled),
                "wechatBot": {"webhook": webhook, "msgType": msg_type},
                "email": {
                    "resendApiKey": api_key,
                    "fromEmail": from_email,
                    "toEmail": to_email,
                },
            }
        )

    return _factory


@pytest.fixture
def channel_config(channel_config_factory):
    return channel_config_factory()


@pytest.fixture
def failure_log(memory_store):
    return FailureLog(memory_store, FailureLogSettings())


@pytest.fixture
def rate_limiter(memory_store, clock):
    return RateLimiter(
        store=memory_store,
        rules={
            "api": RateLimitRule(max_requests=100, window_ms=60000),
            "wechatbot": RateLimitRule(max_requests=20, window_ms=60000),
            "email": RateLimitRule(max_requests=20, window_ms=60000),
        },
        clock=clock,
    )


@pytest.fixture
def transport_factory():
    """Factory for mock transports.

    Example:
        transport = transport_factory(ChannelType.EMAIL, OperationResult.success())
    """

    def _factory(
        channel_type: ChannelType = ChannelType.WECHATBOT,
        result: Optional[OperationResult] = None,
    ) -> MagicMock:
        transport = MagicMock(spec=ChannelTransport)
        transport.channel_type = channel_type
        transport.send.return_value = result or OperationResult.success()
        transport.health_check.return_value = OperationResult.success()
        return transport

    return _factory
