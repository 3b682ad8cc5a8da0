"""Unit tests for the channel transport factory."""

import pytest

from infrastructure.configuration.features import NotificationSettings
from infrastructure.configuration.settings import Settings
from infrastructure.notifications import (
    ChannelType,
    EmailTransport,
    TransportError,
    WebhookBotTransport,
    create_transport,
)


@pytest.fixture
def settings():
    return Settings(
        notifications=NotificationSettings(
            NOTIFICATION_HTTP_TIMEOUT=3, NOTIFICATION_TIMEZONE="Asia/Shanghai"
        )
    )


@pytest.mark.unit
class TestCreateTransport:
    def test_webhook_bot(self, channel_config, settings):
        transport = create_transport(ChannelType.WECHATBOT, channel_config, settings)

        assert isinstance(transport, WebhookBotTransport)
        assert transport.config is channel_config.wechat_bot
        assert transport.timeout == 3
        assert transport.tz_name == "Asia/Shanghai"

    def test_email_from_string_value(self, channel_config, settings):
        transport = create_transport("email", channel_config, settings)

        assert isinstance(transport, EmailTransport)
        assert transport.api_url == settings.resend.RESEND_API_URL

    def test_unknown_channel_type(self, channel_config, settings):
        with pytest.raises(TransportError) as exc_info:
            create_transport("bark", channel_config, settings)

        assert exc_info.value.channel == "bark"
