"""Channel transport factory."""

from typing import Union

from infrastructure.configuration.settings import Settings
from infrastructure.notifications.channels.base import ChannelTransport
from infrastructure.notifications.channels.email import EmailTransport
from infrastructure.notifications.channels.webhook_bot import WebhookBotTransport
from infrastructure.notifications.config import ChannelConfiguration
from infrastructure.notifications.exceptions import TransportError
from infrastructure.notifications.models import ChannelType


def create_transport(
    channel_type: Union[ChannelType, str],
    config: ChannelConfiguration,
    settings: Settings,
) -> ChannelTransport:
    """Build the transport of a channel type for one run.

    Raises:
        TransportError: When no transport exists for the channel type
    """
    try:
        channel_type = ChannelType(channel_type)
    except ValueError as e:
        raise TransportError(
            f"No transport for channel type '{channel_type}'",
            channel=str(channel_type),
        ) from e

    notifications = settings.notifications
    if channel_type is ChannelType.WECHATBOT:
        return WebhookBotTransport(
            config.wechat_bot,
            timeout=notifications.NOTIFICATION_HTTP_TIMEOUT,
            tz_name=notifications.NOTIFICATION_TIMEZONE,
        )
    return EmailTransport(
        config.email,
        api_url=settings.resend.RESEND_API_URL,
        timeout=notifications.NOTIFICATION_HTTP_TIMEOUT,
        tz_name=notifications.NOTIFICATION_TIMEZONE,
    )
