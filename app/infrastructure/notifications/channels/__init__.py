"""Channel transports."""

from infrastructure.notifications.channels.base import ChannelTransport
from infrastructure.notifications.channels.email import EmailTransport
from infrastructure.notifications.channels.factory import create_transport
from infrastructure.notifications.channels.webhook_bot import WebhookBotTransport

__all__ = [
    "ChannelTransport",
    "EmailTransport",
    "WebhookBotTransport",
    "create_transport",
]
