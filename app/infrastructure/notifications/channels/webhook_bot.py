"""Webhook bot transport."""

from datetime import datetime
from typing import Callable, Optional, Sequence

from infrastructure.logging import get_module_logger
from infrastructure.notifications.config import WebhookBotConfig
from infrastructure.notifications.channels.base import ChannelTransport
from infrastructure.notifications.formatting import build_reminder_message
from infrastructure.notifications.models import ChannelType, Subscription
from infrastructure.operations import OperationResult
from integrations.webhook_bot import extract_webhook_key, post_message

logger = get_module_logger()


class WebhookBotTransport(ChannelTransport):
    """Posts reminders to group bot webhooks.

    The target is the full webhook URL selected by the router.
    """

    def __init__(
        self,
        config: WebhookBotConfig,
        timeout: int = 10,
        tz_name: str = "UTC",
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.timeout = timeout
        self.tz_name = tz_name
        self._now = now

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType.WECHATBOT

    def send(
        self, target: str, subscriptions: Sequence[Subscription]
    ) -> OperationResult:
        content = build_reminder_message(
            subscriptions,
            now=self._now() if self._now else None,
            tz_name=self.tz_name,
            markdown=self.config.msg_type == "markdown",
        )
        result = post_message(
            target, content, msg_type=self.config.msg_type, timeout=self.timeout
        )
        if result.is_success:
            logger.info(
                "webhook_bot_reminder_sent",
                webhook_key=extract_webhook_key(target),
                subscriptions=len(subscriptions),
            )
        return result

    def health_check(self) -> OperationResult:
        if not self.config.webhooks:
            return OperationResult.permanent_error(
                "No webhook URLs configured", error_code="NOT_CONFIGURED"
            )
        return OperationResult.success(
            data={"webhooks": len(self.config.webhooks)},
            message="Webhook bot transport configured",
        )
