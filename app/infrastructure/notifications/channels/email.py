"""Email transport using the Resend API."""

from datetime import datetime
from typing import Callable, Optional, Sequence

from infrastructure.notifications.config import EmailConfig
from infrastructure.notifications.channels.base import ChannelTransport
from infrastructure.notifications.formatting import (
    build_reminder_message,
    build_reminder_subject,
)
from infrastructure.notifications.models import ChannelType, Subscription
from infrastructure.operations import OperationResult
from integrations.resend import send_email


class EmailTransport(ChannelTransport):
    """Sends reminders as emails, one per recipient address."""

    def __init__(
        self,
        config: EmailConfig,
        api_url: str,
        timeout: int = 10,
        tz_name: str = "UTC",
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.api_url = api_url
        self.timeout = timeout
        self.tz_name = tz_name
        self._now = now

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType.EMAIL

    def send(
        self, target: str, subscriptions: Sequence[Subscription]
    ) -> OperationResult:
        now = self._now() if self._now else None
        text = build_reminder_message(subscriptions, now=now, tz_name=self.tz_name)
        html = "<br>".join(text.splitlines())
        return send_email(
            api_url=self.api_url,
            api_key=self.config.api_key,
            sender=self.config.sender,
            recipient=target,
            subject=build_reminder_subject(subscriptions),
            text=text,
            html=html,
            timeout=self.timeout,
        )

    def health_check(self) -> OperationResult:
        if not self.config.api_key:
            return OperationResult.permanent_error(
                "Resend API key is not configured", error_code="MISSING_API_KEY"
            )
        if not self.config.sender:
            return OperationResult.permanent_error(
                "Email sender address is not configured", error_code="MISSING_SENDER"
            )
        return OperationResult.success(
            data={"sender": self.config.sender},
            message="Email transport configured",
        )
