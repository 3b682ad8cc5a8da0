"""Channel transport abstract base class.

All transport implementations (webhook bot, email) must implement this
interface.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from infrastructure.notifications.models import ChannelType, Subscription
from infrastructure.operations import OperationResult


class ChannelTransport(ABC):
    """Delivers one reminder to one target of a channel type.

    Transports report failures through the returned OperationResult rather
    than raising. Whatever they do raise is still isolated per target by the
    delivery executor.

    Example Implementation:
        class WebhookBotTransport(ChannelTransport):

            @property
            def channel_type(self) -> ChannelType:
                return ChannelType.WECHATBOT

            def send(self, target, subscriptions) -> OperationResult:
                content = build_reminder_message(subscriptions)
                return post_message(target, content)
    """

    @property
    @abstractmethod
    def channel_type(self) -> ChannelType:
        """Channel type served by this transport."""
        pass

    @abstractmethod
    def send(
        self, target: str, subscriptions: Sequence[Subscription]
    ) -> OperationResult:
        """Send one reminder covering ``subscriptions`` to ``target``.

        Args:
            target: Webhook URL or email address
            subscriptions: Subscriptions routed to this target

        Returns:
            OperationResult; anything but SUCCESS counts as a failed delivery
        """
        pass

    @abstractmethod
    def health_check(self) -> OperationResult:
        """Report whether the transport is configured to deliver.

        Returns:
            OperationResult indicating transport health
        """
        pass
