"""Subscription reminder notification pipeline.

Fans due subscriptions out to channel targets, delivers them under rate
limits, and keeps a bounded log of failed deliveries:

- Channel router: override-or-broadcast routing per channel type
- Delivery executor: per-target failure isolation
- Failure log: FIFO-capped record in the durable store
- Transports: webhook bot and Resend email

Usage:
    from infrastructure.notifications import (
        ChannelType,
        Subscription,
        distribute,
    )

    subscriptions = [Subscription.model_validate(raw) for raw in due]
    distribution = distribute(ChannelType.EMAIL, subscriptions, config)

    # Or run every enabled channel at once
    report = notification_service.run(subscriptions)
    logger.info("reminders_sent", succeeded=report.succeeded)
"""

# Models
from infrastructure.notifications.models import (
    ChannelType,
    DefaultTargets,
    DeliveryReport,
    DistributionMap,
    ExplicitTargets,
    FailureLogEntry,
    NotificationRunReport,
    Subscription,
    Targets,
    split_targets,
)

# Configuration
from infrastructure.notifications.config import (
    ChannelConfigSource,
    ChannelConfiguration,
    EmailConfig,
    WebhookBotConfig,
)

# Routing and delivery
from infrastructure.notifications.router import (
    distribute,
    distribute_email,
    distribute_webhook_bot,
    select_targets,
)
from infrastructure.notifications.delivery import DeliveryExecutor
from infrastructure.notifications.failure_log import FailureLog
from infrastructure.notifications.metrics import LoggingMetricsSink, MetricsSink
from infrastructure.notifications.exceptions import NotificationError, TransportError

# Channel transports
from infrastructure.notifications.channels import (
    ChannelTransport,
    EmailTransport,
    WebhookBotTransport,
    create_transport,
)

# Service
from infrastructure.notifications.service import NotificationService

__all__ = [
    # Models
    "ChannelType",
    "DefaultTargets",
    "DeliveryReport",
    "DistributionMap",
    "ExplicitTargets",
    "FailureLogEntry",
    "NotificationRunReport",
    "Subscription",
    "Targets",
    "split_targets",
    # Configuration
    "ChannelConfigSource",
    "ChannelConfiguration",
    "EmailConfig",
    "WebhookBotConfig",
    # Routing and delivery
    "distribute",
    "distribute_email",
    "distribute_webhook_bot",
    "select_targets",
    "DeliveryExecutor",
    "FailureLog",
    "LoggingMetricsSink",
    "MetricsSink",
    "NotificationError",
    "TransportError",
    # Channel transports
    "ChannelTransport",
    "EmailTransport",
    "WebhookBotTransport",
    "create_transport",
    # Service
    "NotificationService",
]
