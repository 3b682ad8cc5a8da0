"""Delivery executor.

Walks a distribution map target by target:

1. Stop if the caller signalled shutdown (remaining targets are skipped)
2. Check the rate limiter for the channel type
3. Hand the subscription batch to the channel transport
4. Record failures per subscription, track successes in the metrics sink

A failing target never prevents the next one from being attempted, and a
successful delivery is not retried within the same run.
"""

import threading
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Union

from infrastructure.clock import Clock, system_clock_ms
from infrastructure.logging import get_module_logger
from infrastructure.notifications.channels.base import ChannelTransport
from infrastructure.notifications.failure_log import FailureLog
from infrastructure.notifications.metrics import MetricsSink
from infrastructure.notifications.models import (
    ChannelType,
    DeliveryReport,
    DistributionMap,
    FailureLogEntry,
    Subscription,
)
from infrastructure.operations import OperationResult
from infrastructure.ratelimit import RateLimiter
from integrations.webhook_bot import extract_webhook_key

logger = get_module_logger()

RATE_LIMITED_ERROR = "rate limited"


def _target_label(channel_type: ChannelType, target: str) -> str:
    # Webhook URLs carry their credential in the query string
    if channel_type is ChannelType.WECHATBOT:
        return f"webhook:{extract_webhook_key(target) or '?'}"
    return target


class DeliveryExecutor:
    """Delivers distribution maps with per-target failure isolation.

    Attributes:
        rate_limiter: Limiter consulted before every target
        failure_log: Durable log receiving one entry per failed subscription
        metrics: Optional sink told about each successful delivery
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        failure_log: FailureLog,
        metrics: Optional[MetricsSink] = None,
        clock: Optional[Clock] = None,
    ):
        self.rate_limiter = rate_limiter
        self.failure_log = failure_log
        self.metrics = metrics
        self._clock = clock or system_clock_ms

    def deliver(
        self,
        distribution_map: DistributionMap,
        channel_type: Union[ChannelType, str],
        transport: ChannelTransport,
        identity: Optional[str] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> DeliveryReport:
        """Deliver every target of one channel type's distribution map.

        Args:
            distribution_map: Target to subscriptions, as built by the router
            channel_type: Channel type, also used as the rate limit type
            transport: Transport performing the actual sends
            identity: Rate limit identity; each target is its own identity
                when omitted
            stop_event: Once set, targets not yet started are skipped

        Returns:
            DeliveryReport with per-target counters and the failure entries
        """
        channel_type = ChannelType(channel_type)
        report = DeliveryReport(channel=channel_type.value, total=len(distribution_map))

        for target, subscriptions in distribution_map.items():
            label = _target_label(channel_type, target)

            if stop_event is not None and stop_event.is_set():
                report.skipped += 1
                logger.info(
                    "delivery_target_skipped", channel=channel_type.value, target=label
                )
                continue

            limit = self.rate_limiter.check(identity or target, channel_type.value)
            if not limit.allowed:
                report.rate_limited += 1
                logger.warning(
                    "delivery_target_rate_limited",
                    channel=channel_type.value,
                    target=label,
                    reset_at=limit.reset_at,
                )
                self._record_failures(
                    report, channel_type, target, subscriptions, RATE_LIMITED_ERROR
                )
                continue

            report.attempted += 1
            result = self._send(transport, channel_type, target, label, subscriptions)

            if result.is_success:
                report.succeeded += 1
                logger.info(
                    "delivery_target_succeeded",
                    channel=channel_type.value,
                    target=label,
                    subscriptions=len(subscriptions),
                )
                self._track(channel_type, True)
            else:
                report.failed += 1
                logger.warning(
                    "delivery_target_failed",
                    channel=channel_type.value,
                    target=label,
                    status=result.status.value,
                    error_code=result.error_code,
                    error=result.message,
                )
                self._record_failures(
                    report, channel_type, target, subscriptions, result.message
                )
                self._track(channel_type, False)

        logger.info(
            "delivery_completed",
            channel=report.channel,
            total=report.total,
            succeeded=report.succeeded,
            failed=report.failed,
            rate_limited=report.rate_limited,
            skipped=report.skipped,
        )
        return report

    def _send(
        self,
        transport: ChannelTransport,
        channel_type: ChannelType,
        target: str,
        label: str,
        subscriptions: Sequence[Subscription],
    ) -> OperationResult:
        try:
            return transport.send(target, subscriptions)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "delivery_transport_error",
                channel=channel_type.value,
                target=label,
                error=str(e),
                exc_info=True,
            )
            return OperationResult.transient_error(
                f"Transport error: {e}", error_code="TRANSPORT_EXCEPTION"
            )

    def _record_failures(
        self,
        report: DeliveryReport,
        channel_type: ChannelType,
        target: str,
        subscriptions: Sequence[Subscription],
        error: str,
    ) -> None:
        timestamp = datetime.fromtimestamp(self._clock() / 1000, tz=timezone.utc)
        entries: List[FailureLogEntry] = [
            FailureLogEntry(
                timestamp=timestamp,
                channel=channel_type.value,
                target=target,
                subscription_id=subscription.id,
                error=error,
            )
            for subscription in subscriptions
        ]
        for entry in entries:
            self.failure_log.record(entry)
        report.failures.extend(entries)

    def _track(self, channel_type: ChannelType, success: bool) -> None:
        if self.metrics is None:
            return
        try:
            self.metrics.track_notification(channel_type.value, success)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "metrics_sink_failed", channel=channel_type.value, error=str(e)
            )
