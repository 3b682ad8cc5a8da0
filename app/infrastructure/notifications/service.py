"""Notification service for dependency injection.

Provides a class-based interface to one reminder run: configuration
loading, routing, delivery and the failure log behind a single facade.
"""

import threading
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

from infrastructure.logging import (
    bind_request_context,
    get_correlation_id,
    get_module_logger,
)
from infrastructure.notifications.channels.base import ChannelTransport
from infrastructure.notifications.channels.factory import create_transport
from infrastructure.notifications.config import (
    ChannelConfigSource,
    ChannelConfiguration,
)
from infrastructure.notifications.delivery import DeliveryExecutor
from infrastructure.notifications.exceptions import TransportError
from infrastructure.notifications.failure_log import FailureLog
from infrastructure.notifications.metrics import LoggingMetricsSink, MetricsSink
from infrastructure.notifications.models import (
    ChannelType,
    FailureLogEntry,
    NotificationRunReport,
    Subscription,
)
from infrastructure.notifications.router import distribute
from infrastructure.ratelimit import RateLimiter
from infrastructure.storage.base import KeyValueStore
from infrastructure.storage.exceptions import StorageError

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


class NotificationService:
    """Class-based notification service.

    Runs reminders for already-filtered due subscriptions across every
    enabled channel type, in configured order.

    Usage:
        # Via dependency injection
        from infrastructure.services import NotificationServiceDep

        @router.get("/failures")
        def list_failures(service: NotificationServiceDep):
            return service.list_failures(20)

        # Direct instantiation
        service = NotificationService(
            settings=settings,
            store=store,
            rate_limiter=limiter,
            failure_log=failure_log,
            config_source=config_source,
        )
        report = service.run(due_subscriptions)
    """

    def __init__(
        self,
        settings: "Settings",
        store: KeyValueStore,
        rate_limiter: RateLimiter,
        failure_log: FailureLog,
        config_source: ChannelConfigSource,
        metrics: Optional[MetricsSink] = None,
        transports: Optional[Dict[str, ChannelTransport]] = None,
    ):
        """Initialize notification service.

        Args:
            settings: Settings instance (required, passed from provider).
            store: Durable key-value store.
            rate_limiter: Limiter consulted before every target.
            failure_log: Log receiving failed deliveries.
            config_source: Source of the channel configuration.
            metrics: Optional metrics sink, logs metrics by default.
            transports: Optional transports by channel type value. Channel
                types without one get a transport built from the run's
                configuration.
        """
        self._settings = settings
        self.store = store
        self.rate_limiter = rate_limiter
        self.failure_log = failure_log
        self.config_source = config_source
        self.transports = dict(transports or {})
        self.executor = DeliveryExecutor(
            rate_limiter=rate_limiter,
            failure_log=failure_log,
            metrics=metrics or LoggingMetricsSink(),
        )

    def _transport_for(
        self, channel: str, config: ChannelConfiguration
    ) -> ChannelTransport:
        transport = self.transports.get(channel)
        if transport is not None:
            return transport
        return create_transport(channel, config, self._settings)

    def run(
        self,
        subscriptions: Sequence[Subscription],
        config: Optional[ChannelConfiguration] = None,
        identity: Optional[str] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> NotificationRunReport:
        """Send reminders for ``subscriptions`` on every enabled channel.

        Args:
            subscriptions: Due subscriptions, already filtered by the caller
            config: Channel configuration, loaded from the source if omitted
            identity: Rate limit identity shared by all targets of the run
            stop_event: Once set, targets not yet started are skipped

        Returns:
            NotificationRunReport with one DeliveryReport per delivered channel
        """
        with bind_request_context(
            correlation_id=get_correlation_id(),
            identity=identity,
            operation="reminder_run",
        ):
            report = NotificationRunReport(
                correlation_id=get_correlation_id() or "",
                subscriptions=len(subscriptions),
            )
            if not subscriptions:
                logger.info("reminder_run_skipped", reason="no_due_subscriptions")
                return report

            config = config or self.config_source.load()
            logger.info(
                "reminder_run_started",
                subscriptions=len(subscriptions),
                channels=config.enabled_notifiers,
            )

            for channel in config.enabled_notifiers:
                try:
                    transport = self._transport_for(channel, config)
                    channel_type = ChannelType(channel)
                except (TransportError, ValueError) as e:
                    logger.warning(
                        "reminder_channel_skipped", channel=channel, error=str(e)
                    )
                    continue

                distribution = distribute(channel_type, subscriptions, config)
                if not distribution:
                    logger.info(
                        "reminder_channel_no_targets", channel=channel_type.value
                    )

                report.reports.append(
                    self.executor.deliver(
                        distribution,
                        channel_type,
                        transport,
                        identity=identity,
                        stop_event=stop_event,
                    )
                )

            logger.info(
                "reminder_run_completed",
                targets=report.total,
                succeeded=report.succeeded,
                failed=report.failed,
                rate_limited=report.rate_limited,
                skipped=report.skipped,
            )
            return report

    def list_failures(self, limit: Optional[int] = None) -> List[FailureLogEntry]:
        """Most recent delivery failures, newest first."""
        return self.failure_log.list(limit)

    def clear_failures(self) -> None:
        self.failure_log.clear()

    def reset_rate_limit(self, identity: str, limit_type: str) -> None:
        """Clear the current rate limit window of ``identity``."""
        self.rate_limiter.reset(identity, limit_type)

    def health_check(self) -> Dict[str, Any]:
        """Check the store and the channel configuration.

        Returns:
            Dict with ``status`` (healthy, degraded or unhealthy) and ``checks``
        """
        checks: Dict[str, bool] = {}

        try:
            checks["store"] = self.store.health_check()
        except StorageError as e:
            logger.error("health_check_store_failed", error=str(e))
            checks["store"] = False

        checks["config"] = self.config_source.check()

        config = self.config_source.load()
        channels: Dict[str, bool] = {}
        for channel in config.enabled_notifiers:
            try:
                transport = self._transport_for(channel, config)
            except TransportError:
                channels[channel] = False
                continue
            channels[channel] = transport.health_check().is_success

        passed = sum(1 for ok in checks.values() if ok)
        if passed == len(checks):
            status = "healthy"
        elif passed == 0:
            status = "unhealthy"
        else:
            status = "degraded"

        return {"status": status, "checks": checks, "channels": channels}
