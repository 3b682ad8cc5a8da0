"""Delivery metrics sinks."""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class MetricsSink(ABC):
    """Fire-and-forget delivery metrics.

    Implementations must not raise; the delivery executor still guards every
    call so a broken sink never aborts a run.
    """

    @abstractmethod
    def track_notification(self, channel: str, success: bool) -> None:
        pass


class LoggingMetricsSink(MetricsSink):
    """Emits metrics as structured ``metric_tracked`` log events.

    Example:
        sink = LoggingMetricsSink()
        sink.track_notification("email", True)
        # metric_tracked name=notification_sent value=1 tags={"channel": "email", "status": "success"}
    """

    def track(
        self, name: str, value: float, tags: Optional[Dict[str, str]] = None
    ) -> None:
        logger.info("metric_tracked", name=name, value=value, tags=tags or {})

    def track_notification(self, channel: str, success: bool) -> None:
        self.track(
            "notification_sent",
            1 if success else 0,
            {"channel": channel, "status": "success" if success else "fail"},
        )
