"""Unit tests for NotificationService.

Tests cover:
- Reminder runs across every enabled channel in configured order
- Channels without a transport or without targets
- Cancellation of a run in progress
- Health check status aggregation
"""

import threading

import pytest
from unittest.mock import MagicMock

from infrastructure.configuration.settings import Settings
from infrastructure.notifications import (
    ChannelConfigSource,
    ChannelType,
    NotificationService,
)
from infrastructure.operations import OperationResult
from infrastructure.storage.exceptions import StorageUnavailableError


@pytest.fixture
def config_source(channel_config):
    source = MagicMock(spec=ChannelConfigSource)
    source.load.return_value = channel_config
    source.check.return_value = True
    return source


@pytest.fixture
def transports(transport_factory):
    return {
        "wechatbot": transport_factory(ChannelType.WECHATBOT),
        "email": transport_factory(ChannelType.EMAIL),
    }


@pytest.fixture
def service_factory(memory_store, rate_limiter, failure_log, config_source, transports):
    def _factory(store=None, transports=transports):
        return NotificationService(
            settings=Settings(),
            store=store or memory_store,
            rate_limiter=rate_limiter,
            failure_log=failure_log,
            config_source=config_source,
            metrics=MagicMock(),
            transports=transports,
        )

    return _factory


@pytest.mark.unit
class TestNotificationServiceRun:
    """Tests for reminder runs."""

    def test_delivers_every_enabled_channel(
        self, service_factory, mixed_subscriptions, transports
    ):
        report = service_factory().run(mixed_subscriptions)

        assert [r.channel for r in report.reports] == ["wechatbot", "email"]
        assert report.subscriptions == 4
        assert report.for_channel("wechatbot").total == 2
        assert report.for_channel("email").total == 4
        assert report.succeeded == 6
        assert transports["wechatbot"].send.call_count == 2
        assert transports["email"].send.call_count == 4

    def test_configuration_loaded_from_source(
        self, service_factory, mixed_subscriptions, config_source
    ):
        service_factory().run(mixed_subscriptions)

        config_source.load.assert_called_once()

    def test_explicit_configuration_skips_source(
        self,
        service_factory,
        mixed_subscriptions,
        config_source,
        channel_config_factory,
    ):
        report = service_factory().run(
            mixed_subscriptions, config=channel_config_factory(enabled=["email"])
        )

        config_source.load.assert_not_called()
        assert [r.channel for r in report.reports] == ["email"]

    def test_no_due_subscriptions(self, service_factory, transports, config_source):
        report = service_factory().run([])

        assert report.reports == []
        assert report.total == 0
        config_source.load.assert_not_called()
        transports["email"].send.assert_not_called()

    def test_unknown_notifier_skipped(
        self, service_factory, mixed_subscriptions, channel_config_factory, transports
    ):
        config = channel_config_factory(enabled=["bark", "email"])

        report = service_factory().run(mixed_subscriptions, config=config)

        assert [r.channel for r in report.reports] == ["email"]
        assert transports["email"].send.call_count == 4

    def test_channel_without_global_targets_sends_nothing(
        self, service_factory, mixed_subscriptions, channel_config_factory, transports
    ):
        config = channel_config_factory(to_email="")

        report = service_factory().run(mixed_subscriptions, config=config)

        assert report.for_channel("email").total == 0
        transports["email"].send.assert_not_called()
        assert report.for_channel("wechatbot").succeeded == 2

    def test_failure_on_one_channel_does_not_stop_the_next(
        self, service_factory, mixed_subscriptions, transports, failure_log
    ):
        transports["wechatbot"].send.return_value = OperationResult.transient_error(
            "timeout"
        )

        report = service_factory().run(mixed_subscriptions)

        assert report.for_channel("wechatbot").failed == 2
        assert report.for_channel("email").succeeded == 4
        assert len(failure_log.list(100)) == 6

    def test_stop_event_skips_remaining_targets(
        self, service_factory, mixed_subscriptions, transports
    ):
        stop_event = threading.Event()
        stop_event.set()

        report = service_factory().run(mixed_subscriptions, stop_event=stop_event)

        assert report.skipped == 6
        transports["wechatbot"].send.assert_not_called()
        transports["email"].send.assert_not_called()

    def test_transport_built_when_not_injected(
        self, service_factory, mixed_subscriptions, channel_config_factory
    ):
        config = channel_config_factory(enabled=["email"], api_key="")

        report = service_factory(transports={}).run(mixed_subscriptions, config=config)

        email = report.for_channel("email")
        assert email.attempted == 4
        assert email.failed == 4
        assert {f.error for f in email.failures} == {
            "Resend API key is not configured"
        }


@pytest.mark.unit
class TestNotificationServiceOperations:
    def test_list_and_clear_failures(
        self, service_factory, mixed_subscriptions, transports
    ):
        transports["email"].send.return_value = OperationResult.permanent_error(
            "rejected"
        )
        service = service_factory()
        service.run(mixed_subscriptions)

        assert len(service.list_failures(2)) == 2
        service.clear_failures()
        assert service.list_failures() == []

    def test_reset_rate_limit_delegates(self, service_factory):
        service = service_factory()
        service.rate_limiter = MagicMock()

        service.reset_rate_limit("10.0.0.1", "api")

        service.rate_limiter.reset.assert_called_once_with("10.0.0.1", "api")


@pytest.mark.unit
class TestNotificationServiceHealthCheck:
    def test_healthy(self, service_factory):
        health = service_factory().health_check()

        assert health["status"] == "healthy"
        assert health["checks"] == {"store": True, "config": True}
        assert health["channels"] == {"wechatbot": True, "email": True}

    def test_degraded_when_config_unreadable(self, service_factory, config_source):
        config_source.check.return_value = False

        assert service_factory().health_check()["status"] == "degraded"

    def test_unhealthy_when_nothing_reachable(self, service_factory, config_source):
        config_source.check.return_value = False
        store = MagicMock()
        store.health_check.side_effect = StorageUnavailableError("down")

        health = service_factory(store=store).health_check()

        assert health["status"] == "unhealthy"
        assert health["checks"]["store"] is False

    def test_channel_health_reported(self, service_factory, transports):
        transports["email"].health_check.return_value = (
            OperationResult.permanent_error("no key")
        )

        health = service_factory().health_check()

        assert health["channels"]["email"] is False
        assert health["status"] == "healthy"

    def test_degraded_when_config_document_missing(
        self, memory_store, rate_limiter, failure_log, transports
    ):
        settings = Settings()
        service = NotificationService(
            settings=settings,
            store=memory_store,
            rate_limiter=rate_limiter,
            failure_log=failure_log,
            config_source=ChannelConfigSource(store=memory_store, settings=settings),
            transports=transports,
        )

        health = service.health_check()

        assert health["status"] == "degraded"
        assert health["checks"] == {"store": True, "config": False}
