"""Unit tests for channel configuration parsing and loading.

Tests cover:
- Splitting delimited strings at the configuration boundary
- Subscription override normalisation
- ChannelConfigSource defaults, merging, caching and fallbacks
"""

import json

import pytest
from unittest.mock import MagicMock

from infrastructure.configuration.features import NotificationSettings
from infrastructure.configuration.integrations import ResendSettings
from infrastructure.configuration.settings import Settings
from infrastructure.notifications import (
    ChannelConfigSource,
    ChannelConfiguration,
    ChannelType,
    Subscription,
    split_targets,
)
from infrastructure.storage.exceptions import StorageUnavailableError

KEY1_URL = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=key1"
KEY2_URL = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=key2"


@pytest.fixture
def settings():
    return Settings(
        notifications=NotificationSettings(
            ENABLED_NOTIFIERS="email",
            WECHATBOT_WEBHOOK="",
            WECHATBOT_MSG_TYPE="text",
            EMAIL_TO="ops@test.com",
            EMAIL_FROM="reminders@test.com",
            NOTIFICATION_CONFIG_KEY="config",
            CONFIG_CACHE_TTL_MS=60000,
        ),
        resend=ResendSettings(RESEND_API_KEY="env-key"),
    )


@pytest.fixture
def source_factory(memory_store, settings, clock):
    def _factory(store=None):
        return ChannelConfigSource(
            store=store or memory_store, settings=settings, clock=clock
        )

    return _factory


@pytest.mark.unit
class TestSplitTargets:
    def test_splits_trims_and_drops_empty(self):
        assert split_targets(" a@x.com | |b@x.com|") == ["a@x.com", "b@x.com"]

    def test_accepts_lists(self):
        assert split_targets(["a", " b|c ", 3]) == ["a", "b", "c"]

    @pytest.mark.parametrize("value", [None, 42, {"a": 1}, ""])
    def test_other_values_are_empty(self, value):
        assert split_targets(value) == []


@pytest.mark.unit
class TestSubscription:
    def test_parses_stored_shape(self):
        subscription = Subscription.model_validate(
            {
                "id": 5,
                "name": "Mixed Sub",
                "expiryDate": "2025-01-01T00:00:00Z",
                "isActive": True,
                "autoRenew": False,
                "wechatBotKeys": "key1| key2",
                "emailAddresses": "",
                "price": 9.99,
            }
        )

        assert subscription.id == "5"
        assert subscription.wechat_bot_keys == ["key1", "key2"]
        assert subscription.email_addresses == []
        assert subscription.auto_renew is False
        assert subscription.expiry_date.year == 2025

    def test_overrides_default_to_empty(self):
        subscription = Subscription(id="1", name="Plain")

        assert subscription.wechat_bot_keys == []
        assert subscription.email_addresses == []


@pytest.mark.unit
class TestChannelConfiguration:
    def test_parses_camel_case_document(self):
        config = ChannelConfiguration.model_validate(
            {
                "enabledNotifiers": ["WeChatBot", "email", "email"],
                "wechatBot": {"webhook": f"{KEY1_URL}|{KEY2_URL}", "msgType": "markdown"},
                "email": {"toEmail": "a@x.com|b@x.com", "fromEmail": "from@x.com"},
            }
        )

        assert config.enabled_notifiers == ["wechatbot", "email"]
        assert config.wechat_bot.webhooks == [KEY1_URL, KEY2_URL]
        assert config.wechat_bot.msg_type == "markdown"
        assert config.global_targets(ChannelType.EMAIL) == ["a@x.com", "b@x.com"]
        assert config.is_enabled(ChannelType.WECHATBOT) is True

    def test_enabled_notifiers_as_delimited_string(self):
        config = ChannelConfiguration.model_validate({"enabledNotifiers": "email|bark"})

        assert config.enabled_notifiers == ["email", "bark"]

    def test_unknown_msg_type_is_text(self):
        config = ChannelConfiguration.model_validate(
            {"wechatBot": {"msgType": "card"}}
        )

        assert config.wechat_bot.msg_type == "text"

    def test_empty_document(self):
        config = ChannelConfiguration.model_validate({})

        assert config.enabled_notifiers == []
        assert config.global_targets(ChannelType.WECHATBOT) == []


@pytest.mark.unit
class TestChannelConfigSource:
    """Tests for loading the stored configuration document."""

    def test_defaults_when_document_missing(self, source_factory):
        config = source_factory().load()

        assert config.enabled_notifiers == ["email"]
        assert config.email.recipients == ["ops@test.com"]
        assert config.email.sender == "reminders@test.com"
        assert config.email.api_key == "env-key"

    def test_check_fails_without_stored_document(self, source_factory):
        source = source_factory()

        assert source.check() is False
        assert source.load().enabled_notifiers == ["email"]

    def test_check_passes_with_valid_document(self, source_factory, memory_store):
        memory_store.put("config", json.dumps({"enabledNotifiers": ["email"]}))

        assert source_factory().check() is True

    def test_document_merged_over_defaults(self, source_factory, memory_store):
        memory_store.put(
            "config",
            json.dumps(
                {
                    "enabledNotifiers": ["wechatbot", "email"],
                    "wechatBot": {"webhook": KEY1_URL},
                    "email": {"toEmail": "a@x.com|b@x.com"},
                }
            ),
        )

        config = source_factory().load()

        assert config.enabled_notifiers == ["wechatbot", "email"]
        assert config.wechat_bot.webhooks == [KEY1_URL]
        assert config.email.recipients == ["a@x.com", "b@x.com"]
        assert config.email.sender == "reminders@test.com"
        assert config.email.api_key == "env-key"

    def test_malformed_document_uses_defaults(self, source_factory, memory_store):
        memory_store.put("config", "{not json")

        source = source_factory()

        assert source.load().email.recipients == ["ops@test.com"]
        assert source.check() is False

    def test_non_object_document_uses_defaults(self, source_factory, memory_store):
        memory_store.put("config", "[1, 2]")

        assert source_factory().load().enabled_notifiers == ["email"]

    def test_unreachable_store_uses_defaults(self, source_factory):
        store = MagicMock()
        store.get.side_effect = StorageUnavailableError("down", operation="get")

        source = source_factory(store=store)

        assert source.load().enabled_notifiers == ["email"]
        assert source.check() is False

    def test_loaded_configuration_is_cached(self, source_factory, memory_store):
        memory_store.put("config", json.dumps({"enabledNotifiers": ["wechatbot"]}))
        source = source_factory()
        source.load()

        memory_store.put("config", json.dumps({"enabledNotifiers": ["email"]}))

        assert source.load().enabled_notifiers == ["wechatbot"]

    def test_cache_expires(self, source_factory, memory_store, clock):
        memory_store.put("config", json.dumps({"enabledNotifiers": ["wechatbot"]}))
        source = source_factory()
        source.load()

        memory_store.put("config", json.dumps({"enabledNotifiers": ["email"]}))
        clock.advance(60_001)

        assert source.load().enabled_notifiers == ["email"]

    def test_invalidate_drops_cached_copy(self, source_factory, memory_store):
        memory_store.put("config", json.dumps({"enabledNotifiers": ["wechatbot"]}))
        source = source_factory()
        source.load()

        memory_store.put("config", json.dumps({"enabledNotifiers": ["email"]}))
        source.invalidate()

        assert source.load().enabled_notifiers == ["email"]

    def test_failed_read_is_not_cached(self, source_factory, memory_store):
        memory_store.put("config", "{not json")
        source = source_factory()
        source.load()

        memory_store.put("config", json.dumps({"enabledNotifiers": ["wechatbot"]}))

        assert source.load().enabled_notifiers == ["wechatbot"]
