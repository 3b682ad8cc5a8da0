"""Channel configuration.

The configuration document is stored in the key-value store in its original
camelCase shape and merged over the environment defaults:

    {
        "enabledNotifiers": ["wechatbot", "email"],
        "wechatBot": {"webhook": "https://...?key=key1|https://...?key=key2", "msgType": "text"},
        "email": {"resendApiKey": "...", "fromEmail": "...", "toEmail": "a@x.com|b@x.com"}
    }

Delimited strings are split into lists once, here, so routing never parses
strings.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from infrastructure.cache import TTLCache
from infrastructure.clock import Clock
from infrastructure.configuration.settings import Settings
from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import ChannelType, split_targets
from infrastructure.storage.base import KeyValueStore
from infrastructure.storage.exceptions import StorageError

logger = get_module_logger()

CACHE_KEY = "channel_config"


class WebhookBotConfig(BaseModel):
    """Webhook bot channel settings.

    Attributes:
        webhooks: Global webhook URLs, each carrying a ``key`` query parameter
        msg_type: "text" or "markdown"
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    webhooks: List[str] = Field(default_factory=list, alias="webhook")
    msg_type: str = Field(default="text", alias="msgType")

    @field_validator("webhooks", mode="before")
    @classmethod
    def split_webhooks(cls, v: Any) -> List[str]:
        return split_targets(v)

    @field_validator("msg_type", mode="before")
    @classmethod
    def normalize_msg_type(cls, v: Any) -> str:
        return "markdown" if str(v or "").strip().lower() == "markdown" else "text"


class EmailConfig(BaseModel):
    """Email channel settings.

    Attributes:
        recipients: Global recipient addresses
        sender: Sender address
        api_key: Resend API key, opaque to routing
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    recipients: List[str] = Field(default_factory=list, alias="toEmail")
    sender: Optional[str] = Field(default=None, alias="fromEmail")
    api_key: Optional[str] = Field(default=None, alias="resendApiKey")

    @field_validator("recipients", mode="before")
    @classmethod
    def split_recipients(cls, v: Any) -> List[str]:
        return split_targets(v)


class ChannelConfiguration(BaseModel):
    """Parsed configuration for every channel type.

    Attributes:
        enabled_notifiers: Enabled channel type values in configured order.
            Unknown values are kept so the run can report them as skipped.
        wechat_bot: Webhook bot settings
        email: Email settings
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled_notifiers: List[str] = Field(
        default_factory=list, alias="enabledNotifiers"
    )
    wechat_bot: WebhookBotConfig = Field(
        default_factory=WebhookBotConfig, alias="wechatBot"
    )
    email: EmailConfig = Field(default_factory=EmailConfig)

    @field_validator("enabled_notifiers", mode="before")
    @classmethod
    def split_notifiers(cls, v: Any) -> List[str]:
        seen: List[str] = []
        for name in split_targets(v):
            name = name.lower()
            if name not in seen:
                seen.append(name)
        return seen

    @field_validator("wechat_bot", "email", mode="before")
    @classmethod
    def ignore_non_mapping(cls, v: Any) -> Any:
        if v is None or not isinstance(v, (dict, BaseModel)):
            return {}
        return v

    def global_targets(self, channel_type: ChannelType) -> List[str]:
        """Global target list of a channel type."""
        if channel_type is ChannelType.WECHATBOT:
            return list(self.wechat_bot.webhooks)
        if channel_type is ChannelType.EMAIL:
            return list(self.email.recipients)
        return []

    def is_enabled(self, channel_type: ChannelType) -> bool:
        return channel_type.value in self.enabled_notifiers


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(defaults)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ChannelConfigSource:
    """Loads the channel configuration from the store with a short-lived cache.

    The cached copy is never authoritative: it expires after
    ``CONFIG_CACHE_TTL_MS`` and ``invalidate()`` drops it immediately. Read
    failures fall back to the environment defaults and are not cached.

    Usage:
        source = ChannelConfigSource(store=get_store(), settings=get_settings())
        config = source.load()
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Settings,
        cache: Optional[TTLCache] = None,
        clock: Optional[Clock] = None,
    ):
        self.store = store
        self.settings = settings
        self.config_key = settings.notifications.NOTIFICATION_CONFIG_KEY
        self.ttl_ms = settings.notifications.CONFIG_CACHE_TTL_MS
        self.cache = cache or TTLCache(default_ttl_ms=self.ttl_ms, clock=clock)

    def defaults(self) -> ChannelConfiguration:
        """Configuration built from environment settings only."""
        notifications = self.settings.notifications
        return ChannelConfiguration(
            enabled_notifiers=notifications.ENABLED_NOTIFIERS,
            wechat_bot=WebhookBotConfig(
                webhooks=notifications.WECHATBOT_WEBHOOK,
                msg_type=notifications.WECHATBOT_MSG_TYPE,
            ),
            email=EmailConfig(
                recipients=notifications.EMAIL_TO,
                sender=notifications.EMAIL_FROM or None,
                api_key=self.settings.resend.RESEND_API_KEY,
            ),
        )

    def load(self) -> ChannelConfiguration:
        """Return the current channel configuration."""
        config = self.cache.get_or_load(CACHE_KEY, self._read, self.ttl_ms)
        return config if config is not None else self.defaults()

    def invalidate(self) -> None:
        self.cache.delete(CACHE_KEY)

    def check(self) -> bool:
        """True if a configuration document is stored and parses."""
        try:
            raw = self.store.get(self.config_key)
        except StorageError as e:
            logger.error(
                "channel_config_read_failed", key=self.config_key, error=str(e)
            )
            return False

        if raw is None:
            logger.warning("channel_config_missing", key=self.config_key)
            return False
        return self._parse(raw) is not None

    def _read(self) -> Optional[ChannelConfiguration]:
        try:
            raw = self.store.get(self.config_key)
        except StorageError as e:
            logger.error(
                "channel_config_read_failed", key=self.config_key, error=str(e)
            )
            return None

        if raw is None:
            return self.defaults()
        return self._parse(raw)

    def _parse(self, raw: str) -> Optional[ChannelConfiguration]:
        try:
            document = json.loads(raw)
        except ValueError as e:
            logger.error(
                "channel_config_malformed", key=self.config_key, error=str(e)
            )
            return None

        if not isinstance(document, dict):
            logger.error(
                "channel_config_malformed",
                key=self.config_key,
                error="configuration document is not an object",
            )
            return None

        merged = _merge(self.defaults().model_dump(by_alias=True), document)
        try:
            return ChannelConfiguration.model_validate(merged)
        except ValidationError as e:
            logger.error(
                "channel_config_malformed", key=self.config_key, error=str(e)
            )
            return None
