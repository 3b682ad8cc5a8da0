"""Notification channel settings."""

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class NotificationSettings(FeatureSettings):
    """Environment defaults for the notification channels.

    The values here seed the channel configuration. A configuration document
    stored in the key-value store (key ``NOTIFICATION_CONFIG_KEY``) is merged
    on top of them at load time. List-valued settings use the ``|`` delimiter
    and are split once when the channel configuration is built.

    Environment Variables:
        ENABLED_NOTIFIERS: Enabled channel types, e.g. "wechatbot|email"
        WECHATBOT_WEBHOOK: One or more webhook URLs separated by "|"
        WECHATBOT_MSG_TYPE: "text" or "markdown" (default: text)
        EMAIL_TO: Global recipient addresses separated by "|"
        EMAIL_FROM: Sender address for reminder emails
        NOTIFICATION_HTTP_TIMEOUT: Transport timeout in seconds (default: 10)
        NOTIFICATION_TIMEZONE: Timezone used to render dates (default: UTC)
        NOTIFICATION_CONFIG_KEY: Store key of the configuration document
        CONFIG_CACHE_TTL_MS: How long a loaded configuration is reused
        REMINDER_RUN_AT: Daily time of the scheduled reminder run (HH:MM)
        DUE_SUBSCRIPTIONS_KEY: Store key where the subscription service leaves
            the JSON list of subscriptions due for a reminder

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        webhooks = settings.notifications.WECHATBOT_WEBHOOK
        ```
    """

    ENABLED_NOTIFIERS: str = Field(default="", alias="ENABLED_NOTIFIERS")
    WECHATBOT_WEBHOOK: str = Field(default="", alias="WECHATBOT_WEBHOOK")
    WECHATBOT_MSG_TYPE: str = Field(default="text", alias="WECHATBOT_MSG_TYPE")
    EMAIL_TO: str = Field(default="", alias="EMAIL_TO")
    EMAIL_FROM: str = Field(default="", alias="EMAIL_FROM")
    NOTIFICATION_HTTP_TIMEOUT: int = Field(
        default=10, alias="NOTIFICATION_HTTP_TIMEOUT"
    )
    NOTIFICATION_TIMEZONE: str = Field(default="UTC", alias="NOTIFICATION_TIMEZONE")
    NOTIFICATION_CONFIG_KEY: str = Field(
        default="config", alias="NOTIFICATION_CONFIG_KEY"
    )
    CONFIG_CACHE_TTL_MS: int = Field(default=60000, alias="CONFIG_CACHE_TTL_MS")
    REMINDER_RUN_AT: str = Field(default="08:00", alias="REMINDER_RUN_AT")
    DUE_SUBSCRIPTIONS_KEY: str = Field(
        default="due_subscriptions", alias="DUE_SUBSCRIPTIONS_KEY"
    )
