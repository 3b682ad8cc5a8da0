"""Subscription reminder configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    RedisSettings,
    ResendSettings,
)

# Feature settings
from infrastructure.configuration.features import NotificationSettings

# Infrastructure settings
from infrastructure.configuration.infrastructure import (
    FailureLogSettings,
    RateLimitSettings,
    ServerSettings,
    StorageSettings,
)


class Settings(BaseSettings):
    """Application settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object:

    - **Integrations**: Redis, Resend
    - **Features**: notification channel defaults
    - **Infrastructure**: storage backend, rate limiting, failure log, server

    Environment Variables:
        PREFIX: Environment prefix, empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.storage.backend == "redis":
            host = settings.redis.REDIS_HOST

        max_records = settings.failure_log.max_records
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    redis: RedisSettings
    resend: ResendSettings

    # Feature settings
    notifications: NotificationSettings

    # Infrastructure settings
    storage: StorageSettings
    rate_limit: RateLimitSettings
    failure_log: FailureLogSettings
    server: ServerSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "redis": RedisSettings,
            "resend": ResendSettings,
            # Features
            "notifications": NotificationSettings,
            # Infrastructure
            "storage": StorageSettings,
            "rate_limit": RateLimitSettings,
            "failure_log": FailureLogSettings,
            "server": ServerSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
