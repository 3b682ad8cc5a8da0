"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    RateLimiterDep,
    NotificationServiceDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_store,
    get_rate_limiter,
    get_failure_log,
    get_config_source,
    get_notification_service,
)

__all__ = [
    "SettingsDep",
    "RateLimiterDep",
    "NotificationServiceDep",
    "get_settings",
    "get_store",
    "get_rate_limiter",
    "get_failure_log",
    "get_config_source",
    "get_notification_service",
]
