"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.notifications import NotificationService
from infrastructure.ratelimit import RateLimiter
from infrastructure.services.providers import (
    get_settings,
    get_rate_limiter,
    get_notification_service,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Rate limiter dependency
RateLimiterDep = Annotated[RateLimiter, Depends(get_rate_limiter)]

# Notification service dependency
NotificationServiceDep = Annotated[
    NotificationService, Depends(get_notification_service)
]

__all__ = [
    "SettingsDep",
    "RateLimiterDep",
    "NotificationServiceDep",
]
