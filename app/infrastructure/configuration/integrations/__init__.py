"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.redis import RedisSettings
from infrastructure.configuration.integrations.resend import ResendSettings

__all__ = [
    "RedisSettings",
    "ResendSettings",
]
