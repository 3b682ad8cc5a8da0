"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.failure_log import (
    FailureLogSettings,
)
from infrastructure.configuration.infrastructure.rate_limit import RateLimitSettings
from infrastructure.configuration.infrastructure.server import ServerSettings
from infrastructure.configuration.infrastructure.storage import StorageSettings

__all__ = [
    "FailureLogSettings",
    "RateLimitSettings",
    "ServerSettings",
    "StorageSettings",
]
