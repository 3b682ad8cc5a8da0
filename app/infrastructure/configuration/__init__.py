"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    RateLimitSettings: Rate limiter settings class (for testing)
    FailureLogSettings: Failure log settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    backend = settings.storage.backend
    rules = settings.rate_limit.rules

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure.rate_limit import RateLimitSettings
from infrastructure.configuration.infrastructure.failure_log import (
    FailureLogSettings,
)

__all__ = ["Settings", "RateLimitSettings", "FailureLogSettings"]
