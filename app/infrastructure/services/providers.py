"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.notifications import (
    ChannelConfigSource,
    FailureLog,
    NotificationService,
)
from infrastructure.ratelimit import FailurePolicy, RateLimiter
from infrastructure.storage import KeyValueStore
from infrastructure.storage import get_store as get_configured_store


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/version")
        def version(settings: SettingsDep):
            return {"version": settings.GIT_SHA}

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


def get_store() -> KeyValueStore:
    """Durable key-value store for the configured backend."""
    return get_configured_store()


@lru_cache
def get_rate_limiter() -> RateLimiter:
    """
    Get application-scoped rate limiter singleton.

    Returns:
        RateLimiter: Limiter using the configured rules and failure policy.

    Usage:
        @router.post("/login")
        def login(request: Request, limiter: RateLimiterDep):
            limiter.check_or_raise(request.client.host, "login")
    """
    settings = get_settings()
    return RateLimiter(
        store=get_store(),
        rules=settings.rate_limit.rules,
        default_type=settings.rate_limit.default_type,
        failure_policy=FailurePolicy(settings.rate_limit.failure_policy),
    )


@lru_cache
def get_failure_log() -> FailureLog:
    """Get application-scoped failure log singleton."""
    return FailureLog(store=get_store(), settings=get_settings().failure_log)


@lru_cache
def get_config_source() -> ChannelConfigSource:
    """Get application-scoped channel configuration source singleton."""
    return ChannelConfigSource(store=get_store(), settings=get_settings())


@lru_cache
def get_notification_service() -> NotificationService:
    """
    Get application-scoped notification service singleton.

    Returns:
        NotificationService: Service wired to the shared store, limiter,
        failure log and configuration source.
    """
    return NotificationService(
        settings=get_settings(),
        store=get_store(),
        rate_limiter=get_rate_limiter(),
        failure_log=get_failure_log(),
        config_source=get_config_source(),
    )
