"""Test fixtures for API route tests."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from infrastructure.notifications import NotificationService
from infrastructure.ratelimit import RateLimiter, RateLimitRule
from infrastructure.services import providers
from infrastructure.storage import InMemoryKeyValueStore
from server.server import handler


@pytest.fixture
def notification_service():
    service = MagicMock(spec=NotificationService)
    service.list_failures.return_value = []
    service.health_check.return_value = {
        "status": "healthy",
        "checks": {"store": True, "config": True},
        "channels": {},
    }
    return service


@pytest.fixture
def api_limiter():
    return RateLimiter(
        store=InMemoryKeyValueStore(),
        rules={"api": RateLimitRule(max_requests=100, window_ms=60000)},
    )


@pytest.fixture
def client(notification_service, api_limiter):
    """TestClient with the service and limiter replaced.

    The lifespan is not entered, so no scheduler is started.
    """
    handler.dependency_overrides[providers.get_notification_service] = (
        lambda: notification_service
    )
    handler.dependency_overrides[providers.get_rate_limiter] = lambda: api_limiter
    yield TestClient(handler)
    handler.dependency_overrides.clear()
