"""Test fixtures for rate limiter tests."""

import pytest
from unittest.mock import MagicMock

from infrastructure.ratelimit import FailurePolicy, RateLimiter, RateLimitRule
from infrastructure.storage.exceptions import StorageUnavailableError


@pytest.fixture
def rules():
    return {
        "login": RateLimitRule(max_requests=5, window_ms=60000),
        "api": RateLimitRule(max_requests=100, window_ms=60000),
        "wechatbot": {"max_requests": 2, "window_ms": 60000},
    }


@pytest.fixture
def limiter_factory(memory_store, clock, rules):
    """Factory for RateLimiter instances sharing the manual clock.

    Example:
        limiter = limiter_factory(failure_policy=FailurePolicy.CLOSED)
    """

    def _factory(store=None, failure_policy=FailurePolicy.OPEN):
        return RateLimiter(
            store=store or memory_store,
            rules=rules,
            failure_policy=failure_policy,
            clock=clock,
        )

    return _factory


@pytest.fixture
def unavailable_store():
    """Store whose every operation fails."""
    store = MagicMock()
    error = StorageUnavailableError("connection refused", operation="get")
    store.get.side_effect = error
    store.increment.side_effect = error
    store.delete.side_effect = error
    return store
