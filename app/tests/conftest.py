"""Shared test fixtures."""

import pytest

from infrastructure.clock import ManualClock
from infrastructure.storage.memory import InMemoryKeyValueStore

# 2025-01-01T00:00:00Z, aligned to a 60 second window
START_MS = 1_735_689_600_000


@pytest.fixture
def clock():
    """Manual clock starting at the beginning of a rate limit window."""
    return ManualClock(start_ms=START_MS)


@pytest.fixture
def memory_store(clock):
    """In-memory key-value store driven by the manual clock."""
    return InMemoryKeyValueStore(clock=clock)
