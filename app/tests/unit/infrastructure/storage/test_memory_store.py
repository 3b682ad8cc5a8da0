"""Unit tests for InMemoryKeyValueStore."""

import threading

import pytest

from infrastructure.storage import InMemoryKeyValueStore, KeyValueStore


@pytest.mark.unit
class TestInMemoryKeyValueStore:
    """Tests for the in-process backend."""

    def test_is_key_value_store(self, memory_store):
        assert isinstance(memory_store, KeyValueStore)

    def test_get_missing_key_returns_none(self, memory_store):
        assert memory_store.get("missing") is None

    def test_put_and_get(self, memory_store):
        memory_store.put("config", '{"a": 1}')

        assert memory_store.get("config") == '{"a": 1}'

    def test_put_with_ttl_expires(self, memory_store, clock):
        """Values disappear once their TTL has elapsed."""
        memory_store.put("k", "v", expiration_ttl=60)

        clock.advance(59_999)
        assert memory_store.get("k") == "v"

        clock.advance(1)
        assert memory_store.get("k") is None

    def test_put_without_ttl_never_expires(self, memory_store, clock):
        memory_store.put("k", "v")

        clock.advance(10 * 365 * 24 * 3600 * 1000)

        assert memory_store.get("k") == "v"

    def test_delete(self, memory_store):
        memory_store.put("k", "v")

        memory_store.delete("k")

        assert memory_store.get("k") is None

    def test_delete_missing_key_is_noop(self, memory_store):
        memory_store.delete("missing")

    def test_increment_creates_counter(self, memory_store):
        assert memory_store.increment("counter", 120) == 1
        assert memory_store.get("counter") == "1"

    def test_increment_keeps_original_expiry(self, memory_store, clock):
        """Only the first increment sets the TTL."""
        memory_store.increment("counter", 120)
        clock.advance(100_000)
        memory_store.increment("counter", 120)

        clock.advance(20_000)

        assert memory_store.get("counter") is None

    def test_increment_after_expiry_restarts(self, memory_store, clock):
        memory_store.increment("counter", 1)
        clock.advance(1_000)

        assert memory_store.increment("counter", 1) == 1

    def test_concurrent_increments_are_unique(self):
        """Concurrent increments never observe the same value."""
        store = InMemoryKeyValueStore()
        seen = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                value = store.increment("counter", 60)
                with lock:
                    seen.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(seen) == list(range(1, 401))

    def test_append_capped_keeps_last_items(self, memory_store):
        for value in ["a", "b", "c", "d"]:
            length = memory_store.append_capped("log", value, 3)

        assert length == 3
        assert memory_store.get_list("log") == ["b", "c", "d"]

    def test_get_list_missing_key(self, memory_store):
        assert memory_store.get_list("missing") == []

    def test_delete_removes_list(self, memory_store):
        memory_store.append_capped("log", "a", 3)

        memory_store.delete("log")

        assert memory_store.get_list("log") == []

    def test_concurrent_appends_are_not_lost(self):
        store = InMemoryKeyValueStore()

        def worker(offset):
            for index in range(50):
                store.append_capped("log", f"{offset}-{index}", 1000)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store.get_list("log")) == 400

    def test_keys_lists_live_keys(self, memory_store, clock):
        memory_store.put("a", "1", expiration_ttl=1)
        memory_store.put("b", "2")
        clock.advance(1_000)

        assert memory_store.keys() == ["b"]

    def test_health_check_round_trip(self, memory_store):
        assert memory_store.health_check() is True
        assert memory_store.get("health_check_test") is None
