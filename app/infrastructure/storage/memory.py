"""In-process key-value store.

Single-process backend used for development and tests. Expiry is evaluated
lazily against an injected clock.
"""

import threading
from typing import Dict, List, Optional, Tuple

from infrastructure.clock import Clock, system_clock_ms
from infrastructure.storage.base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Thread-safe dict-backed store honouring TTLs.

    Example:
        clock = ManualClock()
        store = InMemoryKeyValueStore(clock=clock)
        store.put("k", "v", expiration_ttl=60)
        clock.advance(61_000)
        assert store.get("k") is None
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or system_clock_ms
        self._lock = threading.Lock()
        # key -> (value, expires_at_ms or None)
        self._items: Dict[str, Tuple[str, Optional[int]]] = {}
        self._lists: Dict[str, List[str]] = {}

    def _live_item(self, key: str) -> Optional[Tuple[str, Optional[int]]]:
        item = self._items.get(key)
        if item is None:
            return None
        _, expires_at = item
        if expires_at is not None and self._clock() >= expires_at:
            del self._items[key]
            return None
        return item

    def _expiry(self, expiration_ttl: Optional[int]) -> Optional[int]:
        if not expiration_ttl:
            return None
        return self._clock() + expiration_ttl * 1000

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            item = self._live_item(key)
            return item[0] if item else None

    def put(self, key: str, value: str, expiration_ttl: Optional[int] = None) -> None:
        with self._lock:
            self._items[key] = (value, self._expiry(expiration_ttl))

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)
            self._lists.pop(key, None)

    def increment(self, key: str, expiration_ttl: int) -> int:
        with self._lock:
            item = self._live_item(key)
            if item is None:
                new_value = 1
                expires_at = self._expiry(expiration_ttl)
            else:
                new_value = int(item[0]) + 1
                expires_at = item[1]
            self._items[key] = (str(new_value), expires_at)
            return new_value

    def append_capped(self, key: str, value: str, max_length: int) -> int:
        with self._lock:
            items = self._lists.setdefault(key, [])
            items.append(value)
            del items[: max(0, len(items) - max_length)]
            return len(items)

    def get_list(self, key: str) -> List[str]:
        with self._lock:
            return list(self._lists.get(key, []))

    def keys(self) -> list:
        """Live keys, for diagnostics and tests."""
        with self._lock:
            live = [k for k in list(self._items) if self._live_item(k) is not None]
            return live + list(self._lists)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._lists.clear()
