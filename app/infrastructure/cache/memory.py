"""Bounded in-process TTL cache.

The cache is never authoritative: entries are copies of data owned by the
durable store and disappear after their TTL.
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional

from infrastructure.clock import Clock, system_clock_ms


@dataclass
class _CacheItem:
    data: Any
    expires_at: int


class TTLCache:
    """Thread-safe TTL cache with an injected clock.

    When ``max_entries`` is reached the least recently written entry is
    evicted.

    Example:
        clock = ManualClock()
        cache = TTLCache(default_ttl_ms=1000, clock=clock)
        cache.set("a", 1)
        clock.advance(1001)
        assert cache.get("a") is None
    """

    def __init__(
        self,
        default_ttl_ms: int = 60000,
        max_entries: int = 256,
        clock: Optional[Clock] = None,
    ):
        self.default_ttl_ms = default_ttl_ms
        self.max_entries = max_entries
        self._clock = clock or system_clock_ms
        self._lock = threading.RLock()
        self._items: "OrderedDict[str, _CacheItem]" = OrderedDict()

    def _is_expired(self, item: _CacheItem) -> bool:
        return self._clock() > item.expires_at

    def set(self, key: str, value: Any, ttl_ms: Optional[int] = None) -> None:
        ttl = self.default_ttl_ms if ttl_ms is None else ttl_ms
        with self._lock:
            self._items.pop(key, None)
            self._items[key] = _CacheItem(data=value, expires_at=self._clock() + ttl)
            while len(self._items) > self.max_entries:
                self._items.popitem(last=False)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            if self._is_expired(item):
                del self._items[key]
                return None
            return item.data

    def has(self, key: str) -> bool:
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return False
            if self._is_expired(item):
                del self._items[key]
                return False
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._items.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def size(self) -> int:
        """Number of live entries; expired entries are purged first."""
        with self._lock:
            for key in [k for k, v in self._items.items() if self._is_expired(v)]:
                del self._items[key]
            return len(self._items)

    def get_or_load(
        self, key: str, loader: Callable[[], Any], ttl_ms: Optional[int] = None
    ) -> Any:
        """Return the cached value or call ``loader`` and cache its result.

        ``None`` results are not cached.
        """
        cached = self.get(key)
        if cached is not None:
            return cached
        value = loader()
        if value is not None:
            self.set(key, value, ttl_ms)
        return value
