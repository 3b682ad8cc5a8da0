"""Durable key-value store abstract base class."""

from abc import ABC, abstractmethod
from typing import List, Optional


class KeyValueStore(ABC):
    """Minimal durable key-value store.

    Rate-limit counters, the failure log and the channel configuration
    document live here. Values are strings; callers own serialization.

    Every method raises ``StorageUnavailableError`` when the backend cannot
    serve the request.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if absent or expired."""
        pass

    @abstractmethod
    def put(self, key: str, value: str, expiration_ttl: Optional[int] = None) -> None:
        """Store a value.

        Args:
            key: Key to write.
            value: String value.
            expiration_ttl: Optional time-to-live in seconds.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Deleting an absent key is not an error."""
        pass

    @abstractmethod
    def increment(self, key: str, expiration_ttl: int) -> int:
        """Atomically add one to an integer counter and return the new value.

        An absent key counts as 0. The TTL is applied when the counter is
        created. Concurrent increments never observe the same value.
        """
        pass

    @abstractmethod
    def append_capped(self, key: str, value: str, max_length: int) -> int:
        """Atomically append to a list and keep only its last ``max_length`` items.

        Concurrent appends are never lost to one another. Returns the list
        length after trimming.
        """
        pass

    @abstractmethod
    def get_list(self, key: str) -> List[str]:
        """Items of a list, oldest first; an absent key is an empty list."""
        pass

    def health_check(self) -> bool:
        """Round-trip a probe key through the store."""
        probe_key = "health_check_test"
        self.put(probe_key, "ok", expiration_ttl=60)
        healthy = self.get(probe_key) == "ok"
        self.delete(probe_key)
        return healthy
