"""Key-value store factory."""

from typing import Optional

from infrastructure.configuration.settings import settings
from infrastructure.logging import get_module_logger
from infrastructure.storage.base import KeyValueStore
from infrastructure.storage.memory import InMemoryKeyValueStore

logger = get_module_logger()

# Singleton store instance
_store_instance: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    """Get the key-value store singleton for the configured backend.

    Returns:
        RedisKeyValueStore when STORAGE_BACKEND=redis, otherwise an
        InMemoryKeyValueStore.
    """
    global _store_instance

    if _store_instance is not None:
        return _store_instance

    if settings.storage.backend == "redis":
        from infrastructure.storage.redis import RedisKeyValueStore

        _store_instance = RedisKeyValueStore()
    else:
        _store_instance = InMemoryKeyValueStore()

    logger.info("initialized_key_value_store", backend=settings.storage.backend)
    return _store_instance


def reset_store() -> None:
    """Reset the store singleton (for testing only)."""
    global _store_instance
    _store_instance = None
    logger.debug("reset_store_singleton")
