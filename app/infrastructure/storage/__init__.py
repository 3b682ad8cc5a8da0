"""Durable key-value storage.

Usage:

    from infrastructure.storage import get_store

    store = get_store()
    store.put("config", document_json)
    count = store.increment("ratelimit:api:10.0.0.1:28333", expiration_ttl=120)
"""

from infrastructure.storage.base import KeyValueStore
from infrastructure.storage.exceptions import StorageError, StorageUnavailableError
from infrastructure.storage.factory import get_store, reset_store
from infrastructure.storage.memory import InMemoryKeyValueStore

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "StorageError",
    "StorageUnavailableError",
    "get_store",
    "reset_store",
]
