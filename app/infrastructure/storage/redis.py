"""Redis-backed key-value store."""

from typing import List, Optional

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult
from infrastructure.storage.base import KeyValueStore
from infrastructure.storage.exceptions import StorageUnavailableError
from integrations.redis import client as redis_client

logger = get_module_logger()


class RedisKeyValueStore(KeyValueStore):
    """Key-value store backed by Redis.

    Suitable for multi-instance deployments: counters incremented from
    different processes share one atomic sequence.
    """

    def __init__(self):
        logger.info("initialized_redis_key_value_store")

    @staticmethod
    def _unwrap(result: OperationResult, operation: str, key: str):
        if not result.is_success:
            raise StorageUnavailableError(
                result.message, operation=operation, key=key
            )
        return result.data

    def get(self, key: str) -> Optional[str]:
        return self._unwrap(redis_client.get_value(key), "get", key)

    def put(self, key: str, value: str, expiration_ttl: Optional[int] = None) -> None:
        self._unwrap(
            redis_client.set_value(key, value, ttl_seconds=expiration_ttl),
            "put",
            key,
        )

    def delete(self, key: str) -> None:
        self._unwrap(redis_client.delete_value(key), "delete", key)

    def increment(self, key: str, expiration_ttl: int) -> int:
        return self._unwrap(
            redis_client.increment(key, ttl_seconds=expiration_ttl), "increment", key
        )

    def append_capped(self, key: str, value: str, max_length: int) -> int:
        return self._unwrap(
            redis_client.append_capped(key, value, max_length), "append", key
        )

    def get_list(self, key: str) -> List[str]:
        return self._unwrap(redis_client.get_list(key), "get_list", key)

    def health_check(self) -> bool:
        return redis_client.health_check().is_success
