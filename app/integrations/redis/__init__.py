"""Redis integration.

Thin wrapper around redis-py returning OperationResult objects.
"""

from integrations.redis.client import (
    get_redis_client,
    reset_redis_client,
    get_value,
    set_value,
    delete_value,
    increment,
    append_capped,
    get_list,
    health_check,
)

__all__ = [
    "get_redis_client",
    "reset_redis_client",
    "get_value",
    "set_value",
    "delete_value",
    "increment",
    "append_capped",
    "get_list",
    "health_check",
]
