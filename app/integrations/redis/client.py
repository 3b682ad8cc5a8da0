"""Redis client for durable key-value state.

Stores rate-limit counters, the failure log and the channel configuration
document. Values are stored as plain strings; callers own serialization.

Features:
- Connection pooling with retry on timeout
- Standardized error handling via OperationResult
- TTL support for automatic expiration
- Atomic increment-with-expiry through a Lua script

Usage:
    from integrations.redis import increment, get_value

    result = increment("ratelimit:api:10.0.0.1:28333", ttl_seconds=120)
    if result.is_success:
        count = result.data
"""

from typing import Optional
from redis import Redis, ConnectionPool, RedisError  # type: ignore
from redis.exceptions import ConnectionError, TimeoutError  # type: ignore

from infrastructure.configuration.settings import settings
from infrastructure.logging import get_module_logger
from infrastructure.operations.result import OperationResult

logger = get_module_logger()

# INCR and EXPIRE in one round trip; the TTL is only set by the first increment
INCREMENT_SCRIPT = """
local current = redis.call('INCR', KEYS[1])
if current == 1 then
    redis.call('EXPIRE', KEYS[1], ARGV[1])
end
return current
"""

# RPUSH and LTRIM in one round trip so concurrent appends cannot drop entries
APPEND_CAPPED_SCRIPT = """
redis.call('RPUSH', KEYS[1], ARGV[1])
redis.call('LTRIM', KEYS[1], -tonumber(ARGV[2]), -1)
return redis.call('LLEN', KEYS[1])
"""

# Global connection pool (initialized on first use)
_connection_pool: Optional[ConnectionPool] = None
_redis_client: Optional[Redis] = None


def get_redis_client() -> Redis:
    """Get or create the Redis client with connection pooling.

    Returns:
        Redis: Redis client instance

    Raises:
        ConnectionError: If unable to connect to Redis
    """
    global _connection_pool, _redis_client

    if _redis_client is not None:
        return _redis_client

    redis_settings = settings.redis
    try:
        if _connection_pool is None:
            _connection_pool = ConnectionPool(
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                db=redis_settings.REDIS_DB,
                password=redis_settings.REDIS_PASSWORD,
                decode_responses=True,
                max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
                socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                socket_connect_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                retry_on_timeout=True,
                health_check_interval=30,
            )
            logger.info(
                "redis_connection_pool_created",
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
            )

        client = Redis(connection_pool=_connection_pool)
        client.ping()
        _redis_client = client
        logger.info("redis_client_connected")

        return _redis_client

    except (ConnectionError, TimeoutError, RedisError) as e:
        logger.error(
            "redis_connection_failed",
            error=str(e),
            host=redis_settings.REDIS_HOST,
        )
        raise


def reset_redis_client() -> None:
    """Drop the cached client and pool (for testing only)."""
    global _connection_pool, _redis_client
    _connection_pool = None
    _redis_client = None


def _key(key: str) -> str:
    return f"{settings.redis.REDIS_KEY_PREFIX}{key}"


def _connection_error(operation: str, key: str, e: Exception) -> OperationResult:
    logger.error(f"redis_{operation}_connection_error", key=key, error=str(e))
    return OperationResult.transient_error(
        message=f"Connection error during {operation} of key {key}: {str(e)}",
        error_code="CONNECTION_ERROR",
    )


def _redis_error(operation: str, key: str, e: Exception) -> OperationResult:
    logger.error(f"redis_{operation}_error", key=key, error=str(e))
    return OperationResult.permanent_error(
        message=f"Error during {operation} of key {key}: {str(e)}",
        error_code="REDIS_ERROR",
    )


def set_value(
    key: str,
    value: str,
    ttl_seconds: Optional[int] = None,
) -> OperationResult:
    """Set a key to a string value with optional TTL.

    Args:
        key: The key to set
        value: The string value
        ttl_seconds: Optional expiration time in seconds

    Returns:
        OperationResult: Success/failure result
    """
    try:
        client = get_redis_client()

        if ttl_seconds:
            client.setex(_key(key), ttl_seconds, value)
            logger.debug("redis_set_with_ttl", key=key, ttl_seconds=ttl_seconds)
        else:
            client.set(_key(key), value)
            logger.debug("redis_set", key=key)

        return OperationResult.success(message=f"Value set for key: {key}")

    except (ConnectionError, TimeoutError) as e:
        return _connection_error("set", key, e)
    except RedisError as e:
        return _redis_error("set", key, e)


def get_value(key: str) -> OperationResult:
    """Get a string value by key.

    Returns:
        OperationResult: Result with data=value, or data=None if not found
    """
    try:
        client = get_redis_client()
        value = client.get(_key(key))

        if value is None:
            logger.debug("redis_key_not_found", key=key)
            return OperationResult.success(message=f"Key not found: {key}", data=None)

        logger.debug("redis_get_success", key=key)
        return OperationResult.success(
            message=f"Value retrieved for key: {key}", data=value
        )

    except (ConnectionError, TimeoutError) as e:
        return _connection_error("get", key, e)
    except RedisError as e:
        return _redis_error("get", key, e)


def delete_value(key: str) -> OperationResult:
    """Delete a key.

    Returns:
        OperationResult: Result with data={"deleted": bool}
    """
    try:
        client = get_redis_client()
        deleted_count = client.delete(_key(key))

        logger.debug("redis_delete", key=key, deleted=deleted_count > 0)

        return OperationResult.success(
            message=(
                f"Key deleted: {key}" if deleted_count > 0 else f"Key not found: {key}"
            ),
            data={"deleted": deleted_count > 0},
        )

    except (ConnectionError, TimeoutError) as e:
        return _connection_error("delete", key, e)
    except RedisError as e:
        return _redis_error("delete", key, e)


def increment(key: str, ttl_seconds: int) -> OperationResult:
    """Atomically increment a counter, setting its TTL on creation.

    Concurrent callers each observe a distinct post-increment value.

    Args:
        key: Counter key
        ttl_seconds: Expiry applied when the counter is created

    Returns:
        OperationResult: Result with data=new counter value (int)
    """
    try:
        client = get_redis_client()
        current = client.eval(INCREMENT_SCRIPT, 1, _key(key), ttl_seconds)

        logger.debug("redis_increment", key=key, value=current)
        return OperationResult.success(
            message=f"Counter incremented: {key}", data=int(current)
        )

    except (ConnectionError, TimeoutError) as e:
        return _connection_error("increment", key, e)
    except RedisError as e:
        return _redis_error("increment", key, e)


def append_capped(key: str, value: str, max_length: int) -> OperationResult:
    """Atomically append to a list and trim it to its last ``max_length`` items.

    Returns:
        OperationResult: Result with data=list length after trimming (int)
    """
    try:
        client = get_redis_client()
        length = client.eval(APPEND_CAPPED_SCRIPT, 1, _key(key), value, max_length)

        logger.debug("redis_append_capped", key=key, length=length)
        return OperationResult.success(
            message=f"Value appended to list: {key}", data=int(length)
        )

    except (ConnectionError, TimeoutError) as e:
        return _connection_error("append", key, e)
    except RedisError as e:
        return _redis_error("append", key, e)


def get_list(key: str) -> OperationResult:
    """Get every item of a list, oldest first.

    Returns:
        OperationResult: Result with data=list of strings (empty if absent)
    """
    try:
        client = get_redis_client()
        items = client.lrange(_key(key), 0, -1)

        logger.debug("redis_get_list", key=key, length=len(items))
        return OperationResult.success(
            message=f"List retrieved for key: {key}", data=list(items)
        )

    except (ConnectionError, TimeoutError) as e:
        return _connection_error("get_list", key, e)
    except RedisError as e:
        return _redis_error("get_list", key, e)


def health_check() -> OperationResult:
    """Check Redis connection health.

    Returns:
        OperationResult: Success if healthy, error otherwise
    """
    try:
        client = get_redis_client()
        client.ping()

        logger.debug("redis_health_check_success")
        return OperationResult.success(message="Redis connection healthy")

    except (ConnectionError, TimeoutError) as e:
        logger.error("redis_health_check_connection_error", error=str(e))
        return OperationResult.transient_error(
            message=f"Redis connection error: {str(e)}",
            error_code="CONNECTION_ERROR",
        )

    except RedisError as e:
        logger.error("redis_health_check_error", error=str(e))
        return OperationResult.permanent_error(
            message=f"Redis error: {str(e)}",
            error_code="REDIS_ERROR",
        )
