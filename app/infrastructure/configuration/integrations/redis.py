"""Redis integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class RedisSettings(IntegrationSettings):
    """Redis connection configuration used by the durable key-value store.

    Environment Variables:
        REDIS_HOST: Redis host (default: localhost)
        REDIS_PORT: Redis port (default: 6379)
        REDIS_DB: Logical database index (default: 0)
        REDIS_PASSWORD: Optional password
        REDIS_SSL: Use TLS for the connection (default: False)
        REDIS_SOCKET_TIMEOUT: Socket timeout in seconds (default: 5)
        REDIS_MAX_CONNECTIONS: Connection pool size (default: 10)
        REDIS_KEY_PREFIX: Prefix prepended to every key (default: "")

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        host = settings.redis.REDIS_HOST
        ```
    """

    REDIS_HOST: str = Field(default="localhost", alias="REDIS_HOST")
    REDIS_PORT: int = Field(default=6379, alias="REDIS_PORT")
    REDIS_DB: int = Field(default=0, alias="REDIS_DB")
    REDIS_PASSWORD: str | None = Field(default=None, alias="REDIS_PASSWORD")
    REDIS_SSL: bool = Field(default=False, alias="REDIS_SSL")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, alias="REDIS_SOCKET_TIMEOUT")
    REDIS_MAX_CONNECTIONS: int = Field(default=10, alias="REDIS_MAX_CONNECTIONS")
    REDIS_KEY_PREFIX: str = Field(default="", alias="REDIS_KEY_PREFIX")
