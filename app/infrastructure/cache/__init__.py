"""In-process read-through cache with explicit expiry.

Usage:

    from infrastructure.cache import TTLCache

    cache = TTLCache(default_ttl_ms=60_000)
    config = cache.get_or_load("channel_config", load_config)
"""

from infrastructure.cache.memory import TTLCache

__all__ = ["TTLCache"]
