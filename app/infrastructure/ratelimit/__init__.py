"""Fixed-window rate limiting backed by the durable key-value store."""

from infrastructure.ratelimit.exceptions import RateLimitError, RateLimitExceededError
from infrastructure.ratelimit.limiter import RateLimiter
from infrastructure.ratelimit.models import (
    FailurePolicy,
    RateLimitResult,
    RateLimitRule,
)

__all__ = [
    "RateLimiter",
    "RateLimitResult",
    "RateLimitRule",
    "FailurePolicy",
    "RateLimitError",
    "RateLimitExceededError",
]
