"""Rate limiting models."""

from dataclasses import dataclass
from enum import Enum


class FailurePolicy(Enum):
    """Behaviour when the durable store cannot be consulted.

    OPEN allows the call (availability first), CLOSED rejects it.
    """

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class RateLimitRule:
    """Quota for one limit type: ``max_requests`` per fixed ``window_ms``."""

    max_requests: int
    window_ms: int

    @property
    def ttl_seconds(self) -> int:
        """Counter expiry: twice the window, rounded up to whole seconds."""
        return -(-self.window_ms // 1000) * 2


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a rate limit check.

    Attributes:
        allowed: Whether the call may proceed
        remaining: Calls left in the current window after this one
        reset_at: Epoch milliseconds at which the current window ends
    """

    allowed: bool
    remaining: int
    reset_at: int
