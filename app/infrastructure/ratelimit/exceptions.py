"""Rate limiting exceptions."""

from typing import Optional


class RateLimitError(Exception):
    """Base exception for rate limiting errors."""


class RateLimitExceededError(RateLimitError):
    """Raised by ``RateLimiter.check_or_raise`` when a call is not allowed.

    Recoverable: the caller may retry once ``reset_at`` (epoch ms) has passed.

    Attributes:
        identity: Identity that exceeded its quota
        limit_type: Limit type that was checked
        reset_at: Epoch milliseconds at which the current window ends
    """

    def __init__(
        self,
        message: str = "Too many requests, please try again later",
        identity: Optional[str] = None,
        limit_type: Optional[str] = None,
        reset_at: Optional[int] = None,
    ):
        super().__init__(message)
        self.identity = identity
        self.limit_type = limit_type
        self.reset_at = reset_at

    def retry_after_seconds(self, now_ms: int) -> int:
        """Whole seconds until the window resets, at least 1."""
        if self.reset_at is None:
            return 1
        return max(1, -(-(self.reset_at - now_ms) // 1000))
