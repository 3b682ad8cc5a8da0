"""Fixed-window rate limiter backed by the durable key-value store.

Counters are keyed ``ratelimit:{limit_type}:{identity}:{bucket}`` where
``bucket = now_ms // window_ms``. A counter expires after twice the window
so stale buckets clean themselves up.

Usage:
    from infrastructure.ratelimit import RateLimiter

    limiter = RateLimiter(store=get_store(), rules=rules)
    result = limiter.check("10.0.0.1", "login")
    if not result.allowed:
        ...

    limiter.check_or_raise(target, "wechatbot")  # raises RateLimitExceededError
"""

from typing import Dict, Mapping, Optional, Union

from infrastructure.clock import Clock, system_clock_ms
from infrastructure.logging import get_module_logger
from infrastructure.ratelimit.exceptions import RateLimitExceededError
from infrastructure.ratelimit.models import (
    FailurePolicy,
    RateLimitResult,
    RateLimitRule,
)
from infrastructure.storage.base import KeyValueStore
from infrastructure.storage.exceptions import StorageError

logger = get_module_logger()

DEFAULT_LIMIT_TYPE = "api"

RuleSpec = Union[RateLimitRule, Mapping[str, int]]


def _to_rule(spec: RuleSpec) -> RateLimitRule:
    if isinstance(spec, RateLimitRule):
        return spec
    return RateLimitRule(
        max_requests=int(spec["max_requests"]), window_ms=int(spec["window_ms"])
    )


class RateLimiter:
    """Windowed request-counting gate.

    Each ``(limit_type, identity, bucket)`` counter moves from absent to
    1, 2, ... up to ``max_requests`` and is only removed by expiry or
    ``reset``. The increment is atomic at the store, so concurrent callers
    cannot both pass the quota on a stale read.

    Attributes:
        rules: Mapping of limit type to RateLimitRule
        default_type: Limit type whose rule applies to unknown types
        failure_policy: What to do when the store is unreachable
    """

    def __init__(
        self,
        store: KeyValueStore,
        rules: Mapping[str, RuleSpec],
        default_type: str = DEFAULT_LIMIT_TYPE,
        failure_policy: FailurePolicy = FailurePolicy.OPEN,
        clock: Optional[Clock] = None,
    ):
        if default_type not in rules:
            raise ValueError(f"Default rate limit type '{default_type}' has no rule")

        self.store = store
        self.rules: Dict[str, RateLimitRule] = {
            name: _to_rule(spec) for name, spec in rules.items()
        }
        self.default_type = default_type
        self.failure_policy = FailurePolicy(failure_policy)
        self._clock = clock or system_clock_ms

    def rule_for(self, limit_type: str) -> RateLimitRule:
        """Rule for ``limit_type``, falling back to the default type."""
        return self.rules.get(limit_type) or self.rules[self.default_type]

    @staticmethod
    def build_key(limit_type: str, identity: str, bucket: int) -> str:
        return f"ratelimit:{limit_type}:{identity}:{bucket}"

    def check(self, identity: str, limit_type: str = DEFAULT_LIMIT_TYPE) -> RateLimitResult:
        """Count one call for ``identity`` and report whether it is allowed.

        Args:
            identity: Caller identity (client IP, account, delivery target)
            limit_type: Limit type, e.g. "login", "api", "wechatbot"

        Returns:
            RateLimitResult with allowed, remaining and reset_at (epoch ms)
        """
        rule = self.rule_for(limit_type)
        now = self._clock()
        bucket = now // rule.window_ms
        key = self.build_key(limit_type, identity, bucket)
        reset_at = (bucket + 1) * rule.window_ms

        try:
            current = self.store.get(key)
            count = int(current) if current else 0

            if count >= rule.max_requests:
                logger.warning(
                    "rate_limit_exceeded",
                    identity=identity,
                    limit_type=limit_type,
                    count=count,
                )
                return RateLimitResult(allowed=False, remaining=0, reset_at=reset_at)

            new_count = self.store.increment(key, rule.ttl_seconds)

            # Another caller took the last slot between the read and the increment
            if new_count > rule.max_requests:
                logger.warning(
                    "rate_limit_exceeded",
                    identity=identity,
                    limit_type=limit_type,
                    count=new_count,
                )
                return RateLimitResult(allowed=False, remaining=0, reset_at=reset_at)

            return RateLimitResult(
                allowed=True,
                remaining=max(0, rule.max_requests - new_count),
                reset_at=reset_at,
            )

        except (StorageError, ValueError) as e:
            return self._on_store_failure(identity, limit_type, rule, now, e)

    def _on_store_failure(
        self,
        identity: str,
        limit_type: str,
        rule: RateLimitRule,
        now: int,
        error: Exception,
    ) -> RateLimitResult:
        logger.error(
            "rate_limit_check_failed",
            identity=identity,
            limit_type=limit_type,
            failure_policy=self.failure_policy.value,
            error=str(error),
        )
        if self.failure_policy is FailurePolicy.OPEN:
            return RateLimitResult(
                allowed=True,
                remaining=rule.max_requests,
                reset_at=now + rule.window_ms,
            )
        return RateLimitResult(
            allowed=False, remaining=0, reset_at=now + rule.window_ms
        )

    def check_or_raise(
        self, identity: str, limit_type: str = DEFAULT_LIMIT_TYPE
    ) -> RateLimitResult:
        """Same as ``check`` but raises instead of returning allowed=False.

        Raises:
            RateLimitExceededError: When the call is not allowed
        """
        result = self.check(identity, limit_type)
        if not result.allowed:
            raise RateLimitExceededError(
                identity=identity,
                limit_type=limit_type,
                reset_at=result.reset_at,
            )
        return result

    def reset(self, identity: str, limit_type: str) -> None:
        """Delete the counter of the current bucket only.

        Counters of other buckets are left to expire on their own.

        Raises:
            StorageUnavailableError: When the store cannot be reached
        """
        rule = self.rule_for(limit_type)
        bucket = self._clock() // rule.window_ms
        key = self.build_key(limit_type, identity, bucket)
        self.store.delete(key)
        logger.info(
            "rate_limit_reset",
            identity=identity,
            limit_type=limit_type,
            bucket=bucket,
        )

    def now_ms(self) -> int:
        """Current time according to the limiter's clock."""
        return self._clock()
