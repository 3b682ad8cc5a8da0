"""Rate limiter infrastructure settings."""

from typing import Any, Dict

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings

DEFAULT_RATE_LIMIT_RULES: Dict[str, Dict[str, int]] = {
    "login": {"max_requests": 5, "window_ms": 60000},
    "api": {"max_requests": 100, "window_ms": 60000},
    "notify": {"max_requests": 20, "window_ms": 60000},
    "wechatbot": {"max_requests": 20, "window_ms": 60000},
    "email": {"max_requests": 20, "window_ms": 60000},
}


class RateLimitSettings(InfrastructureSettings):
    """Fixed-window rate limiting configuration.

    Each limit type maps to a ``max_requests`` / ``window_ms`` pair. Types that
    are not listed fall back to ``default_type``. Delivery runs use the channel
    type (``wechatbot``, ``email``) as the limit type.

    Environment Variables:
        RATE_LIMIT_RULES: JSON object overriding the rules, e.g.
            '{"api": {"max_requests": 50, "window_ms": 60000}}'
        RATE_LIMIT_DEFAULT_TYPE: Rule used for unknown limit types (default: api)
        RATE_LIMIT_FAILURE_POLICY: "open" allows calls when the store is
            unreachable, "closed" rejects them (default: open)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        login_rule = settings.rate_limit.rules["login"]
        ```
    """

    rules: Dict[str, Dict[str, int]] = Field(
        default_factory=lambda: {k: dict(v) for k, v in DEFAULT_RATE_LIMIT_RULES.items()},
        alias="RATE_LIMIT_RULES",
    )
    default_type: str = Field(default="api", alias="RATE_LIMIT_DEFAULT_TYPE")
    failure_policy: str = Field(default="open", alias="RATE_LIMIT_FAILURE_POLICY")

    @field_validator("rules", mode="before")
    @classmethod
    def merge_with_defaults(cls, v: Any) -> Dict[str, Dict[str, int]]:
        """Overlay configured rules on the built-in ones.

        Entries missing either key or carrying non-positive values are ignored.
        """
        merged = {k: dict(v) for k, v in DEFAULT_RATE_LIMIT_RULES.items()}
        if not isinstance(v, dict):
            return merged
        for limit_type, rule in v.items():
            if not isinstance(rule, dict):
                continue
            try:
                max_requests = int(rule["max_requests"])
                window_ms = int(rule["window_ms"])
            except (KeyError, TypeError, ValueError):
                continue
            if max_requests <= 0 or window_ms <= 0:
                continue
            merged[str(limit_type)] = {
                "max_requests": max_requests,
                "window_ms": window_ms,
            }
        return merged

    @field_validator("failure_policy", mode="before")
    @classmethod
    def validate_failure_policy(cls, v: Any) -> str:
        """Accept only 'open' or 'closed'."""
        value = str(v or "open").strip().lower()
        if value not in ("open", "closed"):
            raise ValueError(f"Unsupported rate limit failure policy: {v}")
        return value
