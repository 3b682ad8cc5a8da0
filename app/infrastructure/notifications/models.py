"""Notification pipeline core models.

Subscriptions arrive already filtered to the ones due for a reminder. The
router turns them into distribution maps, the executor turns those into
delivery reports and failure log entries.

Uses Pydantic BaseModel for:
- Accepting the stored camelCase subscription shape by alias
- Normalising ``|``-delimited override fields into lists once, at the boundary
- JSON round-tripping of failure log entries through the key-value store
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

TARGET_DELIMITER = "|"


def split_targets(value: Any) -> List[str]:
    """Normalise a delimited string (or list of them) into a list of targets.

    Entries are trimmed and empty ones dropped. Anything that is neither a
    string nor a list yields an empty list.

    Example:
        split_targets(" a@x.com | |b@x.com") == ["a@x.com", "b@x.com"]
    """
    if isinstance(value, str):
        items = value.split(TARGET_DELIMITER)
    elif isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if isinstance(item, str):
                items.extend(item.split(TARGET_DELIMITER))
    else:
        return []
    return [item.strip() for item in items if item.strip()]


class ChannelType(Enum):
    """Supported delivery mechanisms.

    Values are the identifiers used in the stored configuration and as
    rate limit types.
    """

    WECHATBOT = "wechatbot"
    EMAIL = "email"


class Subscription(BaseModel):
    """A subscription due for a reminder.

    Owned by the subscription store; the pipeline only reads it.

    Attributes:
        id: Subscription identifier
        name: Display name
        expiry_date: When the subscription expires
        is_active: Active flag
        auto_renew: Whether the subscription renews automatically
        wechat_bot_keys: Bot webhook keys this subscription is pinned to
        email_addresses: Recipient addresses this subscription is pinned to

    Example:
        subscription = Subscription.model_validate(
            {
                "id": "2",
                "name": "Bot1 Sub",
                "expiryDate": "2025-01-01T00:00:00Z",
                "wechatBotKeys": "key1",
            }
        )
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    expiry_date: Optional[datetime] = Field(default=None, alias="expiryDate")
    is_active: bool = Field(default=True, alias="isActive")
    auto_renew: bool = Field(default=False, alias="autoRenew")
    wechat_bot_keys: List[str] = Field(default_factory=list, alias="wechatBotKeys")
    email_addresses: List[str] = Field(default_factory=list, alias="emailAddresses")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("wechat_bot_keys", "email_addresses", mode="before")
    @classmethod
    def split_override(cls, v: Any) -> List[str]:
        return split_targets(v)


@dataclass(frozen=True)
class DefaultTargets:
    """Route to every global target of the channel."""


@dataclass(frozen=True)
class ExplicitTargets:
    """Route only to the listed targets, in order, without duplicates."""

    targets: Tuple[str, ...]


Targets = Union[DefaultTargets, ExplicitTargets]

# Target (webhook URL or email address) -> subscriptions routed there, in input order
DistributionMap = Dict[str, List[Subscription]]


class FailureLogEntry(BaseModel):
    """One failed delivery of one subscription to one target.

    Attributes:
        timestamp: When the failure was recorded (UTC)
        channel: Channel type value, e.g. "wechatbot"
        target: Webhook URL or email address
        subscription_id: Identifier of the affected subscription
        error: Human-readable failure description
    """

    timestamp: datetime
    channel: str
    target: str
    subscription_id: str
    error: str


class DeliveryReport(BaseModel):
    """Outcome of delivering one distribution map.

    Counters are per target: ``total`` targets in the map, of which
    ``attempted`` reached the transport and ended ``succeeded`` or
    ``failed``; the rest were ``rate_limited`` or ``skipped``.
    """

    channel: str
    total: int = 0
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    rate_limited: int = 0
    skipped: int = 0
    failures: List[FailureLogEntry] = Field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.succeeded == self.total


class NotificationRunReport(BaseModel):
    """Outcome of one reminder run across all enabled channels."""

    correlation_id: str
    subscriptions: int = 0
    reports: List[DeliveryReport] = Field(default_factory=list)

    def for_channel(self, channel: str) -> Optional[DeliveryReport]:
        for report in self.reports:
            if report.channel == channel:
                return report
        return None

    @property
    def succeeded(self) -> int:
        return sum(r.succeeded for r in self.reports)

    @property
    def failed(self) -> int:
        return sum(r.failed for r in self.reports)

    @property
    def rate_limited(self) -> int:
        return sum(r.rate_limited for r in self.reports)

    @property
    def skipped(self) -> int:
        return sum(r.skipped for r in self.reports)

    @property
    def total(self) -> int:
        return sum(r.total for r in self.reports)
