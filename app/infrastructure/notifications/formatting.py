"""Reminder message rendering."""

from datetime import datetime, timezone
from typing import Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from infrastructure.notifications.models import Subscription

REMINDER_TITLE = "Subscription reminder"


def _zone(name: str):
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def describe_days_left(expiry: datetime, now: datetime) -> str:
    """Human-readable distance between ``now`` and ``expiry`` in whole days."""
    days = (expiry.date() - now.date()).days
    if days < 0:
        return f"expired {-days} days ago"
    if days == 0:
        return "expires today"
    return f"{days} days remaining"


def build_reminder_subject(subscriptions: Sequence[Subscription]) -> str:
    count = len(subscriptions)
    noun = "subscription" if count == 1 else "subscriptions"
    return f"{REMINDER_TITLE}: {count} {noun} need attention"


def build_reminder_message(
    subscriptions: Sequence[Subscription],
    now: Optional[datetime] = None,
    tz_name: str = "UTC",
    markdown: bool = False,
) -> str:
    """Render one reminder covering a batch of subscriptions.

    One line per subscription with its name, expiry date, days remaining
    and auto-renew flag. Dates are shown in ``tz_name``.

    Example:
        - Netflix | expires 2025-01-01 | 3 days remaining | auto-renew: yes
    """
    zone = _zone(tz_name)
    now = (now or datetime.now(timezone.utc)).astimezone(zone)

    title = f"**{REMINDER_TITLE}**" if markdown else REMINDER_TITLE
    lines = [title, ""]
    for subscription in subscriptions:
        name = f"**{subscription.name}**" if markdown else subscription.name
        parts = [name]
        expiry = subscription.expiry_date
        if expiry is not None:
            if expiry.tzinfo is None:
                expiry = expiry.replace(tzinfo=timezone.utc)
            expiry = expiry.astimezone(zone)
            parts.append(f"expires {expiry.strftime('%Y-%m-%d')}")
            parts.append(describe_days_left(expiry, now))
        else:
            parts.append("no expiry date")
        parts.append(f"auto-renew: {'yes' if subscription.auto_renew else 'no'}")
        lines.append("- " + " | ".join(parts))

    return "\n".join(lines)
