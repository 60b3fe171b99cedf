from __future__ import annotations

import re
from datetime import datetime, timezone

from clockwise_sdk.models import Notification

FILTERS = ("all", "unread")

# Postgres trims trailing zeros from fractional seconds.
_FRACTION = re.compile(r"\.(\d+)")


def _six_digits(match: re.Match[str]) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def _parse(timestamp: str) -> datetime:
    text = _FRACTION.sub(_six_digits, timestamp.replace("Z", "+00:00"), count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_time_ago(timestamp: str | None, now: datetime | None = None) -> str:
    if not timestamp:
        return ""
    created = _parse(timestamp)
    current = now or datetime.now(timezone.utc)
    elapsed = (current - created).total_seconds()
    minutes = int(elapsed // 60)
    hours = int(elapsed // 3600)
    days = int(elapsed // 86400)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return created.strftime("%b %d")


def filter_notifications(items: list[Notification], selected: str = "all") -> list[Notification]:
    if selected == "all":
        return list(items)
    if selected == "unread":
        return [item for item in items if not item.is_read]
    return [item for item in items if item.type == selected]


def unread_count(items: list[Notification]) -> int:
    return sum(1 for item in items if not item.is_read)
