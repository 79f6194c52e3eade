"""Small helpers for timestamps, handles and display formatting."""

import re
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO-8601 timestamp, assuming UTC when naive."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime | None) -> str | None:
    """Format a datetime for storage."""
    return value.isoformat() if value else None


def slugify_handle(text: str) -> str:
    """Turn an email local part or display name into a handle.

    Keeps lowercase letters, digits and underscores; falls back to "user".
    """
    handle = text.split("@")[0].lower()
    handle = re.sub(r"[^a-z0-9_]+", "_", handle).strip("_")
    return handle[:30] or "user"


def time_ago(value: datetime | None, now: datetime | None = None) -> str:
    """Human-friendly relative time ("just now", "5m", "3h", "2d", date)."""
    if value is None:
        return ""
    now = now or utc_now()
    seconds = int((now - value).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    if seconds < 7 * 86400:
        return f"{seconds // 86400}d"
    return value.strftime("%b %d, %Y")


def format_duration(minutes: int) -> str:
    """Format a workout duration in minutes ("45 min", "1h 30m")."""
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m" if rest else f"{hours}h"
