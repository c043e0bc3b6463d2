# services/views.py
"""Display values derived for the admin dashboard."""

from datetime import datetime, timezone
from typing import Optional


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops the offset)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def community_status(is_disabled: Optional[bool], approval_status: Optional[str]) -> str:
    if is_disabled:
        return "disabled"
    if approval_status == "pending":
        return "pending"
    if approval_status == "rejected":
        return "rejected"
    return "active"


def time_remaining(scheduled: datetime, now: Optional[datetime] = None) -> str:
    """Human label for the time left before a scheduled deletion."""
    now = as_utc(now or datetime.now(timezone.utc))
    diff = as_utc(scheduled) - now

    if diff.total_seconds() <= 0:
        return "Overdue"

    hours = int(diff.total_seconds() // 3600)
    days = hours // 24

    if days > 0:
        return f"{days} day{'s' if days > 1 else ''} remaining"
    return f"{hours} hour{'s' if hours != 1 else ''} remaining"
