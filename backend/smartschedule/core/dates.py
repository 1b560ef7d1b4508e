from __future__ import annotations

from datetime import date, datetime, timezone
import math

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
DAY_NAMES = WEEKDAYS + ("Saturday", "Sunday")

_TIME_AGO_UNITS = (
    (31536000, "years"),
    (2592000, "months"),
    (86400, "days"),
    (3600, "hours"),
    (60, "minutes"),
)


def _as_aware(value: datetime | str) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_time_ago(value: datetime | str, *, now: datetime | None = None) -> str:
    """Render a timestamp relative to ``now`` using the largest unit that exceeds one."""
    reference = _as_aware(now) if now is not None else datetime.now(timezone.utc)
    seconds = math.floor((reference - _as_aware(value)).total_seconds())
    for unit_seconds, label in _TIME_AGO_UNITS:
        interval = seconds / unit_seconds
        if interval > 1:
            return f"{math.floor(interval)} {label} ago"
    return f"{seconds} seconds ago"


def get_today_info(today: date | None = None) -> tuple[str, str]:
    """Return the ISO date string and the weekday name for ``today`` (local time by default)."""
    current = today or datetime.now().date()
    return current.isoformat(), DAY_NAMES[current.weekday()]
