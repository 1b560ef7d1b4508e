from __future__ import annotations

import re

from smartschedule.core.exceptions import InvalidTimeFormatError

MINUTES_PER_DAY = 24 * 60

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_to_minutes(value: str) -> int:
    if not isinstance(value, str):
        raise InvalidTimeFormatError(value)
    match = TIME_PATTERN.match(value.strip())
    if match is None:
        raise InvalidTimeFormatError(value)
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormatError(value)
    return hours * 60 + minutes


def format_minutes(total_minutes: int) -> str:
    wrapped = total_minutes % MINUTES_PER_DAY
    return f"{wrapped // 60:02d}:{wrapped % 60:02d}"


def add_minutes(time: str, minutes: int) -> str:
    """Add ``minutes`` to an ``HH:MM`` clock value, wrapping silently past midnight.

    >>> add_minutes("23:50", 20)
    '00:10'
    """
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 0:
        raise InvalidTimeFormatError(minutes, reason="Minutes must be a non-negative integer")
    return format_minutes(parse_time_to_minutes(time) + minutes)


def format_time_range(start: str, end: str) -> str:
    return f"{start} - {end}"
