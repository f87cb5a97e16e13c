"""
Fixed timestamp format used by silence requests.

Request timestamps are always UTC with millisecond precision, e.g.
``2019-10-27T20:34:28.132Z``. Arithmetic is plain fixed-point addition of
hours: there are no calendar or DST adjustments, so shifting a timestamp is
deterministic and reversible.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from amsilence.core.errors import TimeParseError
from amsilence.domain.models import Interval

TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

_TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")

INTERVAL_HOURS: dict[str, int] = {
    Interval.hour: 1,
    Interval.day: 24,
    Interval.week: 168,
}


def parse_timestamp(value: str) -> datetime:
    """Parse a request timestamp into an aware UTC datetime."""
    if not isinstance(value, str) or not _TIMESTAMP_PATTERN.match(value):
        raise TimeParseError(f"invalid timestamp '{value}'", details={"timestamp": value})
    try:
        parsed = datetime.strptime(value, TIME_FORMAT)
    except ValueError as exc:
        raise TimeParseError(f"invalid timestamp '{value}': {exc}", details={"timestamp": value}) from exc
    return parsed.replace(tzinfo=timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a datetime in the request format (milliseconds, UTC)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    # strftime does not zero-pad years below 1000 on every platform
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}Z"
    )


def interval_duration(interval: str) -> timedelta:
    """Length of one repeat step; unknown or empty codes mean no shift."""
    return timedelta(hours=INTERVAL_HOURS.get(interval, 0))


def add_duration(timestamp: str, interval: str, count: int) -> str:
    """
    Shift ``timestamp`` by ``count`` repeat intervals.

    Args:
        timestamp: Timestamp in the request format
        interval: Repeat interval code ("h", "d", "w" or "")
        count: Number of intervals to add

    Returns:
        The shifted timestamp in the request format

    Raises:
        TimeParseError: If the timestamp is malformed or the result is out of range
    """
    parsed = parse_timestamp(timestamp)
    try:
        shifted = parsed + interval_duration(interval) * count
    except OverflowError as exc:
        raise TimeParseError(
            f"timestamp '{timestamp}' shifted by {count}{interval} is out of range",
            details={"timestamp": timestamp},
        ) from exc
    return format_timestamp(shifted)
