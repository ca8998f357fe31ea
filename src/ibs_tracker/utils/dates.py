"""Date and timestamp helpers.

Entry timestamps are integer milliseconds since the epoch. Calendar-day logic
always uses the local timezone.
"""

import time
from datetime import datetime
from typing import Optional

from .exceptions import InvalidTimestampError

# Accepted formats for edited timestamps, tried before ISO 8601
INPUT_FORMATS = (
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def to_local_datetime(timestamp: int) -> datetime:
    """Naive local datetime for an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp / 1000)


def to_timestamp(dt: datetime) -> int:
    """Epoch milliseconds for a datetime. Naive values are local time."""
    return int(dt.timestamp() * 1000)


def is_same_local_day(timestamp: int, now: Optional[datetime] = None) -> bool:
    """Check whether a timestamp falls on the same local calendar day as `now`."""
    now = now or datetime.now()
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    return to_local_datetime(timestamp).date() == now.date()


def format_date_string(timestamp: int) -> str:
    """Local calendar date of a timestamp as YYYY-MM-DD."""
    return to_local_datetime(timestamp).strftime("%Y-%m-%d")


def format_short_date(date_string: str) -> str:
    """Shorten a YYYY-MM-DD string to MM/DD; other strings pass through."""
    parts = date_string.split("-")
    if len(parts) == 3:
        return f"{parts[1]}/{parts[2]}"
    return date_string


def format_for_input(timestamp: int) -> str:
    """Format a timestamp for a datetime-local input (YYYY-MM-DDTHH:MM)."""
    return to_local_datetime(timestamp).strftime("%Y-%m-%dT%H:%M")


def format_display(timestamp: int) -> str:
    """Human-readable local date and time, e.g. 'Jan 05, 2024 09:30 AM'."""
    return to_local_datetime(timestamp).strftime("%b %d, %Y %I:%M %p")


def format_day_marker(dt: datetime) -> str:
    """Day marker used to deduplicate reminders, e.g. 'Fri Oct 16 2026'."""
    return dt.strftime("%a %b %d %Y")


def parse_input_timestamp(value: Optional[str]) -> int:
    """
    Parse an edited date/time into epoch milliseconds.

    Accepts the datetime-local format (YYYY-MM-DDTHH:MM), the same with a space
    separator or seconds, and full ISO 8601. Naive values are local time.

    Raises:
        InvalidTimestampError: if the value cannot be parsed.
    """
    if value is None or not value.strip():
        raise InvalidTimestampError("Invalid date and time selected. Please check the format.")

    text = value.strip()
    for fmt in INPUT_FORMATS:
        try:
            return to_timestamp(datetime.strptime(text, fmt))
        except (ValueError, OverflowError, OSError):
            continue

    try:
        return to_timestamp(datetime.fromisoformat(text))
    except (ValueError, OverflowError, OSError) as exc:
        raise InvalidTimestampError(
            f"Invalid date and time selected: {value!r}. Please check the format."
        ) from exc
