"""Timestamp formatting utilities."""

from datetime import date, datetime
from typing import Optional, Union

TimestampLike = Union[datetime, date, str]


def now() -> str:
    """Current local time as a filesystem-safe string (e.g., '20251114_123456')."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def format_timestamp(
    value: TimestampLike,
    fmt: str = "%Y-%m-%d %H:%M:%S",
    relative: bool = False,
    reference: Optional[datetime] = None,
) -> str:
    """
    Format a datetime, date, or ISO 8601 string to a readable form.

    Args:
        value: datetime, date, or ISO 8601 formatted timestamp string
        fmt: strftime format for absolute output
        relative: If True, show relative time (e.g., "2h ago")
        reference: Point in time relative output is measured from (default: now)

    Returns:
        Human-readable timestamp. Unparseable strings are returned unchanged.

    Examples:
        format_timestamp("2025-11-13T18:45:40.572549")
        # "2025-11-13 18:45:40"

        format_timestamp(date(2025, 11, 13), fmt="%B %d, %Y")
        # "November 13, 2025"
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)

    if relative:
        return _format_relative_time(value, reference)
    return value.strftime(fmt)


def _format_relative_time(dt: datetime, reference: Optional[datetime] = None) -> str:
    """
    Format datetime as relative time in compact format.

    - Seconds: "30s ago"
    - Minutes: "15m ago"
    - Hours: "2h ago"
    - Days: "5d ago"
    """
    reference = reference or datetime.now(dt.tzinfo)
    diff = reference - dt

    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"
