"""Conversions between stored/display time strings and the canonical form.

Internally a time is "HH:MM" with the hour in [0, 23]; a shift that ends
after midnight is recognised by ``end < start``. Screens that edit
overnight shifts show the end as an *extended* hour ("26:00" for 02:00 the
next day). That notation only exists at the edges and is converted here.
"""

from __future__ import annotations

from typing import Optional

from ..core.constants import EXTENDED_HOUR_LIMIT, MINUTES_PER_HOUR
from ..core.exceptions import ValidationError
from .calculator import minutes_since_midnight


def trim_time(value: Optional[str]) -> str:
    """'08:30:00' -> '08:30', '9:30:00' -> '9:30'; empty values become ''."""
    if not value:
        return ""
    return ":".join(str(value).strip().split(":")[:2])


def format_minutes(total_minutes: int) -> str:
    if total_minutes < 0:
        return "00:00"
    return f"{total_minutes // MINUTES_PER_HOUR:02d}:{total_minutes % MINUTES_PER_HOUR:02d}"


def to_extended_end(start: str, end: str) -> str:
    """Render an overnight end time with hours past 23 (22:00-02:00 -> '26:00')."""
    start_m = minutes_since_midnight(start)
    end_m = minutes_since_midnight(end)
    if end_m >= start_m:
        return trim_time(end)
    end_m += 24 * MINUTES_PER_HOUR
    return format_minutes(end_m)


def from_extended(value: str) -> str:
    """Fold an extended-hour time back into [00:00, 23:59]."""
    parts = str(value).strip().split(":")
    if len(parts) != 2:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM")
    try:
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM") from None

    if not 0 <= hour < EXTENDED_HOUR_LIMIT or not 0 <= minute <= 59:
        raise ValidationError(f"Time out of range: {value!r}")
    return f"{hour % 24:02d}:{minute:02d}"


def clean_time(value: Optional[str]) -> str:
    """Normalize an edited time cell: trimmed, extended hours folded, '' when empty."""
    cleaned = trim_time(value)
    return from_extended(cleaned) if cleaned else ""
