from __future__ import annotations

import calendar
from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Ngày không hợp lệ: {value!r}") from None


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValidationError(f"Tháng không hợp lệ: {value!r}") from None
    return parsed.year, parsed.month


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Tháng không hợp lệ: {month!r}")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def week_of_month(value: date) -> int:
    """Calendar row of ``value`` in a Sunday-first month grid (1-based)."""
    first = value.replace(day=1)
    first_weekday = (first.weekday() + 1) % 7  # Sunday = 0
    return -(-(value.day + first_weekday) // 7)

