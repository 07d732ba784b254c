from __future__ import annotations

from typing import Iterable, Optional

from ..core.constants import MINUTES_PER_DAY
from .calculator import minutes_since_midnight
from .model import Band, ShiftInterval


def is_time_in_band(value: Optional[str], band: Band) -> bool:
    """Half-open membership test, aware of bands that wrap midnight."""
    if not value:
        return False

    t = minutes_since_midnight(value)
    start = minutes_since_midnight(band.start)
    end = minutes_since_midnight(band.end)
    if end <= start:
        end += MINUTES_PER_DAY
        if t < start:
            t += MINUTES_PER_DAY
    return start <= t < end


def classify_by_start(interval: ShiftInterval, bands: Iterable[Band]) -> Optional[Band]:
    """First band containing the shift start, if any."""
    for band in bands:
        if is_time_in_band(interval.start, band):
            return band
    return None


def is_working_at(interval: ShiftInterval, value: str) -> bool:
    """Whether the shift covers the clock time ``value`` (timeline cells)."""
    if interval.is_open:
        return False

    start = minutes_since_midnight(interval.start)
    end = minutes_since_midnight(interval.end)
    t = minutes_since_midnight(value)
    if end < start:
        end += MINUTES_PER_DAY
    if t < start and end >= MINUTES_PER_DAY:
        t += MINUTES_PER_DAY
    return start <= t < end


def is_off_day(start: Optional[str], end: Optional[str], is_off: bool = False) -> bool:
    if is_off or not start or not end:
        return True
    return start[:5] == "00:00" and end[:5] == "00:00"
