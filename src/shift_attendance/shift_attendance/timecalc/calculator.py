"""Work-minute arithmetic shared by every report and attendance screen.

Times are "HH:MM" strings with hours in [0, 23]. A span whose end is
earlier than its start is taken to cross midnight; no dates are involved.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from ..core.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR
from ..core.exceptions import ValidationError
from .model import Band, BandAllocation, ShiftInterval


def minutes_since_midnight(value: Optional[str]) -> int:
    """Convert "HH:MM" (or "HH:MM:SS") to minutes after 00:00.

    Empty input yields 0. "24:00" is accepted as the end-of-day boundary.
    """

    if not value:
        return 0

    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM")
    try:
        hour = int(parts[0])
        minute = int(parts[1])
        second = int(parts[2]) if len(parts) == 3 else 0
    except ValueError:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM") from None

    if not 0 <= second <= 59 or not 0 <= minute <= 59 or not 0 <= hour <= 24 or (hour == 24 and minute != 0):
        raise ValidationError(f"Time out of range: {value!r}")
    return hour * MINUTES_PER_HOUR + minute


def _break_minutes(interval: ShiftInterval) -> int:
    minutes = int(interval.break_minutes or 0)
    if minutes < 0:
        raise ValidationError("Break minutes must not be negative")
    return minutes


def _span(interval: ShiftInterval) -> tuple[int, int]:
    start = minutes_since_midnight(interval.start)
    end = minutes_since_midnight(interval.end)
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def _band_span(band: Band) -> tuple[int, int]:
    start = minutes_since_midnight(band.start)
    end = minutes_since_midnight(band.end)
    if end <= start:
        end += MINUTES_PER_DAY
    return start, end


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_worked_minutes(interval: ShiftInterval) -> int:
    """Net minutes for one shift: raw span minus break, never negative."""

    if interval.is_open:
        return 0

    start, end = _span(interval)
    return max(0, (end - start) - _break_minutes(interval))


def allocate_to_bands(interval: ShiftInterval, bands: Iterable[Band]) -> BandAllocation:
    """Split a shift's worked minutes across ``bands``.

    Break time is spread evenly over the whole shift, so each band loses
    the same share of its overlap. Bands are independent of each other;
    overlapping bands count the same minutes twice.
    """

    bands = list(bands)
    if interval.is_open:
        return {band.label: 0 for band in bands}

    start, end = _span(interval)
    total = end - start
    break_minutes = _break_minutes(interval)

    allocation: BandAllocation = {}
    for band in bands:
        band_start, band_end = _band_span(band)
        overlap_start = max(start, band_start)
        overlap_end = min(end, band_end)
        if overlap_end <= overlap_start:
            allocation[band.label] = 0
            continue

        worked = float(overlap_end - overlap_start)
        if total > 0 and break_minutes > 0:
            worked -= worked * (break_minutes / total)
        allocation[band.label] = max(0, _round_half_up(worked))
    return allocation
