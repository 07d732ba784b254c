from __future__ import annotations

from typing import Sequence

from .base import PayrollCalculator
from ...attendance.model import AttendanceRecord
from ...timecalc.calculator import allocate_to_bands, compute_worked_minutes
from ...timecalc.model import Band, BandAllocation


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: (out - in) - break_minutes, not below 0, overnight aware.

    Band minutes share the break proportionally across the shift.
    """

    def worked_minutes(self, record: AttendanceRecord) -> int:
        return compute_worked_minutes(record.interval)

    def band_minutes(self, record: AttendanceRecord, bands: Sequence[Band]) -> BandAllocation:
        return allocate_to_bands(record.interval, bands)
