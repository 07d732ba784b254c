from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..timecalc.model import ShiftInterval


@dataclass(frozen=True)
class AttendanceRecord:
    """Recorded clock-in/out for one employee on one day."""

    attendance_id: Optional[int]
    work_date: date
    manager_number: str
    actual_start: Optional[str]
    actual_end: Optional[str]
    break_minutes: int = 0
    work_minutes: int = 0
    store: str = ""

    @property
    def interval(self) -> ShiftInterval:
        return ShiftInterval(start=self.actual_start, end=self.actual_end, break_minutes=self.break_minutes)


@dataclass
class AttendanceSheetRow:
    """Editable row of the manager's daily attendance sheet.

    Read-model merging a finalized shift with its attendance record (if any).
    """

    manager_number: str
    name: str
    scheduled_start: str
    scheduled_end: str
    actual_start: str
    actual_end: str
    break_minutes: int = 0
    store: str = ""
    is_off: bool = False
    attendance_id: Optional[int] = None

    @property
    def interval(self) -> ShiftInterval:
        return ShiftInterval(
            start=self.actual_start or None,
            end=self.actual_end or None,
            break_minutes=self.break_minutes,
        )
