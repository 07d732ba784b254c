from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Sequence

from ..core.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR
from ..core.exceptions import ValidationError
from ..employees.model import display_name
from ..employees.repository import EmployeeRepository
from ..timecalc.display import clean_time, to_extended_end
from ..timecalc.slots import is_working_at
from .model import FinalShift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

TIMELINE_HOURS = tuple(f"{h:02d}:00" for h in range(MINUTES_PER_DAY // MINUTES_PER_HOUR))


@dataclass(frozen=True)
class Timeline:
    hours: list[str]
    rows: list[dict]
    coverage: list[int]


class ScheduleService:
    """Manager schedule for a day: finalize entries and lay them out per hour."""

    def __init__(self, shifts: ShiftRepository, employees: EmployeeRepository):
        self._shifts = shifts
        self._employees = employees

    def list_for_date(self, work_date: date) -> Sequence[FinalShift]:
        return self._shifts.list_for_date(work_date)

    def finalize(self, work_date: date, entries: Sequence[FinalShift]) -> int:
        """Create or overwrite the finalized shift of each employee on ``work_date``.

        Every entry is validated before anything is written. Existing rows for
        the same (date, manager_number) are replaced; last write wins.
        """

        names = {e.manager_number: e.name for e in self._employees.list_all()}
        shifts = [self._normalize(work_date, entry, names) for entry in entries]
        for shift in shifts:
            self._shifts.upsert(shift)

        logger.info("Finalized %d shifts for %s", len(shifts), work_date.isoformat())
        return len(shifts)

    def _normalize(self, work_date: date, entry: FinalShift, names: dict) -> FinalShift:
        if not entry.manager_number:
            raise ValidationError("Ca làm thiếu mã nhân viên")
        manager_number = str(entry.manager_number)
        store = (entry.store or "").strip()
        if not store:
            raise ValidationError(f"Chưa chọn cửa hàng cho {display_name(names, manager_number)}")

        if entry.is_off:
            start, end = None, None
        else:
            # Overnight ends may arrive as extended hours ("26:00").
            start, end = clean_time(entry.start_time), clean_time(entry.end_time)
            if not start or not end:
                raise ValidationError(f"Ca của {display_name(names, manager_number)} thiếu giờ bắt đầu hoặc kết thúc")

        return replace(
            entry,
            work_date=work_date,
            manager_number=manager_number,
            start_time=start,
            end_time=end,
            is_off=bool(entry.is_off),
            store=store,
        )

    def timeline(self, work_date: date) -> Timeline:
        names = {e.manager_number: e.name for e in self._employees.list_all()}
        hours = list(TIMELINE_HOURS)

        rows = []
        for shift in self._shifts.list_for_date(work_date):
            interval = shift.interval
            rows.append(
                {
                    "manager_number": shift.manager_number,
                    "name": display_name(names, shift.manager_number),
                    "store": shift.store,
                    "is_off": shift.off,
                    "start_time": "" if shift.off else shift.start_time,
                    "end_time": "" if shift.off else to_extended_end(shift.start_time, shift.end_time),
                    "working": [is_working_at(interval, h) for h in hours],
                }
            )
        rows.sort(key=lambda r: r["is_off"])

        coverage = [sum(1 for r in rows if r["working"][i]) for i in range(len(hours))]
        return Timeline(hours=hours, rows=rows, coverage=coverage)
