from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Sequence

from ..common.validators import require_non_negative_int
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import display_name
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRepository
from ..timecalc.calculator import compute_worked_minutes
from ..timecalc.display import clean_time, trim_time
from .model import AttendanceRecord, AttendanceSheetRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("actual_start", "actual_end", "break_minutes")


class AttendanceService:
    """Daily attendance sheet: load from finalized shifts, edit, save."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        shifts: ShiftRepository,
        employees: EmployeeRepository,
    ):
        self._attendance = attendance
        self._shifts = shifts
        self._employees = employees

    def list_sheet_dates(self) -> Sequence[date]:
        return self._shifts.list_dates()

    def build_sheet(self, work_date: date) -> list[AttendanceSheetRow]:
        finals = self._shifts.list_for_date(work_date)
        existing = {r.manager_number: r for r in self._attendance.list_for_date(work_date)}
        names = {e.manager_number: e.name for e in self._employees.list_all()}

        rows: list[AttendanceSheetRow] = []
        for shift in finals:
            record = existing.get(shift.manager_number)
            scheduled_start = trim_time(shift.start_time)
            scheduled_end = trim_time(shift.end_time)
            rows.append(
                AttendanceSheetRow(
                    manager_number=shift.manager_number,
                    name=display_name(names, shift.manager_number),
                    scheduled_start=scheduled_start,
                    scheduled_end=scheduled_end,
                    actual_start=trim_time(record.actual_start) if record and record.actual_start else scheduled_start,
                    actual_end=trim_time(record.actual_end) if record and record.actual_end else scheduled_end,
                    break_minutes=record.break_minutes if record else 0,
                    store=shift.store,
                    is_off=shift.off,
                    attendance_id=record.attendance_id if record else None,
                )
            )

        # Working rows first; sort is stable so shift order is kept.
        rows.sort(key=lambda row: row.is_off)
        return rows

    def update_row(self, row: AttendanceSheetRow, field: str, value: Any) -> AttendanceSheetRow:
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"Không thể sửa trường {field!r}")

        if field == "break_minutes":
            return replace(row, break_minutes=require_non_negative_int(value, "Thời gian nghỉ"))

        # The editor may send overnight ends as extended hours ("26:00").
        return replace(row, **{field: clean_time(value)})

    def save_sheet(self, work_date: date, rows: Sequence[AttendanceSheetRow]) -> int:
        """Persist every edited row; returns how many records were written.

        Rows without any actual time are skipped. No conflict detection:
        whatever is saved last wins.
        """

        saved = 0
        for row in rows:
            break_minutes = require_non_negative_int(row.break_minutes, "Thời gian nghỉ")
            work_minutes = compute_worked_minutes(replace(row, break_minutes=break_minutes).interval)

            if work_minutes == 0 and not row.actual_start and not row.actual_end:
                continue

            record = AttendanceRecord(
                attendance_id=row.attendance_id,
                work_date=work_date,
                manager_number=row.manager_number,
                actual_start=row.actual_start or None,
                actual_end=row.actual_end or None,
                break_minutes=break_minutes,
                work_minutes=work_minutes,
                store=row.store,
            )

            if row.attendance_id:
                if not self._attendance.update(record):
                    raise NotFoundError(f"Không tìm thấy bản ghi chấm công của {row.name}")
                saved += 1
            elif work_minutes > 0 or (row.actual_start and row.actual_end):
                self._attendance.insert(record)
                saved += 1

        logger.info("Saved %d attendance records for %s", saved, work_date.isoformat())
        return saved
