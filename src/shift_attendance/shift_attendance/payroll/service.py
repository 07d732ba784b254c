from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, parse_iso_date, parse_month, week_of_month
from ..core.constants import UNCLASSIFIED_SLOT
from ..core.enums import GroupBy, ReportMode
from ..core.exceptions import NotFoundError
from ..employees.model import display_name
from ..employees.repository import EmployeeRepository
from ..timecalc.display import format_minutes
from ..timecalc.model import Band
from ..timecalc.slots import classify_by_start
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True)
class BandSummary:
    bands: list[str]
    rows: list[dict]


@dataclass(frozen=True)
class StaffSummary:
    manager_number: str
    name: str
    groups: list[dict]
    total: dict


class WorkHoursReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()

    def _period_bounds(self, mode: ReportMode, period: str) -> tuple[date, date]:
        if mode == ReportMode.DAILY:
            day = parse_iso_date(period)
            return day, day
        return month_bounds(*parse_month(period))

    def list_periods(self, mode: ReportMode) -> list[str]:
        """Days (YYYY-MM-DD) or months (YYYY-MM) that have worked records, newest first."""
        periods = set()
        for r in self._attendance.list_range():
            if r.work_minutes <= 0:
                continue
            periods.add(r.work_date.isoformat() if mode == ReportMode.DAILY else r.work_date.strftime("%Y-%m"))
        return sorted(periods, reverse=True)

    def build_band_summary(
        self,
        *,
        mode: ReportMode,
        period: str,
        bands: Sequence[Band],
        manager_number: Optional[str] = None,
    ) -> BandSummary:
        start, end = self._period_bounds(mode, period)
        records = self._attendance.list_range(start=start, end=end, manager_number=manager_number)
        names = {e.manager_number: e.name for e in self._employees.list_all()}
        labels = [b.label for b in bands]

        totals: dict[str, dict] = {}
        for r in records:
            if r.work_minutes <= 0:
                continue

            t = totals.get(r.manager_number)
            if not t:
                t = {
                    "manager_number": r.manager_number,
                    "name": display_name(names, r.manager_number),
                    "total_minutes": 0,
                    "bands": {label: 0 for label in labels},
                }
                totals[r.manager_number] = t

            t["total_minutes"] += self._calculator.worked_minutes(r)
            for label, minutes in self._calculator.band_minutes(r, bands).items():
                t["bands"][label] += minutes

        rows = sorted(totals.values(), key=lambda x: x["total_minutes"], reverse=True)
        for row in rows:
            row["total_hours"] = format_minutes(row["total_minutes"])

        logger.debug("Band summary %s %s: %d employees", mode.value, period, len(rows))
        return BandSummary(bands=labels, rows=rows)

    def build_staff_summary(
        self,
        *,
        manager_number: str,
        year: int,
        month: int,
        group_by: GroupBy = GroupBy.MONTHLY,
        slots: Sequence[Band] = (),
    ) -> StaffSummary:
        employee = self._employees.get_by_manager_number(manager_number)
        if not employee:
            raise NotFoundError("Không tìm thấy mã nhân viên")

        start, end = month_bounds(year, month)
        records = list(self._attendance.list_range(start=start, end=end, manager_number=employee.manager_number))

        groups = [
            {"key": key, **self._stats(items), "records": [self._to_ui(r) for r in items]}
            for key, items in self._group(records, group_by, slots)
        ]
        total = self._stats(records)
        # Overall day count covers worked days only.
        total["work_days"] = sum(1 for r in records if r.work_minutes > 0)
        return StaffSummary(
            manager_number=employee.manager_number,
            name=employee.name,
            groups=groups,
            total=total,
        )

    def _group(self, records: list[AttendanceRecord], group_by: GroupBy, slots: Sequence[Band]):
        if group_by == GroupBy.ALL:
            return [("all", records)]

        grouped: dict[str, list[AttendanceRecord]] = {}
        sort_keys: dict[str, object] = {}
        for r in records:
            d = r.work_date
            if group_by == GroupBy.DAILY:
                key = f"{d.isoformat()} ({WEEKDAY_LABELS[d.weekday()]})"
                sort_keys[key] = d
            elif group_by == GroupBy.WEEKLY:
                week = week_of_month(d)
                key = f"{d.month:02d} week {week}"
                sort_keys[key] = week
            elif group_by == GroupBy.MONTHLY:
                key = d.strftime("%Y-%m")
                sort_keys[key] = key
            else:
                band = classify_by_start(r.interval, slots)
                key = f"{band.label} ({band.start}-{band.end})" if band else UNCLASSIFIED_SLOT
            grouped.setdefault(key, []).append(r)

        if group_by == GroupBy.TIME:
            return list(grouped.items())
        return sorted(grouped.items(), key=lambda kv: sort_keys[kv[0]], reverse=True)

    def _stats(self, records: Sequence[AttendanceRecord]) -> dict:
        total = sum(self._calculator.worked_minutes(r) for r in records)
        return {
            "hours": total // 60,
            "minutes": total % 60,
            "total_minutes": total,
            "work_days": len(records),
        }

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "actual_start": r.actual_start or "-",
            "actual_end": r.actual_end or "-",
            "break_minutes": r.break_minutes,
            "worked_hours": format_minutes(self._calculator.worked_minutes(r)),
            "store": r.store,
        }
