from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

import pytest

from src.shift_attendance.shift_attendance.attendance.model import AttendanceRecord
from src.shift_attendance.shift_attendance.container import build_services
from src.shift_attendance.shift_attendance.employees.model import Employee
from src.shift_attendance.shift_attendance.shift_requests.model import ShiftRequest
from src.shift_attendance.shift_attendance.shifts.model import FinalShift


@dataclass
class InMemoryEmployees:
    employees: list[Employee]

    def list_all(self):
        return list(self.employees)

    def get_by_manager_number(self, manager_number: str) -> Optional[Employee]:
        return next((e for e in self.employees if e.manager_number == str(manager_number)), None)


@dataclass
class InMemoryShifts:
    shifts: list[FinalShift]
    upserted: list[FinalShift] = field(default_factory=list)

    def list_for_date(self, work_date: date):
        return [s for s in self.shifts if s.work_date == work_date]

    def list_dates(self):
        return sorted({s.work_date for s in self.shifts})

    def list_for_employee(self, manager_number: str):
        return sorted((s for s in self.shifts if s.manager_number == manager_number), key=lambda s: s.work_date)

    def upsert(self, shift: FinalShift) -> int:
        for i, s in enumerate(self.shifts):
            if (s.work_date, s.manager_number) == (shift.work_date, shift.manager_number):
                stored = replace(shift, shift_id=s.shift_id)
                self.shifts[i] = stored
                break
        else:
            stored = replace(shift, shift_id=200 + len(self.upserted))
            self.shifts.append(stored)
        self.upserted.append(stored)
        return stored.shift_id


@dataclass
class InMemoryShiftRequests:
    requests: list[ShiftRequest] = field(default_factory=list)
    updated: list[ShiftRequest] = field(default_factory=list)

    def list_for_employee(self, manager_number: str):
        return sorted((r for r in self.requests if r.manager_number == manager_number), key=lambda r: r.work_date)

    def insert(self, shift_request: ShiftRequest) -> int:
        new_id = 300 + len(self.requests)
        self.requests.append(replace(shift_request, request_id=new_id))
        return new_id

    def update(self, shift_request: ShiftRequest) -> bool:
        for i, r in enumerate(self.requests):
            if r.request_id == shift_request.request_id:
                self.requests[i] = shift_request
                self.updated.append(shift_request)
                return True
        return False


@dataclass
class InMemoryAttendance:
    records: list[AttendanceRecord] = field(default_factory=list)
    inserted: list[AttendanceRecord] = field(default_factory=list)
    updated: list[AttendanceRecord] = field(default_factory=list)
    last_range: Optional[dict] = None

    def list_for_date(self, work_date: date):
        return [r for r in self.records if r.work_date == work_date]

    def list_range(self, *, start=None, end=None, manager_number=None):
        self.last_range = {"start": start, "end": end, "manager_number": manager_number}
        items = [
            r
            for r in self.records
            if (start is None or r.work_date >= start)
            and (end is None or r.work_date <= end)
            and (manager_number is None or r.manager_number == manager_number)
        ]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def insert(self, record: AttendanceRecord) -> int:
        new_id = 100 + len(self.inserted)
        stored = replace(record, attendance_id=new_id)
        self.inserted.append(stored)
        self.records.append(stored)
        return new_id

    def update(self, record: AttendanceRecord) -> bool:
        for i, r in enumerate(self.records):
            if r.attendance_id == record.attendance_id:
                self.records[i] = record
                self.updated.append(record)
                return True
        return False


@pytest.fixture
def employees():
    return InMemoryEmployees(
        [
            Employee(manager_number="001", name="Alice"),
            Employee(manager_number="002", name="Bob"),
        ]
    )


@pytest.fixture
def shifts():
    day = date(2026, 1, 5)
    return InMemoryShifts(
        [
            FinalShift(shift_id=1, work_date=day, manager_number="003", start_time=None, end_time=None, is_off=True),
            FinalShift(shift_id=2, work_date=day, manager_number="001", start_time="09:00", end_time="17:00", store="Main"),
            FinalShift(shift_id=3, work_date=day, manager_number="002", start_time="22:00", end_time="02:00", store="Main"),
        ]
    )


@pytest.fixture
def attendance():
    return InMemoryAttendance(
        [
            AttendanceRecord(
                attendance_id=7,
                work_date=date(2026, 1, 5),
                manager_number="002",
                actual_start="22:15",
                actual_end="02:00",
                break_minutes=30,
                work_minutes=195,
                store="Main",
            )
        ]
    )


@pytest.fixture
def month_records():
    """January 2026 records plus one in February and one never worked."""
    return InMemoryAttendance(
        [
            AttendanceRecord(7, date(2026, 1, 5), "001", "09:00", "17:00", break_minutes=60, work_minutes=420),
            AttendanceRecord(8, date(2026, 1, 6), "001", "20:00", "23:00", work_minutes=180),
            AttendanceRecord(9, date(2026, 1, 5), "002", "18:00", "02:00", work_minutes=480),
            AttendanceRecord(10, date(2026, 1, 7), "002", None, None, work_minutes=0),
            AttendanceRecord(11, date(2026, 2, 2), "002", "10:00", "12:00", work_minutes=120),
        ]
    )


@pytest.fixture
def shift_requests():
    return InMemoryShiftRequests(
        [
            ShiftRequest(1, date(2026, 1, 5), "001", "09:00", "17:00", store="Main"),
            ShiftRequest(2, date(2026, 1, 12), "001", "18:00", "23:00", remarks="after class"),
            ShiftRequest(3, date(2026, 1, 12), "002", "22:00", "02:00"),
        ]
    )


@pytest.fixture
def container(employees, shifts, shift_requests, month_records):
    return build_services(
        employees_repo=employees,
        shifts_repo=shifts,
        shift_requests_repo=shift_requests,
        attendance_repo=month_records,
    )
