from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .payroll.service import WorkHoursReportService
from .shift_requests.mysql_shift_request_repository import MySQLShiftRequestRepository
from .shift_requests.repository import ShiftRequestRepository
from .shift_requests.service import ShiftRequestService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ScheduleService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    shifts_repo: ShiftRepository
    shift_requests_repo: ShiftRequestRepository
    attendance_repo: AttendanceRepository

    schedule_service: ScheduleService
    shift_request_service: ShiftRequestService
    attendance_service: AttendanceService
    work_hours_report_service: WorkHoursReportService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    shifts_repo: ShiftRepository,
    shift_requests_repo: ShiftRequestRepository,
    attendance_repo: AttendanceRepository,
) -> Container:
    schedule_service = ScheduleService(shifts_repo, employees_repo)
    shift_request_service = ShiftRequestService(shift_requests_repo, shifts_repo, employees_repo)
    attendance_service = AttendanceService(attendance_repo, shifts_repo, employees_repo)
    work_hours_report_service = WorkHoursReportService(attendance_repo, employees_repo)

    return Container(
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        shift_requests_repo=shift_requests_repo,
        attendance_repo=attendance_repo,
        schedule_service=schedule_service,
        shift_request_service=shift_request_service,
        attendance_service=attendance_service,
        work_hours_report_service=work_hours_report_service,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        shift_requests_repo=MySQLShiftRequestRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
