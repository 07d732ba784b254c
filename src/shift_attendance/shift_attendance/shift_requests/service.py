from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Sequence

from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRepository
from ..timecalc.display import clean_time
from .model import ShiftRequest
from .repository import ShiftRequestRepository

logger = logging.getLogger(__name__)


class ShiftRequestService:
    """Staff side of scheduling: submit wished hours and edit them until finalized."""

    def __init__(
        self,
        requests: ShiftRequestRepository,
        shifts: ShiftRepository,
        employees: EmployeeRepository,
    ):
        self._requests = requests
        self._shifts = shifts
        self._employees = employees

    def _require_employee(self, manager_number: str) -> Employee:
        employee = self._employees.get_by_manager_number(manager_number)
        if not employee:
            raise NotFoundError("Không tìm thấy mã nhân viên")
        return employee

    def _finalized_dates(self, manager_number: str) -> set[date]:
        return {s.work_date for s in self._shifts.list_for_employee(manager_number)}

    def _clean(self, shift_request: ShiftRequest) -> ShiftRequest:
        start = clean_time(shift_request.start_time)
        end = clean_time(shift_request.end_time)
        if bool(start) != bool(end):
            raise ValidationError(f"Ngày {shift_request.work_date.isoformat()}: cần nhập cả giờ bắt đầu và kết thúc")
        return replace(
            shift_request,
            start_time=start or None,
            end_time=end or None,
            store=(shift_request.store or "").strip(),
            remarks=(shift_request.remarks or "").strip(),
        )

    def submit(self, manager_number: str, entries: Sequence[ShiftRequest]) -> list[int]:
        employee = self._require_employee(manager_number)
        if not entries:
            raise ValidationError("Chưa có ca nào để gửi")

        cleaned = [
            self._clean(replace(e, request_id=None, manager_number=employee.manager_number)) for e in entries
        ]
        ids = [self._requests.insert(r) for r in cleaned]
        logger.info("Employee %s submitted %d shift requests", employee.manager_number, len(ids))
        return ids

    def editable(self, manager_number: str) -> list[ShiftRequest]:
        """Requests whose day the manager has not finalized yet."""
        employee = self._require_employee(manager_number)
        finalized = self._finalized_dates(employee.manager_number)
        return [r for r in self._requests.list_for_employee(employee.manager_number) if r.work_date not in finalized]

    def edit(self, manager_number: str, edits: Sequence[ShiftRequest]) -> int:
        employee = self._require_employee(manager_number)
        finalized = self._finalized_dates(employee.manager_number)
        current = {r.request_id: r for r in self._requests.list_for_employee(employee.manager_number)}

        updated = []
        for edit in edits:
            existing = current.get(edit.request_id)
            if existing is None:
                raise NotFoundError(f"Không tìm thấy yêu cầu ca {edit.request_id}")
            if existing.work_date in finalized:
                raise ValidationError(f"Ca ngày {existing.work_date.isoformat()} đã được chốt, không thể sửa")
            updated.append(
                self._clean(
                    replace(
                        existing,
                        start_time=edit.start_time,
                        end_time=edit.end_time,
                        store=edit.store,
                        remarks=edit.remarks,
                    )
                )
            )

        for r in updated:
            if not self._requests.update(r):
                raise NotFoundError(f"Không tìm thấy yêu cầu ca {r.request_id}")

        logger.info("Employee %s edited %d shift requests", employee.manager_number, len(updated))
        return len(updated)
