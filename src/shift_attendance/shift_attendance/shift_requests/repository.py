from __future__ import annotations

from typing import Protocol, Sequence

from .model import ShiftRequest


class ShiftRequestRepository(Protocol):
    def list_for_employee(self, manager_number: str) -> Sequence[ShiftRequest]:
        """Requests of one employee, oldest date first."""

        raise NotImplementedError

    def insert(self, shift_request: ShiftRequest) -> int:
        raise NotImplementedError

    def update(self, shift_request: ShiftRequest) -> bool:
        raise NotImplementedError
