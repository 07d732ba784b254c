from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import FinalShift


class ShiftRepository(Protocol):
    def list_for_date(self, work_date: date) -> Sequence[FinalShift]:
        raise NotImplementedError

    def list_dates(self) -> Sequence[date]:
        """Dates that have at least one finalized shift, ascending."""

        raise NotImplementedError

    def list_for_employee(self, manager_number: str) -> Sequence[FinalShift]:
        raise NotImplementedError

    def upsert(self, shift: FinalShift) -> int:
        """Insert or overwrite the shift keyed by (date, manager_number); returns its id."""

        raise NotImplementedError
