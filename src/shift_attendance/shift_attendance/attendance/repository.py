from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        manager_number: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records with computed work minutes, newest first.

        Open-ended when ``start``/``end`` are omitted.
        """

        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        """Overwrite by ``attendance_id``; last write wins."""

        raise NotImplementedError
