from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...timecalc.model import Band, BandAllocation


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_minutes(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    @abstractmethod
    def band_minutes(self, record: AttendanceRecord, bands: Sequence[Band]) -> BandAllocation:
        raise NotImplementedError
