from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..timecalc.model import ShiftInterval
from ..timecalc.slots import is_off_day


@dataclass(frozen=True)
class FinalShift:
    """A manager-finalized shift for one employee on one day."""

    shift_id: Optional[int]
    work_date: date
    manager_number: str
    start_time: Optional[str]
    end_time: Optional[str]
    is_off: bool = False
    store: str = ""

    @property
    def off(self) -> bool:
        return is_off_day(self.start_time, self.end_time, self.is_off)

    @property
    def interval(self) -> ShiftInterval:
        if self.off:
            return ShiftInterval(start=None, end=None)
        return ShiftInterval(start=self.start_time, end=self.end_time)
