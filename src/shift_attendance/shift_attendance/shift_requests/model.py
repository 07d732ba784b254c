from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ShiftRequest:
    """Hours an employee asks to work on a day, before the manager finalizes."""

    request_id: Optional[int]
    work_date: date
    manager_number: str
    start_time: Optional[str]
    end_time: Optional[str]
    store: str = ""
    remarks: str = ""
