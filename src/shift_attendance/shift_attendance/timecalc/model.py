from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

# label -> minutes, in the order the bands were supplied
BandAllocation = Dict[str, int]


@dataclass(frozen=True)
class ShiftInterval:
    """One worked stretch: "HH:MM" start/end plus flat break minutes.

    A missing start or end means "no shift", never midnight.
    """

    start: Optional[str]
    end: Optional[str]
    break_minutes: int = 0

    @property
    def is_open(self) -> bool:
        return not self.start or not self.end


@dataclass(frozen=True)
class Band:
    """Named sub-day window used to bucket worked minutes.

    ``end <= start`` means the band runs past midnight (e.g. 22:00-05:00).
    """

    label: str
    start: str
    end: str

    @classmethod
    def from_triple(cls, triple) -> "Band":
        label, start, end = triple
        return cls(label=str(label), start=str(start), end=str(end))
