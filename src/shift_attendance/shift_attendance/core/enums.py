from __future__ import annotations

from enum import Enum


class ReportMode(str, Enum):
    """Granularity of the manager band summary."""

    DAILY = "daily"
    MONTHLY = "monthly"


class GroupBy(str, Enum):
    """How an employee's own work-hour view is grouped."""

    ALL = "all"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    TIME = "time"
