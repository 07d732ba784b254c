"""Example: use the service layer directly (no Flask).

Prints this month's work minutes per employee, split into the default bands.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.shift_attendance.shift_attendance.container import build_container
from src.shift_attendance.shift_attendance.core.constants import DEFAULT_REPORT_BANDS
from src.shift_attendance.shift_attendance.core.enums import ReportMode
from src.shift_attendance.shift_attendance.timecalc.model import Band


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    summary = container.work_hours_report_service.build_band_summary(
        mode=ReportMode.MONTHLY,
        period=date.today().strftime("%Y-%m"),
        bands=[Band.from_triple(t) for t in DEFAULT_REPORT_BANDS],
    )
    for row in summary.rows:
        print(row["name"], row["total_hours"], row["bands"])


if __name__ == "__main__":
    main()
