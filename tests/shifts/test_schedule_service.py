from __future__ import annotations

from datetime import date

import pytest

from src.shift_attendance.shift_attendance.core.exceptions import ValidationError
from src.shift_attendance.shift_attendance.shifts.model import FinalShift
from src.shift_attendance.shift_attendance.shifts.service import ScheduleService

DAY = date(2026, 1, 5)


@pytest.fixture
def service(shifts, employees):
    return ScheduleService(shifts, employees)


def _entry(manager_number, start, end, *, is_off=False, store="Main"):
    return FinalShift(
        shift_id=None,
        work_date=DAY,
        manager_number=manager_number,
        start_time=start,
        end_time=end,
        is_off=is_off,
        store=store,
    )


def test_finalize_overwrites_existing_and_adds_new(service, shifts):
    saved = service.finalize(DAY, [_entry("001", "10:00", "26:00"), _entry("004", "08:00:00", "12:00")])

    assert saved == 2
    alice = next(s for s in shifts.list_for_date(DAY) if s.manager_number == "001")
    assert (alice.shift_id, alice.start_time, alice.end_time) == (2, "10:00", "02:00")
    new = shifts.upserted[1]
    assert (new.shift_id, new.start_time, new.work_date) == (201, "08:00", DAY)


def test_finalize_day_off_drops_times(service, shifts):
    service.finalize(DAY, [_entry("002", "22:00", "02:00", is_off=True)])

    bob = shifts.upserted[0]
    assert bob.is_off
    assert (bob.start_time, bob.end_time) == (None, None)


@pytest.mark.parametrize(
    "entry",
    [
        _entry("001", "09:00", "17:00", store=" "),
        _entry("001", "09:00", None),
        _entry("001", "09:00", "36:00"),
        _entry("", "09:00", "17:00"),
    ],
)
def test_finalize_rejects_invalid_entries_without_writing(service, shifts, entry):
    with pytest.raises(ValidationError):
        service.finalize(DAY, [_entry("002", "22:00", "02:00"), entry])

    assert shifts.upserted == []


def test_timeline_marks_hours_worked(service):
    timeline = service.timeline(DAY)

    assert len(timeline.hours) == 24
    assert timeline.hours[9] == "09:00"
    alice, bob, off = timeline.rows
    assert alice["name"] == "Alice"
    assert [h for h, on in zip(timeline.hours, alice["working"]) if on][0] == "09:00"
    assert sum(alice["working"]) == 8
    assert bob["end_time"] == "26:00"
    assert bob["working"][0] and bob["working"][1] and not bob["working"][2]
    assert bob["working"][22] and bob["working"][23]
    assert off["is_off"] and not any(off["working"])
    assert timeline.coverage[9] == 1
    assert timeline.coverage[0] == 1
    assert timeline.coverage[20] == 0
