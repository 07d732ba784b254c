from __future__ import annotations

import pytest

from src.shift_attendance.shift_attendance.container import build_services
from src.shift_attendance.shift_attendance.main import create_app


class BrokenRepository:
    """Every repository call fails like a lost database connection."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise RuntimeError("database is down")

        return fail


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


@pytest.fixture
def failing_client(monkeypatch, employees):
    monkeypatch.setenv("APP_ENV", "testing")
    broken = build_services(
        employees_repo=employees,
        shifts_repo=BrokenRepository(),
        shift_requests_repo=BrokenRepository(),
        attendance_repo=BrokenRepository(),
    )
    return create_app(container=broken).test_client()


def test_attendance_dates(client):
    resp = client.get("/api/attendance/dates")

    assert resp.status_code == 200
    assert resp.get_json()["dates"] == ["2026-01-05"]


def test_attendance_sheet(client):
    resp = client.get("/api/attendance/2026-01-05")

    assert resp.status_code == 200
    rows = resp.get_json()["rows"]
    assert [r["manager_number"] for r in rows] == ["001", "002", "003"]
    assert rows[1]["attendance_id"] == 9
    assert rows[1]["display_end"] == "26:00"
    assert rows[0]["display_end"] == "17:00"


def test_attendance_sheet_bad_date(client):
    resp = client.get("/api/attendance/2026-99-99")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_attendance_save(client, container):
    payload = {
        "rows": [
            {"manager_number": "001", "actual_start": "09:00:00", "actual_end": "17:00", "break_minutes": "60"},
            {"manager_number": "003", "actual_start": "", "actual_end": ""},
        ]
    }
    resp = client.post("/api/attendance/2026-01-05", json=payload)

    assert resp.status_code == 200
    assert resp.get_json()["saved"] == 1
    inserted = container.attendance_repo.inserted[0]
    assert (inserted.actual_start, inserted.work_minutes) == ("09:00", 420)


def test_attendance_save_rejects_bad_time(client):
    payload = {"rows": [{"manager_number": "001", "actual_start": "25:99", "actual_end": "17:00"}]}
    resp = client.post("/api/attendance/2026-01-05", json=payload)

    assert resp.status_code == 400


def test_band_report_default_bands(client):
    resp = client.get("/api/reports/bands?mode=monthly&period=2026-01")

    data = resp.get_json()
    assert resp.status_code == 200
    assert data["bands"] == ["morning", "afternoon", "night"]
    assert data["rows"][0]["bands"]["night"] == 180


def test_band_report_custom_bands(client):
    resp = client.get("/api/reports/bands?mode=daily&period=2026-01-05&band=late,22:00,05:00&band=day,09:00,17:00")

    data = resp.get_json()
    assert data["bands"] == ["day", "late"]
    by_number = {r["manager_number"]: r["bands"] for r in data["rows"]}
    assert by_number["001"] == {"day": 420, "late": 0}
    assert by_number["002"] == {"day": 0, "late": 240}


@pytest.mark.parametrize("query", ["mode=yearly", "band=broken", "band=x,10:00,99:00", "mode=monthly&period=2026"])
def test_band_report_rejects_bad_query(client, query):
    assert client.get(f"/api/reports/bands?{query}").status_code == 400


def test_band_report_csv(client):
    resp = client.get("/api/reports/bands.csv?mode=monthly&period=2026-01")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == "manager_number,name,total_minutes,total_hours,morning,afternoon,night"
    assert lines[1] == "001,Alice,600,10:00,158,263,180"


def test_periods(client):
    resp = client.get("/api/reports/periods?mode=monthly")

    assert resp.get_json()["periods"] == ["2026-02", "2026-01"]


def test_staff_report(client):
    resp = client.get("/api/reports/staff/001?year=2026&month=1&group_by=all")

    data = resp.get_json()
    assert resp.status_code == 200
    assert data["groups"][0]["key"] == "all"
    assert data["total"]["total_minutes"] == 600


def test_staff_report_unknown_employee(client):
    assert client.get("/api/reports/staff/999?year=2026&month=1").status_code == 404


@pytest.mark.parametrize(
    "url",
    [
        "/api/attendance/dates",
        "/api/reports/periods?mode=daily",
        "/api/reports/bands.csv?mode=monthly&period=2026-01",
        "/api/shifts/2026-01-05/timeline",
        "/api/shift-requests/001",
    ],
)
def test_repository_failure_returns_json_error(failing_client, url):
    resp = failing_client.get(url)

    assert resp.status_code == 500
    data = resp.get_json()
    assert data["success"] is False
    assert data["message"]


def test_staff_report_total_skips_unworked_days(client):
    resp = client.get("/api/reports/staff/002?year=2026&month=1&group_by=daily")

    assert resp.get_json()["total"]["work_days"] == 1


def test_list_final_shifts(client):
    resp = client.get("/api/shifts/2026-01-05")

    shifts = {s["manager_number"]: s for s in resp.get_json()["shifts"]}
    assert resp.status_code == 200
    assert shifts["002"]["display_end"] == "26:00"
    assert shifts["003"]["is_off"] is True


def test_finalize_shifts(client, container):
    payload = {"shifts": [{"manager_number": "001", "start_time": "10:00", "end_time": "25:00", "store": "Main"}]}
    resp = client.post("/api/shifts/2026-01-05", json=payload)

    assert resp.status_code == 200
    assert resp.get_json()["saved"] == 1
    assert container.shifts_repo.upserted[0].end_time == "01:00"


def test_finalize_shifts_requires_store(client, container):
    payload = {"shifts": [{"manager_number": "001", "start_time": "10:00", "end_time": "18:00"}]}
    resp = client.post("/api/shifts/2026-01-05", json=payload)

    assert resp.status_code == 400
    assert container.shifts_repo.upserted == []


def test_shift_timeline(client):
    resp = client.get("/api/shifts/2026-01-05/timeline")

    data = resp.get_json()
    assert resp.status_code == 200
    assert len(data["hours"]) == 24
    assert data["rows"][0]["manager_number"] == "001"
    assert data["rows"][0]["working"][9] is True
    assert data["coverage"][23] == 1


def test_submit_shift_requests(client, container):
    payload = {"requests": [{"date": "2026-01-20", "start_time": "09:00", "end_time": "17:00", "remarks": "any store"}]}
    resp = client.post("/api/shift-requests/002", json=payload)

    assert resp.status_code == 201
    assert resp.get_json()["ids"] == [303]
    assert container.shift_requests_repo.requests[-1].remarks == "any store"


def test_submit_shift_requests_rejects_bad_date(client):
    payload = {"requests": [{"date": "20-01-2026", "start_time": "09:00", "end_time": "17:00"}]}

    assert client.post("/api/shift-requests/002", json=payload).status_code == 400


def test_editable_shift_requests(client):
    resp = client.get("/api/shift-requests/001")

    assert [r["id"] for r in resp.get_json()["requests"]] == [2]
    assert client.get("/api/shift-requests/999").status_code == 404


def test_edit_shift_requests(client, container):
    resp = client.put("/api/shift-requests/001", json={"requests": [{"id": 2, "start_time": "17:00", "end_time": "22:00"}]})

    assert resp.status_code == 200
    assert resp.get_json()["updated"] == 1
    assert container.shift_requests_repo.updated[0].start_time == "17:00"


def test_edit_finalized_shift_request_is_rejected(client):
    resp = client.put("/api/shift-requests/001", json={"requests": [{"id": 1, "start_time": "10:00", "end_time": "18:00"}]})

    assert resp.status_code == 400
