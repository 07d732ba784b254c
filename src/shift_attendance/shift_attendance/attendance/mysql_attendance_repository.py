from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, time_to_hhmm
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, date, manager_number, actual_start, actual_end, break_minutes, work_minutes, store"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        work_date=r["date"],
        manager_number=str(r["manager_number"]),
        actual_start=time_to_hhmm(r.get("actual_start")),
        actual_end=time_to_hhmm(r.get("actual_end")),
        break_minutes=int(r.get("break_minutes") or 0),
        work_minutes=int(r.get("work_minutes") or 0),
        store=r.get("store") or "",
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE date=%s", (work_date,))
            return [_to_record(r) for r in fetchall(cur)]

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        manager_number: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_minutes IS NOT NULL"]
        params: list[object] = []

        if start is not None:
            clauses.append("date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("date <= %s")
            params.append(end)
        if manager_number is not None:
            clauses.append("manager_number=%s")
            params.append(str(manager_number))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {where}
                ORDER BY date DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def insert(self, record: AttendanceRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(date, manager_number, actual_start, actual_end, break_minutes, work_minutes, store)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.work_date,
                    record.manager_number,
                    record.actual_start or None,
                    record.actual_end or None,
                    int(record.break_minutes),
                    int(record.work_minutes),
                    record.store,
                ),
            )
            return int(cur.lastrowid)

    def update(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET date=%s, manager_number=%s, actual_start=%s, actual_end=%s,
                    break_minutes=%s, work_minutes=%s, store=%s
                WHERE id=%s
                """,
                (
                    record.work_date,
                    record.manager_number,
                    record.actual_start or None,
                    record.actual_end or None,
                    int(record.break_minutes),
                    int(record.work_minutes),
                    record.store,
                    int(record.attendance_id),
                ),
            )
            return cur.rowcount > 0
