from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, time_to_hhmm
from .model import ShiftRequest
from .repository import ShiftRequestRepository


class MySQLShiftRequestRepository(ShiftRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, manager_number: str) -> Sequence[ShiftRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, date, manager_number, start_time, end_time, store, remarks
                FROM shifts
                WHERE manager_number=%s
                ORDER BY date
                """,
                (str(manager_number),),
            )
            return [
                ShiftRequest(
                    request_id=int(r["id"]),
                    work_date=r["date"],
                    manager_number=str(r["manager_number"]),
                    start_time=time_to_hhmm(r.get("start_time")),
                    end_time=time_to_hhmm(r.get("end_time")),
                    store=r.get("store") or "",
                    remarks=r.get("remarks") or "",
                )
                for r in fetchall(cur)
            ]

    def insert(self, shift_request: ShiftRequest) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(date, manager_number, start_time, end_time, store, remarks)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    shift_request.work_date,
                    shift_request.manager_number,
                    shift_request.start_time or None,
                    shift_request.end_time or None,
                    shift_request.store,
                    shift_request.remarks,
                ),
            )
            return int(cur.lastrowid)

    def update(self, shift_request: ShiftRequest) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET start_time=%s, end_time=%s, store=%s, remarks=%s
                WHERE id=%s
                """,
                (
                    shift_request.start_time or None,
                    shift_request.end_time or None,
                    shift_request.store,
                    shift_request.remarks,
                    int(shift_request.request_id),
                ),
            )
            return cur.rowcount > 0
