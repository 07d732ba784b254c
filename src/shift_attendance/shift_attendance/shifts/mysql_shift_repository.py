from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, time_to_hhmm
from .model import FinalShift
from .repository import ShiftRepository

_COLUMNS = "id, date, manager_number, start_time, end_time, is_off, store"


def _to_shift(r: dict) -> FinalShift:
    return FinalShift(
        shift_id=int(r["id"]),
        work_date=r["date"],
        manager_number=str(r["manager_number"]),
        start_time=time_to_hhmm(r.get("start_time")),
        end_time=time_to_hhmm(r.get("end_time")),
        is_off=bool(r.get("is_off")),
        store=r.get("store") or "",
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, work_date: date) -> Sequence[FinalShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM final_shifts
                WHERE date=%s
                ORDER BY manager_number
                """,
                (work_date,),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def list_dates(self) -> Sequence[date]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT date FROM final_shifts ORDER BY date")
            return [r["date"] for r in fetchall(cur)]

    def list_for_employee(self, manager_number: str) -> Sequence[FinalShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM final_shifts WHERE manager_number=%s ORDER BY date",
                (str(manager_number),),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def upsert(self, shift: FinalShift) -> int:
        # Needs UNIQUE(date, manager_number); LAST_INSERT_ID(id) makes lastrowid work on update too.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO final_shifts(date, manager_number, start_time, end_time, is_off, store)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    id=LAST_INSERT_ID(id),
                    start_time=VALUES(start_time),
                    end_time=VALUES(end_time),
                    is_off=VALUES(is_off),
                    store=VALUES(store)
                """,
                (
                    shift.work_date,
                    shift.manager_number,
                    shift.start_time or None,
                    shift.end_time or None,
                    bool(shift.is_off),
                    shift.store,
                ),
            )
            return int(cur.lastrowid)
