from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT manager_number, name FROM users ORDER BY name")
            return [Employee(manager_number=str(r["manager_number"]), name=r["name"]) for r in fetchall(cur)]

    def get_by_manager_number(self, manager_number: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT manager_number, name FROM users WHERE manager_number=%s", (str(manager_number),))
            r = fetchone(cur)
            if not r:
                return None
            return Employee(manager_number=str(r["manager_number"]), name=r["name"])
