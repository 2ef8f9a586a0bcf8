from __future__ import annotations

from typing import Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_employee(r: dict) -> Employee:
        return Employee(
            user_id=str(r["user_id"]),
            name=r["name"],
            email=r["email"],
            role=Role(r["role"]),
            phone=r.get("phone"),
        )

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, name, email, role, phone FROM employees ORDER BY name")
            return [self._to_employee(r) for r in fetchall(cur)]
