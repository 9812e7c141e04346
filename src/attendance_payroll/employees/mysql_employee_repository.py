from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.employee_id, e.name, e.email, e.assigned_shift_id, e.created_at, s.shift_name
    FROM employees e
    LEFT JOIN shifts s ON s.shift_id = e.assigned_shift_id
"""


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    shift_id = r.get("assigned_shift_id")
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        email=r["email"],
        assigned_shift_id=int(shift_id) if shift_id is not None else None,
        created_at=r.get("created_at"),
        shift_name=r.get("shift_name"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY e.name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.email=%s", (email,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def create(self, *, name: str, email: str, assigned_shift_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO employees(name, email, assigned_shift_id) VALUES(%s,%s,%s)",
                (name, email, assigned_shift_id),
            )
            return int(cur.lastrowid)

    def update(self, *, employee_id: int, name: str, email: str, assigned_shift_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET name=%s, email=%s, assigned_shift_id=%s WHERE employee_id=%s",
                (name, email, assigned_shift_id, int(employee_id)),
            )
            cur.execute("SELECT 1 AS found FROM employees WHERE employee_id=%s", (int(employee_id),))
            return fetchone(cur) is not None

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
