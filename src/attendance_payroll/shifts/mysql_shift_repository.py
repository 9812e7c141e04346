from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Shift
from .repository import ShiftRepository

_COLUMNS = "shift_id, shift_name, start_time_1, end_time_1, start_time_2, end_time_2, expected_hours, has_break"


def _row_to_shift(r: Dict[str, Any]) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        start_1=normalize_mysql_time(r["start_time_1"]),
        end_1=normalize_mysql_time(r["end_time_1"]),
        start_2=normalize_mysql_time(r.get("start_time_2")),
        end_2=normalize_mysql_time(r.get("end_time_2")),
        expected_hours=float(r.get("expected_hours") or 0),
        has_break=bool(r.get("has_break")),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts ORDER BY shift_id")
            return [_row_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def create(self, shift: Shift) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(shift_name, start_time_1, end_time_1, start_time_2, end_time_2, expected_hours, has_break)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    shift.shift_name,
                    shift.start_1,
                    shift.end_1,
                    shift.start_2,
                    shift.end_2,
                    shift.expected_hours,
                    int(shift.has_break),
                ),
            )
            return int(cur.lastrowid)

    def update(self, shift: Shift) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET shift_name=%s, start_time_1=%s, end_time_1=%s, start_time_2=%s, end_time_2=%s,
                    expected_hours=%s, has_break=%s
                WHERE shift_id=%s
                """,
                (
                    shift.shift_name,
                    shift.start_1,
                    shift.end_1,
                    shift.start_2,
                    shift.end_2,
                    shift.expected_hours,
                    int(shift.has_break),
                    int(shift.shift_id),
                ),
            )
            cur.execute("SELECT 1 AS found FROM shifts WHERE shift_id=%s", (int(shift.shift_id),))
            return fetchone(cur) is not None
