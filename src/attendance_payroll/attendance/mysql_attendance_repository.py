from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..core.exceptions import RecordNotFound, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SELFIE_FIELDS, TIMESTAMP_FIELDS, AttendanceRecord, AttendanceReportRow
from .repository import WRITABLE_FIELDS, AttendanceRepository

_RECORD_COLUMNS = ", ".join(
    ("record_id", "employee_id", "work_date", "shift_id")
    + TIMESTAMP_FIELDS
    + SELFIE_FIELDS
    + ("work_hours", "salary")
)


def _opt_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _opt_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        shift_id=int(r["shift_id"]),
        check_in_1=from_utc_naive(r.get("check_in_1")),
        check_out_1=from_utc_naive(r.get("check_out_1")),
        check_in_2=from_utc_naive(r.get("check_in_2")),
        check_out_2=from_utc_naive(r.get("check_out_2")),
        selfie_check_in_1=r.get("selfie_check_in_1"),
        selfie_check_out_1=r.get("selfie_check_out_1"),
        selfie_check_in_2=r.get("selfie_check_in_2"),
        selfie_check_out_2=r.get("selfie_check_out_2"),
        work_hours=_opt_float(r.get("work_hours")),
        salary=_opt_int(r.get("salary")),
    )


def _to_db_value(name: str, value: Any) -> Any:
    if name in TIMESTAMP_FIELDS and isinstance(value, datetime):
        return to_utc_naive(value)
    return value


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, cur, employee_id: int, work_date: date, *, for_update: bool = False):
        cur.execute(
            f"""
            SELECT {_RECORD_COLUMNS}
            FROM attendance_records
            WHERE employee_id=%s AND work_date=%s
            {"FOR UPDATE" if for_update else ""}
            """,
            (int(employee_id), work_date),
        )
        return fetchone(cur)

    def get_record(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            r = self._select_one(cur, employee_id, work_date)
            return _row_to_record(r) if r else None

    def create_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        shift_id: int,
        check_in_1: datetime,
        selfie: Optional[str] = None,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, shift_id, check_in_1, selfie_check_in_1)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, int(shift_id), to_utc_naive(check_in_1), selfie),
            )
            return _row_to_record(self._select_one(cur, employee_id, work_date))

    def update_record(self, employee_id: int, work_date: date, fields: Mapping[str, Any]) -> AttendanceRecord:
        unknown = set(fields) - WRITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown attendance fields: {', '.join(sorted(unknown))}")

        with db_cursor(self._conn_factory) as (_, cur):
            if not self._select_one(cur, employee_id, work_date, for_update=True):
                raise RecordNotFound(f"No attendance record for employee {employee_id} on {work_date}")

            if fields:
                names = sorted(fields)
                assignments = ", ".join(f"{name}=%s" for name in names)
                params = [_to_db_value(name, fields[name]) for name in names]
                cur.execute(
                    f"UPDATE attendance_records SET {assignments} WHERE employee_id=%s AND work_date=%s",
                    (*params, int(employee_id), work_date),
                )
            return _row_to_record(self._select_one(cur, employee_id, work_date))

    def delete_record(self, employee_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            return cur.rowcount > 0

    def list_records(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("ar.employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    e.employee_id, e.name AS employee_name, e.email AS employee_email,
                    s.shift_name,
                    ar.work_date, ar.check_in_1, ar.check_out_1, ar.check_in_2, ar.check_out_2,
                    ar.work_hours, ar.salary
                FROM attendance_records ar
                JOIN employees e ON e.employee_id = ar.employee_id
                LEFT JOIN shifts s ON s.shift_id = ar.shift_id
                WHERE {where}
                ORDER BY ar.work_date DESC, e.name ASC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    employee_id=int(r["employee_id"]),
                    employee_name=r["employee_name"],
                    employee_email=r["employee_email"],
                    shift_name=r.get("shift_name"),
                    work_date=r["work_date"],
                    check_in_1=from_utc_naive(r.get("check_in_1")),
                    check_out_1=from_utc_naive(r.get("check_out_1")),
                    check_in_2=from_utc_naive(r.get("check_in_2")),
                    check_out_2=from_utc_naive(r.get("check_out_2")),
                    work_hours=_opt_float(r.get("work_hours")),
                    salary=_opt_int(r.get("salary")),
                )
                for r in fetchall(cur)
            ]
