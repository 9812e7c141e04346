from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import DERIVED_FIELDS, SELFIE_FIELDS, TIMESTAMP_FIELDS, AttendanceRecord, AttendanceReportRow

WRITABLE_FIELDS = frozenset(TIMESTAMP_FIELDS + SELFIE_FIELDS + DERIVED_FIELDS + ("shift_id",))


class AttendanceRepository(Protocol):
    """Data-access interface the attendance core consumes."""

    def get_record(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        shift_id: int,
        check_in_1: datetime,
        selfie: Optional[str] = None,
    ) -> AttendanceRecord:
        """Insert the day's record; raises RecordConflict if one already exists."""

        raise NotImplementedError

    def update_record(self, employee_id: int, work_date: date, fields: Mapping[str, Any]) -> AttendanceRecord:
        """Apply a partial update atomically; raises RecordNotFound if no record exists."""

        raise NotImplementedError

    def delete_record(self, employee_id: int, work_date: date) -> bool:
        """Admin-only override."""

        raise NotImplementedError

    def list_records(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
