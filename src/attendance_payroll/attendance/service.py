from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import from_utc_naive, month_bounds, now_utc, parse_iso_datetime, to_local
from ..common.validators import optional_image, optional_int
from ..core.enums import AttendanceAction, AttendanceStatus
from ..core.exceptions import AlreadyCompleted, NoActiveShift, RecordConflict, RecordNotFound, ValidationError
from ..employees.repository import EmployeeRepository
from ..payroll.service import SalaryService, Totals, summarize
from ..shifts.catalog import active_shift
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .dispatcher import next_action, write_for
from .model import TIMESTAMP_FIELDS, AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository
from .status import resolve_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodayView:
    """What the attendance card needs: today's record, status, next step and current shift."""

    work_date: date
    record: Optional[AttendanceRecord]
    status: AttendanceStatus
    next_action: AttendanceAction
    shift: Optional[Shift]
    active_shift: Optional[Shift]

    def to_dict(self) -> dict:
        return {
            "work_date": self.work_date.isoformat(),
            "record": self.record.to_dict() if self.record else None,
            "status": self.status.value,
            "next_action": self.next_action.value,
            "shift": self.shift.to_dict() if self.shift else None,
            "active_shift": self.active_shift.to_dict() if self.active_shift else None,
        }


@dataclass(frozen=True)
class History:
    rows: Sequence[AttendanceReportRow]
    totals: Totals


def check_chronology(record: AttendanceRecord) -> None:
    """Populated timestamps must not run backwards (check_in_1 <= check_out_1 <= ...)."""
    previous: Optional[datetime] = None
    for name in TIMESTAMP_FIELDS:
        value = getattr(record, name)
        if value is None:
            continue
        if previous is not None and value < previous:
            raise ValidationError(f"{name} is earlier than the previous timestamp")
        previous = value


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        shifts: ShiftRepository,
        salary: SalaryService,
        employees: EmployeeRepository | None = None,
        *,
        zone: tzinfo = timezone.utc,
    ):
        self._attendance = attendance
        self._shifts = shifts
        self._salary = salary
        self._employees = employees
        self._zone = zone

    def _require_employee(self, employee_id: int) -> None:
        if self._employees and not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee not found")

    def _parse_admin_timestamp(self, value: str) -> datetime:
        """Admin-entered times without an offset are civil time in the configured zone."""
        parsed = parse_iso_datetime(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=self._zone)
        return parsed

    def _shift_for(self, record: Optional[AttendanceRecord]) -> Optional[Shift]:
        if record is None:
            return None
        return self._shifts.get_by_id(record.shift_id)

    def local_today(self, now: datetime | None = None) -> date:
        return to_local(now or now_utc(), self._zone).date()

    def open_work_date(self, employee_id: int, now: datetime | None = None) -> date:
        """Local today, unless yesterday's overnight shift is still open."""
        today = self.local_today(now)
        if self._attendance.get_record(employee_id, today) is not None:
            return today
        yesterday = today - timedelta(days=1)
        record = self._attendance.get_record(employee_id, yesterday)
        shift = self._shift_for(record)
        if shift is not None and shift.spans_midnight and resolve_status(record, shift) is not AttendanceStatus.COMPLETED:
            return yesterday
        return today

    def current_shift(self, now: datetime | None = None) -> Optional[Shift]:
        return active_shift(to_local(now or now_utc(), self._zone), self._shifts.list_all())

    def get_status(self, employee_id: int, work_date: date) -> AttendanceStatus:
        record = self._attendance.get_record(employee_id, work_date)
        return resolve_status(record, self._shift_for(record))

    def get_today(self, employee_id: int, *, now: datetime | None = None) -> TodayView:
        now = from_utc_naive(now) if now else now_utc()
        self._require_employee(employee_id)
        work_date = self.open_work_date(employee_id, now)
        record = self._attendance.get_record(employee_id, work_date)
        shift = self._shift_for(record)
        status = resolve_status(record, shift)
        return TodayView(
            work_date=work_date,
            record=record,
            status=status,
            next_action=next_action(status),
            shift=shift,
            active_shift=self.current_shift(now),
        )

    def perform_action(
        self,
        employee_id: int,
        work_date: date | None = None,
        captured_image: str | None = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Write the next timestamp for the day; computes salary once the day completes."""
        now = from_utc_naive(now) if now else now_utc()
        work_date = work_date or self.open_work_date(employee_id, now)
        image = optional_image(captured_image)
        self._require_employee(employee_id)

        record = self._attendance.get_record(employee_id, work_date)
        shift = self._shift_for(record)
        status = resolve_status(record, shift)
        action = next_action(status)

        if action is AttendanceAction.NONE:
            raise AlreadyCompleted("Attendance for this day is already completed")

        write = write_for(action)
        if action is AttendanceAction.WRITE_CHECK_IN_1:
            shift = self.current_shift(now)
            if not shift:
                raise NoActiveShift("No shift is active at this time")

            if record is None:
                try:
                    updated = self._attendance.create_record(
                        employee_id=employee_id,
                        work_date=work_date,
                        shift_id=shift.shift_id,
                        check_in_1=now,
                        selfie=image,
                    )
                except RecordConflict:
                    logger.warning("concurrent first check-in employee=%s date=%s; keeping stored record", employee_id, work_date)
                    stored = self._attendance.get_record(employee_id, work_date)
                    if stored is None:
                        raise
                    return stored
            else:
                fields = write.fields(at=now, image=image)
                fields["shift_id"] = shift.shift_id
                updated = self._attendance.update_record(employee_id, work_date, fields)
        else:
            updated = self._attendance.update_record(employee_id, work_date, write.fields(at=now, image=image))

        logger.info("attendance %s employee=%s date=%s", action.value, employee_id, work_date)

        if resolve_status(updated, shift) is AttendanceStatus.COMPLETED:
            updated = self._salary.calculate_for(employee_id, work_date)
        return updated

    def history(self, employee_id: int, year: int, month: int) -> History:
        start, end = month_bounds(year, month)
        rows = self._attendance.list_records(start_date=start, end_date=end, employee_id=employee_id)
        return History(rows=rows, totals=summarize(rows))

    def admin_update(self, employee_id: int, work_date: date, data: Mapping[str, Any]) -> AttendanceRecord:
        """Admin override of timestamps/shift; derived fields follow the resulting status."""
        record = self._attendance.get_record(employee_id, work_date)
        if not record:
            raise RecordNotFound(f"No attendance record for employee {employee_id} on {work_date}")

        fields: dict[str, Any] = {}
        for name in TIMESTAMP_FIELDS:
            if name in data:
                value = data[name]
                fields[name] = self._parse_admin_timestamp(value) if value else None
        if "shift_id" in data:
            shift_id = optional_int(data["shift_id"], "shift_id")
            if shift_id is None or not self._shifts.get_by_id(shift_id):
                raise ValidationError("Shift not found")
            fields["shift_id"] = shift_id

        unknown = set(data) - set(fields)
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        check_chronology(replace(record, **fields))

        updated = self._attendance.update_record(employee_id, work_date, fields)
        logger.info("attendance overridden employee=%s date=%s fields=%s", employee_id, work_date, sorted(fields))

        if resolve_status(updated, self._shift_for(updated)) is AttendanceStatus.COMPLETED:
            return self._salary.calculate_for(employee_id, work_date)
        return self._attendance.update_record(employee_id, work_date, {"work_hours": None, "salary": None})

    def admin_delete(self, employee_id: int, work_date: date) -> None:
        if not self._attendance.delete_record(employee_id, work_date):
            raise RecordNotFound(f"No attendance record for employee {employee_id} on {work_date}")
        logger.info("attendance deleted employee=%s date=%s", employee_id, work_date)
