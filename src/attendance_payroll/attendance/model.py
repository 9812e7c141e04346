from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

TIMESTAMP_FIELDS = ("check_in_1", "check_out_1", "check_in_2", "check_out_2")
SELFIE_FIELDS = ("selfie_check_in_1", "selfie_check_out_1", "selfie_check_in_2", "selfie_check_out_2")
DERIVED_FIELDS = ("work_hours", "salary")


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (employee, calendar date).

    Timestamps are timezone-aware. `work_hours` and `salary` stay None until
    the day is completed.
    """

    record_id: int
    employee_id: int
    work_date: date
    shift_id: int
    check_in_1: Optional[datetime] = None
    check_out_1: Optional[datetime] = None
    check_in_2: Optional[datetime] = None
    check_out_2: Optional[datetime] = None
    selfie_check_in_1: Optional[str] = None
    selfie_check_out_1: Optional[str] = None
    selfie_check_in_2: Optional[str] = None
    selfie_check_out_2: Optional[str] = None
    work_hours: Optional[float] = None
    salary: Optional[int] = None

    def to_dict(self, *, include_images: bool = False) -> dict:
        out = {
            "record_id": self.record_id,
            "employee_id": self.employee_id,
            "work_date": self.work_date.isoformat(),
            "shift_id": self.shift_id,
            "check_in_1": _iso(self.check_in_1),
            "check_out_1": _iso(self.check_out_1),
            "check_in_2": _iso(self.check_in_2),
            "check_out_2": _iso(self.check_out_2),
            "work_hours": self.work_hours,
            "salary": self.salary,
        }
        if include_images:
            for name in SELFIE_FIELDS:
                out[name] = getattr(self, name)
        return out


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for listings and reports (joined with employee and shift)."""

    employee_id: int
    employee_name: str
    employee_email: str
    shift_name: Optional[str]
    work_date: date
    check_in_1: Optional[datetime] = None
    check_out_1: Optional[datetime] = None
    check_in_2: Optional[datetime] = None
    check_out_2: Optional[datetime] = None
    work_hours: Optional[float] = None
    salary: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "employee_email": self.employee_email,
            "shift_name": self.shift_name,
            "work_date": self.work_date.isoformat(),
            "check_in_1": _iso(self.check_in_1),
            "check_out_1": _iso(self.check_out_1),
            "check_in_2": _iso(self.check_in_2),
            "check_out_2": _iso(self.check_out_2),
            "work_hours": self.work_hours,
            "salary": self.salary,
        }
