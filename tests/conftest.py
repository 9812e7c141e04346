from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo

import pytest

from attendance_payroll.attendance.model import AttendanceRecord, AttendanceReportRow
from attendance_payroll.attendance.repository import WRITABLE_FIELDS
from attendance_payroll.container import wire
from attendance_payroll.core.exceptions import RecordConflict, RecordNotFound
from attendance_payroll.employees.model import Employee
from attendance_payroll.shifts.model import Shift

JAKARTA = ZoneInfo("Asia/Jakarta")
WORK_DATE = date(2026, 3, 2)


def at(hour: int, minute: int = 0, *, day: date = WORK_DATE) -> datetime:
    """Aware timestamp in Jakarta civil time."""
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=JAKARTA)


MORNING = Shift(shift_id=1, shift_name="Morning", start_1=time(9, 0), end_1=time(15, 0), expected_hours=6)
EVENING_SPLIT = Shift(
    shift_id=2,
    shift_name="Evening split",
    start_1=time(16, 0),
    end_1=time(19, 0),
    start_2=time(20, 0),
    end_2=time(23, 0),
    expected_hours=6,
    has_break=True,
)
NIGHT = Shift(shift_id=3, shift_name="Night", start_1=time(23, 30), end_1=time(5, 0), expected_hours=6)


class InMemoryShifts:
    def __init__(self, shifts=()):
        self._shifts: dict[int, Shift] = {s.shift_id: s for s in shifts}

    def list_all(self):
        return [self._shifts[k] for k in sorted(self._shifts)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self._shifts.get(shift_id)

    def create(self, shift: Shift) -> int:
        shift_id = max(self._shifts, default=0) + 1
        self._shifts[shift_id] = replace(shift, shift_id=shift_id)
        return shift_id

    def update(self, shift: Shift) -> bool:
        if shift.shift_id not in self._shifts:
            return False
        self._shifts[shift.shift_id] = shift
        return True


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: e.name)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email == email), None)

    def create(self, *, name: str, email: str, assigned_shift_id: Optional[int]) -> int:
        employee_id = max(self._by_id, default=0) + 1
        self._by_id[employee_id] = Employee(employee_id=employee_id, name=name, email=email, assigned_shift_id=assigned_shift_id)
        return employee_id

    def update(self, *, employee_id: int, name: str, email: str, assigned_shift_id: Optional[int]) -> bool:
        if employee_id not in self._by_id:
            return False
        self._by_id[employee_id] = replace(self._by_id[employee_id], name=name, email=email, assigned_shift_id=assigned_shift_id)
        return True

    def delete(self, employee_id: int) -> bool:
        return self._by_id.pop(employee_id, None) is not None

    def count(self) -> int:
        return len(self._by_id)


class InMemoryAttendance:
    def __init__(self, employees: InMemoryEmployees | None = None, shifts: InMemoryShifts | None = None):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self._employees = employees
        self._shifts = shifts
        self.updates: list[tuple[int, date, dict]] = []

    def put(self, record: AttendanceRecord) -> AttendanceRecord:
        self._by_key[(record.employee_id, record.work_date)] = record
        return record

    def get_record(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def create_record(self, *, employee_id: int, work_date: date, shift_id: int, check_in_1: datetime, selfie=None):
        if (employee_id, work_date) in self._by_key:
            raise RecordConflict("duplicate")
        self._id += 1
        return self.put(
            AttendanceRecord(
                record_id=self._id,
                employee_id=employee_id,
                work_date=work_date,
                shift_id=shift_id,
                check_in_1=check_in_1,
                selfie_check_in_1=selfie,
            )
        )

    def update_record(self, employee_id: int, work_date: date, fields: Mapping[str, Any]) -> AttendanceRecord:
        assert set(fields) <= WRITABLE_FIELDS
        current = self._by_key.get((employee_id, work_date))
        if current is None:
            raise RecordNotFound("missing")
        self.updates.append((employee_id, work_date, dict(fields)))
        return self.put(replace(current, **fields))

    def delete_record(self, employee_id: int, work_date: date) -> bool:
        return self._by_key.pop((employee_id, work_date), None) is not None

    def list_records(self, *, start_date: date, end_date: date, employee_id: Optional[int] = None):
        rows = []
        for r in self._by_key.values():
            if not (start_date <= r.work_date <= end_date):
                continue
            if employee_id is not None and r.employee_id != employee_id:
                continue
            employee = self._employees.get_by_id(r.employee_id) if self._employees else None
            shift = self._shifts.get_by_id(r.shift_id) if self._shifts else None
            rows.append(
                AttendanceReportRow(
                    employee_id=r.employee_id,
                    employee_name=employee.name if employee else f"#{r.employee_id}",
                    employee_email=employee.email if employee else "",
                    shift_name=shift.shift_name if shift else None,
                    work_date=r.work_date,
                    check_in_1=r.check_in_1,
                    check_out_1=r.check_out_1,
                    check_in_2=r.check_in_2,
                    check_out_2=r.check_out_2,
                    work_hours=r.work_hours,
                    salary=r.salary,
                )
            )
        rows.sort(key=lambda row: (row.work_date, row.employee_name), reverse=True)
        return rows


@pytest.fixture
def fixed_now() -> datetime:
    return at(9, 0)


@pytest.fixture
def shifts_repo() -> InMemoryShifts:
    return InMemoryShifts([MORNING, EVENING_SPLIT, NIGHT])


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(employee_id=1, name="Ayu", email="ayu@example.com", assigned_shift_id=1),
            Employee(employee_id=2, name="Budi", email="budi@example.com", assigned_shift_id=2),
        ]
    )


@pytest.fixture
def attendance_repo(employees_repo, shifts_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo, shifts_repo)


@pytest.fixture
def container(shifts_repo, employees_repo, attendance_repo):
    return wire(
        shifts_repo=shifts_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        timezone_name="Asia/Jakarta",
        base_salary=80000,
        expected_hours=6,
    )


@pytest.fixture(name="at")
def at_fixture():
    return at


@pytest.fixture
def zone():
    return JAKARTA


@pytest.fixture
def work_date() -> date:
    return WORK_DATE


@pytest.fixture
def morning() -> Shift:
    return MORNING


@pytest.fixture
def evening_split() -> Shift:
    return EVENING_SPLIT


@pytest.fixture
def night() -> Shift:
    return NIGHT
