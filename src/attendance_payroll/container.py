from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import get_zone
from .core.constants import DEFAULT_BASE_SALARY, DEFAULT_EXPECTED_HOURS, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.calculator.standard_calculator import ProportionalSalaryCalculator
from .payroll.service import PayrollReportService, SalaryService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    shifts_repo: ShiftRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    shift_service: ShiftService
    employee_service: EmployeeService
    salary_service: SalaryService
    attendance_service: AttendanceService
    payroll_report_service: PayrollReportService


def wire(
    *,
    shifts_repo: ShiftRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    timezone_name: str = DEFAULT_TIMEZONE,
    base_salary: int = DEFAULT_BASE_SALARY,
    expected_hours: float = DEFAULT_EXPECTED_HOURS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of the given repositories (MySQL in the app, in-memory in tests)."""
    zone = get_zone(timezone_name)
    calculator = ProportionalSalaryCalculator(base_salary=base_salary, expected_hours=expected_hours)
    salary_service = SalaryService(attendance_repo, calculator=calculator)

    return Container(
        conn=conn,
        shifts_repo=shifts_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        shift_service=ShiftService(shifts_repo),
        employee_service=EmployeeService(employees_repo, shifts_repo),
        salary_service=salary_service,
        attendance_service=AttendanceService(
            attendance_repo,
            shifts_repo,
            salary_service,
            employees_repo,
            zone=zone,
        ),
        payroll_report_service=PayrollReportService(attendance_repo, employees_repo),
    )


def build_container(
    *,
    db_config: dict,
    timezone_name: str = DEFAULT_TIMEZONE,
    base_salary: int = DEFAULT_BASE_SALARY,
    expected_hours: float = DEFAULT_EXPECTED_HOURS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire(
        shifts_repo=MySQLShiftRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        timezone_name=timezone_name,
        base_salary=base_salary,
        expected_hours=expected_hours,
        conn=conn,
    )
