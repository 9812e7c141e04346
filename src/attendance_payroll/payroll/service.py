from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord, AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import days_in_month, month_bounds
from ..core.exceptions import RecordNotFound
from ..employees.repository import EmployeeRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import ProportionalSalaryCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Totals:
    days: int
    hours: float
    salary: int

    def to_dict(self) -> dict:
        return {"days": self.days, "hours": self.hours, "salary": self.salary}


def summarize(rows: Iterable[AttendanceReportRow]) -> Totals:
    """Sum stored derived fields; records without them count as zero."""
    days = 0
    hours = 0.0
    salary = 0
    for r in rows:
        days += 1
        hours += r.work_hours or 0.0
        salary += r.salary or 0
    return Totals(days=days, hours=round(hours, 2), salary=salary)


class SalaryService:
    """Use case: compute and store work hours and salary for one (employee, date)."""

    def __init__(self, attendance: AttendanceRepository, *, calculator: Optional[SalaryCalculator] = None):
        self._attendance = attendance
        self._calculator = calculator or ProportionalSalaryCalculator()

    def calculate_for(self, employee_id: int, work_date: date) -> AttendanceRecord:
        record = self._attendance.get_record(employee_id, work_date)
        if not record:
            logger.error("salary calculation for missing record employee=%s date=%s", employee_id, work_date)
            raise RecordNotFound(f"No attendance record for employee {employee_id} on {work_date}")

        result = self._calculator.calculate(record)
        updated = self._attendance.update_record(
            employee_id,
            work_date,
            {"work_hours": result.work_hours, "salary": result.salary},
        )
        logger.info(
            "salary calculated employee=%s date=%s hours=%.2f salary=%s",
            employee_id,
            work_date,
            result.work_hours,
            result.salary,
        )
        return updated


@dataclass(frozen=True)
class DailyStat:
    work_date: date
    attendance: int
    hours: float
    salary: int

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "attendance": self.attendance,
            "hours": self.hours,
            "salary": self.salary,
        }


@dataclass(frozen=True)
class EmployeeSummary:
    employee_id: int
    employee_name: str
    totals: Totals

    def to_dict(self) -> dict:
        return {"employee_id": self.employee_id, "employee_name": self.employee_name, **self.totals.to_dict()}


@dataclass(frozen=True)
class MonthlyReport:
    month: str
    total_employees: int
    total_attendance: int
    total_hours: float
    total_salary: int
    average_hours_per_employee: float
    attendance_rate: float
    daily_stats: list[DailyStat] = field(default_factory=list)
    employees: list[EmployeeSummary] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "total_employees": self.total_employees,
            "total_attendance": self.total_attendance,
            "total_hours": self.total_hours,
            "total_salary": self.total_salary,
            "average_hours_per_employee": self.average_hours_per_employee,
            "attendance_rate": self.attendance_rate,
            "daily_stats": [d.to_dict() for d in self.daily_stats],
            "employees": [e.to_dict() for e in self.employees],
        }


class PayrollReportService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def list_records(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[AttendanceReportRow]:
        return self._attendance.list_records(start_date=start, end_date=end, employee_id=employee_id)

    def dashboard(self, today: date) -> dict:
        month_start, month_end = month_bounds(today.year, today.month)
        monthly = self._attendance.list_records(start_date=month_start, end_date=month_end)
        today_rows = [r for r in monthly if r.work_date == today]

        today_totals = summarize(today_rows)
        month_totals = summarize(monthly)
        return {
            "date": today.isoformat(),
            "total_employees": self._employees.count(),
            "today_attendance": today_totals.days,
            "total_hours_today": today_totals.hours,
            "total_salary_today": today_totals.salary,
            "monthly_attendance": month_totals.days,
            "monthly_salary": month_totals.salary,
        }

    def monthly_report(self, year: int, month: int) -> MonthlyReport:
        start, end = month_bounds(year, month)
        rows = self._attendance.list_records(start_date=start, end_date=end)
        total_employees = self._employees.count()
        totals = summarize(rows)

        by_day: dict[date, list[AttendanceReportRow]] = {}
        by_employee: dict[int, list[AttendanceReportRow]] = {}
        for r in rows:
            by_day.setdefault(r.work_date, []).append(r)
            by_employee.setdefault(r.employee_id, []).append(r)

        daily_stats = []
        for work_date in sorted(by_day):
            day = summarize(by_day[work_date])
            daily_stats.append(DailyStat(work_date=work_date, attendance=day.days, hours=day.hours, salary=day.salary))

        summaries = [
            EmployeeSummary(employee_id=employee_id, employee_name=items[0].employee_name, totals=summarize(items))
            for employee_id, items in by_employee.items()
        ]
        summaries.sort(key=lambda s: s.totals.hours, reverse=True)

        possible = total_employees * days_in_month(year, month)
        return MonthlyReport(
            month=f"{year:04d}-{month:02d}",
            total_employees=total_employees,
            total_attendance=totals.days,
            total_hours=totals.hours,
            total_salary=totals.salary,
            average_hours_per_employee=round(totals.hours / total_employees, 2) if total_employees else 0.0,
            attendance_rate=round(totals.days / possible * 100, 2) if possible else 0.0,
            daily_stats=daily_stats,
            employees=summaries,
        )
