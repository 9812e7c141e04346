from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import to_local
from ...core.constants import DEFAULT_BASE_SALARY, DEFAULT_EXPECTED_HOURS
from .base import SalaryCalculator, SalaryResult

_SECONDS_PER_HOUR = Decimal(3600)


class ProportionalSalaryCalculator(SalaryCalculator):
    """Full base salary at or above expected hours, linear share below it.

    Hours are rounded to 2 decimals and salary to a whole unit (half-up).
    """

    def __init__(
        self,
        *,
        base_salary: int = DEFAULT_BASE_SALARY,
        expected_hours: float = DEFAULT_EXPECTED_HOURS,
    ):
        if expected_hours <= 0:
            raise ValueError("expected_hours must be greater than 0")
        self._base_salary = Decimal(str(base_salary))
        self._expected_hours = Decimal(str(expected_hours))

    def session_hours(self, start: Optional[datetime], end: Optional[datetime]) -> Decimal:
        if start is None or end is None:
            return Decimal(0)
        # Elapsed real time, independent of DST shifts in the local zone.
        elapsed = to_local(end, timezone.utc) - to_local(start, timezone.utc)
        hours = Decimal(str(elapsed.total_seconds())) / _SECONDS_PER_HOUR
        return max(Decimal(0), hours)

    def salary_for(self, total_hours: Decimal) -> Decimal:
        total_hours = max(Decimal(0), total_hours)
        if total_hours >= self._expected_hours:
            return self._base_salary
        return self._base_salary * total_hours / self._expected_hours

    def calculate(self, record: AttendanceRecord) -> SalaryResult:
        total = self.session_hours(record.check_in_1, record.check_out_1)
        total += self.session_hours(record.check_in_2, record.check_out_2)
        total = max(Decimal(0), total)

        salary = self.salary_for(total)
        return SalaryResult(
            work_hours=float(total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
            salary=int(salary.quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
        )
