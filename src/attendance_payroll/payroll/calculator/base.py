from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...attendance.model import AttendanceRecord


@dataclass(frozen=True)
class SalaryResult:
    work_hours: float
    salary: int


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, record: AttendanceRecord) -> SalaryResult:
        raise NotImplementedError
