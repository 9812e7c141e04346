from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_int, require_email, require_non_empty
from ..core.exceptions import ValidationError
from ..shifts.repository import ShiftRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Admin use cases: manage employee records."""

    def __init__(self, employees: EmployeeRepository, shifts: ShiftRepository):
        self._employees = employees
        self._shifts = shifts

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise ValidationError("Employee not found")
        return employee

    def _check_shift(self, shift_id: Optional[int]) -> Optional[int]:
        if shift_id is not None and not self._shifts.get_by_id(shift_id):
            raise ValidationError("Assigned shift does not exist")
        return shift_id

    def _check_email_free(self, email: str, *, employee_id: Optional[int] = None) -> str:
        existing = self._employees.get_by_email(email)
        if existing and existing.employee_id != employee_id:
            raise ValidationError("Email is already in use")
        return email

    def create(self, data: Mapping[str, Any]) -> Employee:
        name = require_non_empty(data.get("name") or "", "name")
        email = self._check_email_free(require_email(data.get("email") or ""))
        shift_id = self._check_shift(optional_int(data.get("assigned_shift_id"), "assigned_shift_id"))

        employee_id = self._employees.create(name=name, email=email, assigned_shift_id=shift_id)
        logger.info("employee created id=%s", employee_id)
        return self.get(employee_id)

    def update(self, employee_id: int, data: Mapping[str, Any]) -> Employee:
        current = self.get(employee_id)

        name = require_non_empty(data["name"], "name") if "name" in data else current.name
        email = current.email
        if "email" in data:
            email = self._check_email_free(require_email(data.get("email") or ""), employee_id=employee_id)
        shift_id = current.assigned_shift_id
        if "assigned_shift_id" in data:
            shift_id = self._check_shift(optional_int(data.get("assigned_shift_id"), "assigned_shift_id"))

        self._employees.update(employee_id=employee_id, name=name, email=email, assigned_shift_id=shift_id)
        logger.info("employee updated id=%s", employee_id)
        return self.get(employee_id)

    def delete(self, employee_id: int) -> None:
        if not self._employees.delete(employee_id):
            raise ValidationError("Employee not found")
        logger.info("employee deleted id=%s (attendance cascades)", employee_id)
