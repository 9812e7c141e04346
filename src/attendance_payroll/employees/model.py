from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee who checks in and out."""

    employee_id: int
    name: str
    email: str
    assigned_shift_id: Optional[int] = None
    created_at: Optional[datetime] = None
    shift_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "assigned_shift_id": self.assigned_shift_id,
            "shift_name": self.shift_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
