from __future__ import annotations

import logging
from dataclasses import replace
from datetime import time
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_time_of_day
from ..common.validators import require_bool, require_non_empty, require_positive_number
from ..core.exceptions import ValidationError
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


def validate_shift(shift: Shift) -> Shift:
    """Check shift invariants; start > end is an overnight session, start == end is empty."""
    require_non_empty(shift.shift_name, "shift_name")
    if shift.start_1 is None or shift.end_1 is None:
        raise ValidationError("Session 1 needs both start and end")
    if (shift.start_2 is None) != (shift.end_2 is None):
        raise ValidationError("Session 2 needs both start and end, or neither")
    if shift.has_break and shift.start_2 is None:
        raise ValidationError("A shift with a break needs a second session")
    for start, end in shift.windows():
        if start == end:
            raise ValidationError("Session start and end must differ")
    if shift.expected_hours <= 0:
        raise ValidationError("expected_hours must be greater than 0")
    return shift


def _opt_time(data: Mapping[str, Any], key: str) -> Optional[time]:
    value = data.get(key)
    if value in (None, ""):
        return None
    return parse_time_of_day(str(value))


class ShiftService:
    """Admin use cases: manage the shift catalog."""

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def list_shifts(self) -> Sequence[Shift]:
        return self._shifts.list_all()

    def get(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(shift_id)
        if not shift:
            raise ValidationError("Shift not found")
        return shift

    def create(self, data: Mapping[str, Any]) -> Shift:
        shift = validate_shift(
            Shift(
                shift_id=0,
                shift_name=require_non_empty(data.get("shift_name") or "", "shift_name"),
                start_1=parse_time_of_day(str(data.get("start_1") or "")),
                end_1=parse_time_of_day(str(data.get("end_1") or "")),
                start_2=_opt_time(data, "start_2"),
                end_2=_opt_time(data, "end_2"),
                expected_hours=require_positive_number(data.get("expected_hours", 6), "expected_hours"),
                has_break=require_bool(data.get("has_break", False), "has_break"),
            )
        )
        shift_id = self._shifts.create(shift)
        logger.info("shift created id=%s name=%s", shift_id, shift.shift_name)
        return replace(shift, shift_id=shift_id)

    def update(self, shift_id: int, data: Mapping[str, Any]) -> Shift:
        current = self.get(shift_id)
        changes: dict[str, Any] = {}
        if "shift_name" in data:
            changes["shift_name"] = require_non_empty(data.get("shift_name") or "", "shift_name")
        for key in ("start_1", "end_1"):
            if key in data:
                changes[key] = parse_time_of_day(str(data.get(key) or ""))
        for key in ("start_2", "end_2"):
            if key in data:
                changes[key] = _opt_time(data, key)
        if "expected_hours" in data:
            changes["expected_hours"] = require_positive_number(data.get("expected_hours"), "expected_hours")
        if "has_break" in data:
            changes["has_break"] = require_bool(data.get("has_break"), "has_break")

        updated = validate_shift(replace(current, **changes))
        self._shifts.update(updated)
        logger.info("shift updated id=%s", shift_id)
        return updated
