from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus
from ..shifts.model import Shift
from .model import AttendanceRecord


def resolve_status(record: Optional[AttendanceRecord], shift: Optional[Shift]) -> AttendanceStatus:
    """Derive the attendance status from which timestamps are populated.

    Rules are applied in order; a missing shift counts as a shift without a break.
    """
    if record is None or record.check_in_1 is None:
        return AttendanceStatus.NOT_STARTED
    if record.check_out_1 is None:
        return AttendanceStatus.CHECKED_IN_1
    if record.check_in_2 is None and shift is not None and shift.has_break:
        return AttendanceStatus.ON_BREAK
    if record.check_in_2 is not None and record.check_out_2 is None:
        return AttendanceStatus.CHECKED_IN_2
    return AttendanceStatus.COMPLETED
