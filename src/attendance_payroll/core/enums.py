from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Derived attendance state for one employee on one date (never stored)."""

    NOT_STARTED = "not_started"
    CHECKED_IN_1 = "checked_in_1"
    ON_BREAK = "on_break"
    CHECKED_IN_2 = "checked_in_2"
    COMPLETED = "completed"


class AttendanceAction(str, Enum):
    """Next write allowed for a given status."""

    WRITE_CHECK_IN_1 = "check_in_1"
    WRITE_CHECK_OUT_1 = "check_out_1"
    WRITE_CHECK_IN_2 = "check_in_2"
    WRITE_CHECK_OUT_2 = "check_out_2"
    NONE = "none"
