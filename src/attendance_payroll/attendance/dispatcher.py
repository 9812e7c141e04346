from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import AttendanceAction, AttendanceStatus


@dataclass(frozen=True)
class ActionWrite:
    """Which record columns one action writes (timestamp and its captured image together)."""

    timestamp_field: str
    selfie_field: str

    def fields(self, *, at: datetime, image: Optional[str]) -> dict[str, Any]:
        return {self.timestamp_field: at, self.selfie_field: image}


_NEXT_ACTION = {
    AttendanceStatus.NOT_STARTED: AttendanceAction.WRITE_CHECK_IN_1,
    AttendanceStatus.CHECKED_IN_1: AttendanceAction.WRITE_CHECK_OUT_1,
    AttendanceStatus.ON_BREAK: AttendanceAction.WRITE_CHECK_IN_2,
    AttendanceStatus.CHECKED_IN_2: AttendanceAction.WRITE_CHECK_OUT_2,
    AttendanceStatus.COMPLETED: AttendanceAction.NONE,
}

_WRITES = {
    AttendanceAction.WRITE_CHECK_IN_1: ActionWrite("check_in_1", "selfie_check_in_1"),
    AttendanceAction.WRITE_CHECK_OUT_1: ActionWrite("check_out_1", "selfie_check_out_1"),
    AttendanceAction.WRITE_CHECK_IN_2: ActionWrite("check_in_2", "selfie_check_in_2"),
    AttendanceAction.WRITE_CHECK_OUT_2: ActionWrite("check_out_2", "selfie_check_out_2"),
}


def next_action(status: AttendanceStatus) -> AttendanceAction:
    return _NEXT_ACTION[status]


def write_for(action: AttendanceAction) -> ActionWrite:
    if action is AttendanceAction.NONE:
        raise KeyError("AttendanceAction.NONE writes nothing")
    return _WRITES[action]
