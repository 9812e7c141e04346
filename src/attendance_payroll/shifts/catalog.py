"""Shift Catalog lookup: which configured shift covers a moment of the day."""

from __future__ import annotations

from datetime import datetime, time
from typing import Iterable, Optional, Union

from .model import Shift


def _minute_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def in_window(now: time, start: time, end: time) -> bool:
    """Inclusive match at minute precision; start > end wraps past midnight."""
    current = _minute_of_day(now)
    lo = _minute_of_day(start)
    hi = _minute_of_day(end)
    if lo > hi:
        return current >= lo or current <= hi
    return lo <= current <= hi


def active_shift(now: Union[datetime, time], shifts: Iterable[Shift]) -> Optional[Shift]:
    """Return the first shift (in catalog order) whose session window covers `now`.

    `now` must already be expressed in the civil timezone the shifts are defined in.
    Catalog order doubles as priority when windows overlap.
    """
    moment = now.time() if isinstance(now, datetime) else now
    for shift in shifts:
        for start, end in shift.windows():
            if in_window(moment, start, end):
                return shift
    return None
