from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Domain entity: a daily schedule template with one or two sessions."""

    shift_id: int
    shift_name: str
    start_1: time
    end_1: time
    start_2: Optional[time] = None
    end_2: Optional[time] = None
    expected_hours: float = 6.0
    has_break: bool = False

    @property
    def spans_midnight(self) -> bool:
        return any(start > end for start, end in self.windows())

    def windows(self) -> list[tuple[time, time]]:
        out = [(self.start_1, self.end_1)]
        if self.start_2 is not None and self.end_2 is not None:
            out.append((self.start_2, self.end_2))
        return out

    def to_dict(self) -> dict:
        def _fmt(t: Optional[time]) -> Optional[str]:
            return t.strftime("%H:%M") if t is not None else None

        return {
            "shift_id": self.shift_id,
            "shift_name": self.shift_name,
            "start_1": _fmt(self.start_1),
            "end_1": _fmt(self.end_1),
            "start_2": _fmt(self.start_2),
            "end_2": _fmt(self.end_2),
            "expected_hours": self.expected_hours,
            "has_break": self.has_break,
        }
