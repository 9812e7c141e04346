from __future__ import annotations

import itertools
from datetime import time

import pytest

from attendance_payroll.attendance.model import AttendanceRecord
from attendance_payroll.attendance.status import resolve_status
from attendance_payroll.core.enums import AttendanceStatus
from attendance_payroll.shifts.model import Shift

BREAK_SHIFT = Shift(
    shift_id=2,
    shift_name="Split",
    start_1=time(8, 0),
    end_1=time(12, 0),
    start_2=time(13, 0),
    end_2=time(17, 0),
    has_break=True,
)
SINGLE_SHIFT = Shift(shift_id=1, shift_name="Single", start_1=time(9, 0), end_1=time(15, 0))


def _record(at, ci1=None, co1=None, ci2=None, co2=None) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=1,
        employee_id=1,
        work_date=at(0).date(),
        shift_id=2,
        check_in_1=ci1,
        check_out_1=co1,
        check_in_2=ci2,
        check_out_2=co2,
    )


def test_missing_record_is_not_started():
    assert resolve_status(None, BREAK_SHIFT) is AttendanceStatus.NOT_STARTED


def test_checked_in_with_break_shift_is_checked_in_1(at):
    record = _record(at, ci1=at(9))
    assert resolve_status(record, BREAK_SHIFT) is AttendanceStatus.CHECKED_IN_1


def test_first_checkout_with_break_is_on_break(at):
    record = _record(at, ci1=at(8), co1=at(12))
    assert resolve_status(record, BREAK_SHIFT) is AttendanceStatus.ON_BREAK


def test_first_checkout_without_break_is_completed(at):
    record = _record(at, ci1=at(9), co1=at(15))
    assert resolve_status(record, SINGLE_SHIFT) is AttendanceStatus.COMPLETED


def test_second_checkin_is_checked_in_2(at):
    record = _record(at, ci1=at(8), co1=at(12), ci2=at(13))
    assert resolve_status(record, BREAK_SHIFT) is AttendanceStatus.CHECKED_IN_2


def test_all_four_timestamps_is_completed(at):
    record = _record(at, ci1=at(8), co1=at(12), ci2=at(13), co2=at(17))
    assert resolve_status(record, BREAK_SHIFT) is AttendanceStatus.COMPLETED


def test_unknown_shift_counts_as_no_break(at):
    record = _record(at, ci1=at(8), co1=at(12))
    assert resolve_status(record, None) is AttendanceStatus.COMPLETED


def test_checkout_without_checkin_is_still_not_started(at):
    record = _record(at, co1=at(12))
    assert resolve_status(record, BREAK_SHIFT) is AttendanceStatus.NOT_STARTED


def test_second_checkin_on_single_shift_is_checked_in_2(at):
    record = _record(at, ci1=at(9), co1=at(12), ci2=at(13))
    assert resolve_status(record, SINGLE_SHIFT) is AttendanceStatus.CHECKED_IN_2


def test_break_shift_without_second_checkin_stays_on_break(at):
    record = _record(at, ci1=at(8), co1=at(12), co2=at(17))
    assert resolve_status(record, BREAK_SHIFT) is AttendanceStatus.ON_BREAK


def _expected(ci1, co1, ci2, co2, has_break) -> AttendanceStatus:
    if not ci1:
        return AttendanceStatus.NOT_STARTED
    if not co1:
        return AttendanceStatus.CHECKED_IN_1
    if not ci2 and has_break:
        return AttendanceStatus.ON_BREAK
    if ci2 and not co2:
        return AttendanceStatus.CHECKED_IN_2
    return AttendanceStatus.COMPLETED


@pytest.mark.parametrize("shift", [BREAK_SHIFT, SINGLE_SHIFT, None])
@pytest.mark.parametrize("mask", list(itertools.product([False, True], repeat=4)))
def test_every_timestamp_combination_follows_rule_order(at, shift, mask):
    stamps = [at(8), at(12), at(13), at(17)]
    record = _record(at, *[s if present else None for s, present in zip(stamps, mask)])
    has_break = shift is not None and shift.has_break

    assert resolve_status(record, shift) is _expected(*mask, has_break)
