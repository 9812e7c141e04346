from __future__ import annotations

from datetime import timedelta

import pytest

from attendance_payroll.attendance.model import AttendanceRecord
from attendance_payroll.core.enums import AttendanceAction, AttendanceStatus
from attendance_payroll.core.exceptions import AlreadyCompleted, NoActiveShift, RecordNotFound, ValidationError


@pytest.fixture
def svc(container):
    return container.attendance_service


def test_single_session_day_completes_with_full_salary(svc, at, work_date):
    svc.perform_action(1, work_date, now=at(9, 0))
    assert svc.get_status(1, work_date) is AttendanceStatus.CHECKED_IN_1

    record = svc.perform_action(1, work_date, now=at(15, 0))

    assert svc.get_status(1, work_date) is AttendanceStatus.COMPLETED
    assert record.work_hours == 6.0
    assert record.salary == 80000


def test_short_single_session_is_paid_proportionally(svc, at, work_date):
    svc.perform_action(1, work_date, now=at(9, 0))
    record = svc.perform_action(1, work_date, now=at(12, 0))

    assert record.work_hours == 3.0
    assert record.salary == 40000


def test_split_shift_walks_through_break(svc, attendance_repo, at, work_date):
    svc.perform_action(2, work_date, now=at(16, 0))
    svc.perform_action(2, work_date, now=at(19, 0))
    assert svc.get_status(2, work_date) is AttendanceStatus.ON_BREAK
    assert attendance_repo.get_record(2, work_date).salary is None

    svc.perform_action(2, work_date, now=at(20, 0))
    assert svc.get_status(2, work_date) is AttendanceStatus.CHECKED_IN_2

    record = svc.perform_action(2, work_date, now=at(22, 30))

    assert svc.get_status(2, work_date) is AttendanceStatus.COMPLETED
    assert record.work_hours == 5.5
    assert record.salary == 73333


def test_salary_is_written_exactly_once_per_day(svc, attendance_repo, at, work_date):
    for hour in (16, 19, 20, 23):
        svc.perform_action(2, work_date, now=at(hour, 0))

    salary_writes = [fields for _, _, fields in attendance_repo.updates if "salary" in fields]
    assert len(salary_writes) == 1


def test_second_checkin_uses_bound_shift_even_outside_windows(svc, at, work_date):
    svc.perform_action(2, work_date, now=at(16, 0))
    svc.perform_action(2, work_date, now=at(18, 0))

    # 19:30 is covered by no shift window, but only the first check-in needs one.
    record = svc.perform_action(2, work_date, now=at(19, 30))

    assert record.check_in_2 == at(19, 30)
    assert record.shift_id == 2


def test_completed_day_rejects_further_actions_without_mutation(svc, attendance_repo, at, work_date):
    svc.perform_action(1, work_date, now=at(9, 0))
    svc.perform_action(1, work_date, now=at(15, 0))
    before = attendance_repo.get_record(1, work_date)
    writes = len(attendance_repo.updates)

    with pytest.raises(AlreadyCompleted):
        svc.perform_action(1, work_date, now=at(16, 0))

    assert attendance_repo.get_record(1, work_date) == before
    assert len(attendance_repo.updates) == writes


def test_first_checkin_outside_all_shifts_fails(svc, attendance_repo, at, work_date):
    assert svc.current_shift(at(7, 0)) is None

    with pytest.raises(NoActiveShift):
        svc.perform_action(1, work_date, now=at(7, 0))

    assert attendance_repo.get_record(1, work_date) is None


def test_overnight_shift_counts_hours_across_midnight(svc, at, work_date):
    first = svc.perform_action(1, work_date, now=at(23, 45))
    assert first.shift_id == 3

    record = svc.perform_action(1, work_date, now=at(5, 0) + timedelta(days=1))

    assert record.work_hours == 5.25
    assert record.salary == 70000


def test_overnight_check_out_without_date_closes_yesterdays_record(svc, at, work_date):
    svc.perform_action(1, now=at(23, 45))
    next_morning = at(5, 0) + timedelta(days=1)

    assert svc.open_work_date(1, next_morning) == work_date
    record = svc.perform_action(1, now=next_morning)

    assert record.work_date == work_date
    assert svc.get_status(1, work_date) is AttendanceStatus.COMPLETED
    assert svc.open_work_date(1, next_morning) == work_date + timedelta(days=1)


def test_day_shift_does_not_carry_over(svc, at, work_date):
    svc.perform_action(1, now=at(9, 0))

    assert svc.open_work_date(1, at(9, 0) + timedelta(days=1)) == work_date + timedelta(days=1)


def test_captured_image_is_stored_with_its_timestamp(svc, at, work_date):
    record = svc.perform_action(1, work_date, "data:image/jpeg;base64,AAA", now=at(9, 5))

    assert record.check_in_1 == at(9, 5)
    assert record.selfie_check_in_1 == "data:image/jpeg;base64,AAA"


def test_non_string_image_is_rejected(svc, at, work_date):
    with pytest.raises(ValidationError):
        svc.perform_action(1, work_date, b"raw-bytes", now=at(9, 0))


def test_unknown_employee_is_rejected(svc, at, work_date):
    with pytest.raises(ValidationError):
        svc.perform_action(99, work_date, now=at(9, 0))


def test_work_date_defaults_to_local_day(svc, at, work_date):
    # 23:45 Jakarta is still the same civil day even though UTC is 16:45.
    record = svc.perform_action(1, now=at(23, 45))
    assert record.work_date == work_date


def test_concurrent_first_checkin_keeps_stored_record(svc, attendance_repo, monkeypatch, at, work_date):
    winner = attendance_repo.put(
        AttendanceRecord(record_id=7, employee_id=1, work_date=work_date, shift_id=1, check_in_1=at(9, 0))
    )
    real_get = attendance_repo.get_record
    calls = {"n": 0}

    def racing_get(employee_id, day):
        calls["n"] += 1
        return None if calls["n"] == 1 else real_get(employee_id, day)

    monkeypatch.setattr(attendance_repo, "get_record", racing_get)

    result = svc.perform_action(1, work_date, now=at(9, 1))

    assert result == winner


def test_existing_record_without_checkin_is_updated_not_recreated(svc, attendance_repo, at, work_date):
    attendance_repo.put(AttendanceRecord(record_id=5, employee_id=1, work_date=work_date, shift_id=2))

    record = svc.perform_action(1, work_date, now=at(9, 30))

    assert record.record_id == 5
    assert record.check_in_1 == at(9, 30)
    assert record.shift_id == 1


def test_status_queries_are_stable(svc, at, work_date):
    svc.perform_action(1, work_date, now=at(9, 0))

    assert {svc.get_status(1, work_date) for _ in range(5)} == {AttendanceStatus.CHECKED_IN_1}


def test_today_view_for_fresh_day(svc, at):
    view = svc.get_today(1, now=at(9, 0))

    assert view.status is AttendanceStatus.NOT_STARTED
    assert view.next_action is AttendanceAction.WRITE_CHECK_IN_1
    assert view.record is None
    assert view.active_shift.shift_name == "Morning"


def test_history_sums_the_month(svc, at, work_date):
    svc.perform_action(1, work_date, now=at(9, 0))
    svc.perform_action(1, work_date, now=at(15, 0))
    next_day = work_date + timedelta(days=1)
    svc.perform_action(1, next_day, now=at(9, 0, day=next_day))
    svc.perform_action(1, next_day, now=at(12, 0, day=next_day))

    history = svc.history(1, 2026, 3)

    assert [r.work_date for r in history.rows] == [next_day, work_date]
    assert history.totals.days == 2
    assert history.totals.hours == 9.0
    assert history.totals.salary == 120000


def test_admin_update_recomputes_completed_day(svc, at, work_date):
    svc.perform_action(1, work_date, now=at(9, 0))
    svc.perform_action(1, work_date, now=at(15, 0))

    record = svc.admin_update(1, work_date, {"check_out_1": "2026-03-02T12:00:00"})

    assert record.check_out_1 == at(12, 0)
    assert record.work_hours == 3.0
    assert record.salary == 40000


def test_admin_update_that_reopens_day_clears_derived_fields(svc, at, work_date):
    svc.perform_action(1, work_date, now=at(9, 0))
    svc.perform_action(1, work_date, now=at(15, 0))

    record = svc.admin_update(1, work_date, {"check_out_1": None})

    assert svc.get_status(1, work_date) is AttendanceStatus.CHECKED_IN_1
    assert record.work_hours is None
    assert record.salary is None


def test_admin_update_rejects_backwards_timestamps(svc, at, work_date):
    svc.perform_action(1, work_date, now=at(9, 0))

    with pytest.raises(ValidationError):
        svc.admin_update(1, work_date, {"check_out_1": "2026-03-02T08:00:00+07:00"})


def test_admin_update_rejects_derived_fields(svc, at, work_date):
    svc.perform_action(1, work_date, now=at(9, 0))

    with pytest.raises(ValidationError):
        svc.admin_update(1, work_date, {"salary": 1})


def test_admin_delete_missing_record(svc, work_date):
    with pytest.raises(RecordNotFound):
        svc.admin_delete(1, work_date)
