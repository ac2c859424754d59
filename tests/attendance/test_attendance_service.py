from datetime import date, datetime, timedelta

import pytest

from dayflow.attendance.model import AttendanceRecord
from dayflow.core.enums import AttendanceStatus, DayStatus, LeaveStatus, LeaveType, Role
from dayflow.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from dayflow.leaves.model import LeaveRequest

ALICE = 3
BOB = 4


def test_check_in_within_grace_is_present(services, fixed_now):
    record = services.attendance_service.check_in(ALICE, now=fixed_now.replace(minute=15))
    assert record.status == AttendanceStatus.PRESENT
    assert record.work_date == fixed_now.date()


def test_check_in_after_grace_is_late(services, fixed_now):
    record = services.attendance_service.check_in(ALICE, now=fixed_now.replace(minute=16))
    assert record.status == AttendanceStatus.LATE


def test_check_in_twice_rejected(services, fixed_now):
    services.attendance_service.check_in(ALICE, now=fixed_now)
    with pytest.raises(ValidationError):
        services.attendance_service.check_in(ALICE, now=fixed_now + timedelta(hours=1))


def test_check_in_unknown_user(services, fixed_now):
    with pytest.raises(NotFoundError):
        services.attendance_service.check_in(999, now=fixed_now)


def test_check_out_computes_hours_and_overtime(services, repos, fixed_now):
    services.attendance_service.check_in(ALICE, now=fixed_now)

    record = services.attendance_service.check_out(ALICE, now=fixed_now + timedelta(hours=10, minutes=20))

    assert record.status == AttendanceStatus.PRESENT
    assert record.work_hours == 10.33
    assert record.extra_hours == 1.33
    assert repos.attendance.get_for_user_and_date(ALICE, fixed_now.date()).check_out_time is not None


def test_short_day_becomes_half_day(services, fixed_now):
    services.attendance_service.check_in(ALICE, now=fixed_now)

    record = services.attendance_service.check_out(ALICE, now=fixed_now + timedelta(hours=4))

    assert record.status == AttendanceStatus.HALF_DAY
    assert record.extra_hours == 0


def test_late_status_kept_on_full_day(services, fixed_now):
    late = fixed_now.replace(hour=10)
    services.attendance_service.check_in(ALICE, now=late)

    record = services.attendance_service.check_out(ALICE, now=late + timedelta(hours=9))

    assert record.status == AttendanceStatus.LATE
    assert record.work_hours == 9.0


def test_check_out_within_a_minute_rejected(services, fixed_now):
    services.attendance_service.check_in(ALICE, now=fixed_now)
    with pytest.raises(ValidationError):
        services.attendance_service.check_out(ALICE, now=fixed_now + timedelta(seconds=30))


def test_check_out_without_check_in(services, fixed_now):
    with pytest.raises(ValidationError, match="No active check-in found"):
        services.attendance_service.check_out(ALICE, now=fixed_now)


def test_check_out_closes_overnight_record(services, fixed_now):
    evening = fixed_now.replace(hour=22)
    services.attendance_service.check_in(ALICE, now=evening)

    record = services.attendance_service.check_out(ALICE, now=evening + timedelta(hours=5))

    assert record.work_date == evening.date()
    assert record.work_hours == 5.0


def test_check_out_closes_forgotten_records_too(services, repos, fixed_now):
    yesterday = fixed_now - timedelta(days=1)
    services.attendance_service.check_in(ALICE, now=yesterday)
    services.attendance_service.check_in(ALICE, now=fixed_now)

    record = services.attendance_service.check_out(ALICE, now=fixed_now + timedelta(hours=8))

    assert record.work_date == fixed_now.date()
    assert record.work_hours == 8.0
    assert repos.attendance.list_open(ALICE) == []
    stale = repos.attendance.get_for_user_and_date(ALICE, yesterday.date())
    assert stale.check_out_time == fixed_now + timedelta(hours=8)
    assert stale.work_hours == 32.0


def test_minimum_duration_only_checks_newest_record(services, repos, fixed_now):
    services.attendance_service.check_in(ALICE, now=fixed_now - timedelta(days=1))
    services.attendance_service.check_in(ALICE, now=fixed_now)

    with pytest.raises(ValidationError):
        services.attendance_service.check_out(ALICE, now=fixed_now + timedelta(seconds=30))

    assert len(repos.attendance.list_open(ALICE)) == 2


def test_today_reports_derived_status(services, fixed_now):
    record, status = services.attendance_service.today(ALICE, now=fixed_now)
    assert record is None
    assert status == DayStatus.NOT_CHECKED_IN

    services.attendance_service.check_in(ALICE, now=fixed_now)
    _, status = services.attendance_service.today(ALICE, now=fixed_now + timedelta(minutes=5))
    assert status == DayStatus.CHECKED_IN

    _, status = services.attendance_service.today(BOB, now=fixed_now.replace(hour=19))
    assert status == DayStatus.ABSENT


def test_history_summary(services, repos):
    days = [
        (date(2025, 3, 3), AttendanceStatus.PRESENT, 9.5, 0.5),
        (date(2025, 3, 4), AttendanceStatus.LATE, 8.0, 0.0),
        (date(2025, 3, 5), AttendanceStatus.HALF_DAY, 3.25, 0.0),
    ]
    for i, (day, status, hours, extra) in enumerate(days, start=1):
        repos.attendance.add(
            AttendanceRecord(
                attendance_id=i,
                user_id=ALICE,
                work_date=day,
                check_in_time=datetime.combine(day, datetime.min.time()).replace(hour=9),
                check_out_time=datetime.combine(day, datetime.min.time()).replace(hour=18),
                status=status,
                work_hours=hours,
                extra_hours=extra,
            )
        )

    history = services.attendance_service.history(ALICE, start_date=date(2025, 3, 1), end_date=date(2025, 3, 31))

    assert [r.work_date for r in history.records] == [date(2025, 3, 5), date(2025, 3, 4), date(2025, 3, 3)]
    s = history.summary
    assert (s.total_days, s.present_days, s.late_days, s.half_days) == (3, 1, 1, 1)
    assert s.total_work_hours == 20.75
    assert s.total_extra_hours == 0.5


def test_history_rejects_inverted_range(services):
    with pytest.raises(ValidationError):
        services.attendance_service.history(ALICE, start_date=date(2025, 3, 5), end_date=date(2025, 3, 1))


def test_daily_board_counts(services, repos, fixed_now):
    day = fixed_now.date()
    services.attendance_service.check_in(ALICE, now=fixed_now)
    repos.leaves.requests[1] = LeaveRequest(
        request_id=1,
        user_id=BOB,
        company_id=1,
        leave_type=LeaveType.PAID,
        start_date=day,
        end_date=day + timedelta(days=1),
        reason=None,
        status=LeaveStatus.APPROVED,
    )

    board = services.attendance_service.daily_board(
        current_role=Role.ADMIN, company_id=1, day=day, now=fixed_now.replace(hour=19)
    )

    statuses = {row.employee.user_id: row.status for row in board.rows}
    assert statuses == {
        1: DayStatus.ABSENT,
        2: DayStatus.ABSENT,
        ALICE: DayStatus.CHECKED_IN,
        BOB: DayStatus.ON_LEAVE,
    }
    assert board.stats["total"] == 4
    assert board.stats["present"] == 1
    assert board.stats["on_leave"] == 1
    assert board.stats["absent"] == 2
    assert board.stats["half_day"] == 0


def test_daily_board_before_end_of_day(services, fixed_now):
    board = services.attendance_service.daily_board(current_role=Role.HR, company_id=1, now=fixed_now)
    assert board.stats["not_checked_in"] == 4
    assert board.stats["absent"] == 0


def test_daily_board_requires_manager(services, fixed_now):
    with pytest.raises(AuthorizationError):
        services.attendance_service.daily_board(current_role=Role.EMPLOYEE, company_id=1, now=fixed_now)
