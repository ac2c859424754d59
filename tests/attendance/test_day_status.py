from datetime import date, datetime

import pytest

from dayflow.attendance.model import AttendanceRecord
from dayflow.attendance.status import derive_day_status, worked_hours
from dayflow.core.enums import AttendanceStatus, DayStatus


def _record(status=AttendanceStatus.PRESENT, checked_out=False) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=1,
        user_id=1,
        work_date=date(2025, 3, 10),
        check_in_time=datetime(2025, 3, 10, 9, 0),
        check_out_time=datetime(2025, 3, 10, 18, 0) if checked_out else None,
        status=status,
    )


@pytest.mark.parametrize(
    "on_leave, day_over, expected",
    [
        (True, False, DayStatus.ON_LEAVE),
        (True, True, DayStatus.ON_LEAVE),
        (False, True, DayStatus.ABSENT),
        (False, False, DayStatus.NOT_CHECKED_IN),
    ],
)
def test_status_without_record(on_leave, day_over, expected):
    assert derive_day_status(None, on_leave=on_leave, day_over=day_over) == expected


def test_status_from_record():
    assert derive_day_status(_record()) == DayStatus.CHECKED_IN
    assert derive_day_status(_record(checked_out=True)) == DayStatus.CHECKED_OUT
    assert derive_day_status(_record(AttendanceStatus.LATE)) == DayStatus.LATE
    assert derive_day_status(_record(AttendanceStatus.HALF_DAY, checked_out=True)) == DayStatus.HALF_DAY


def test_record_wins_over_leave():
    assert derive_day_status(_record(), on_leave=True, day_over=True) == DayStatus.CHECKED_IN


def test_worked_hours_never_negative():
    start = datetime(2025, 3, 10, 9, 0)
    assert worked_hours(start, datetime(2025, 3, 10, 13, 30)) == 4.5
    assert worked_hours(start, datetime(2025, 3, 10, 8, 0)) == 0
