"""Derive the display status of an employee for one day.

The status is never stored; it is re-evaluated from the day's attendance
record (if any) plus approved leave each time it is shown.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus, DayStatus
from .model import AttendanceRecord, AttendancePolicy


def worked_hours(check_in: datetime, check_out: datetime) -> float:
    return max((check_out - check_in).total_seconds(), 0) / 3600


def extra_hours(hours: float, policy: AttendancePolicy) -> float:
    return max(hours - policy.work_hours, 0.0)


def derive_day_status(record: Optional[AttendanceRecord], *, on_leave: bool = False, day_over: bool = False) -> DayStatus:
    if record is None:
        if on_leave:
            return DayStatus.ON_LEAVE
        if day_over:
            return DayStatus.ABSENT
        return DayStatus.NOT_CHECKED_IN

    if record.status == AttendanceStatus.HALF_DAY:
        return DayStatus.HALF_DAY
    if record.status == AttendanceStatus.LATE:
        return DayStatus.LATE
    if record.check_out_time is not None:
        return DayStatus.CHECKED_OUT
    return DayStatus.CHECKED_IN
