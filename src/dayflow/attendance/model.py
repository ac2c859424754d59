from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..company.model import Company
from ..core import constants
from ..core.enums import AttendanceStatus, DayStatus
from ..users.model import User


@dataclass(frozen=True)
class AttendancePolicy:
    """Company thresholds that drive status derivation."""

    start_time: time = parse_hhmm(constants.DEFAULT_START_TIME)
    grace_minutes: int = constants.DEFAULT_GRACE_MINUTES
    work_hours: float = constants.DEFAULT_WORK_HOURS

    @classmethod
    def from_company(cls, company: Company) -> "AttendancePolicy":
        return cls(start_time=company.start_time, grace_minutes=company.grace_period, work_hours=company.work_hours)


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record (one per user per day)."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    work_hours: Optional[float] = None
    extra_hours: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "checkIn": self.check_in_time.isoformat(),
            "checkOut": self.check_out_time.isoformat() if self.check_out_time else None,
            "status": self.status.value,
            "workHours": self.work_hours,
            "extraHours": self.extra_hours,
        }


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model: attendance record joined with the employee it belongs to."""

    record: AttendanceRecord
    login_id: str
    full_name: str
    department: Optional[str]


@dataclass(frozen=True)
class AttendanceSummary:
    total_days: int
    present_days: int
    late_days: int
    half_days: int
    total_work_hours: float
    total_extra_hours: float


@dataclass(frozen=True)
class AttendanceHistory:
    records: list[AttendanceRecord]
    summary: AttendanceSummary


@dataclass(frozen=True)
class BoardRow:
    """Read-model: one employee's status on the admin attendance board."""

    employee: User
    record: Optional[AttendanceRecord]
    status: DayStatus


@dataclass(frozen=True)
class DailyBoard:
    work_date: date
    rows: list[BoardRow]
    stats: dict[str, int] = field(default_factory=dict)
