from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_date
from ..core import constants
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    company_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: Optional[str]
    status: LeaveStatus
    created_at: Optional[datetime] = None
    admin_comment: Optional[str] = None
    employee_name: Optional[str] = None
    login_id: Optional[str] = None

    @property
    def days(self) -> int:
        return leave_days(self.start_date, self.end_date)

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "userId": self.user_id,
            "employeeName": self.employee_name,
            "loginId": self.login_id,
            "leaveType": self.leave_type.value,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "days": self.days,
            "reason": self.reason,
            "status": self.status.value,
            "adminComment": self.admin_comment,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class LeaveBalance:
    user_id: int
    year: int
    paid_days_left: int = constants.DEFAULT_PAID_LEAVE_DAYS
    sick_days_left: int = constants.DEFAULT_SICK_LEAVE_DAYS
    unpaid_days_left: int = constants.DEFAULT_UNPAID_LEAVE_DAYS

    def available(self, leave_type: LeaveType) -> int:
        return {
            LeaveType.PAID: self.paid_days_left,
            LeaveType.SICK: self.sick_days_left,
            LeaveType.UNPAID: self.unpaid_days_left,
        }[leave_type]

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "year": self.year,
            "paidDaysLeft": self.paid_days_left,
            "sickDaysLeft": self.sick_days_left,
            "unpaidDaysLeft": self.unpaid_days_left,
        }


def leave_days(start_date: date, end_date: date) -> int:
    """Calendar days in the range, both ends included."""

    return (end_date - start_date).days + 1


@dataclass(frozen=True)
class NewLeave:
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: Optional[str] = None

    @property
    def days(self) -> int:
        return leave_days(self.start_date, self.end_date)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "NewLeave":
        if not payload.get("startDate") or not payload.get("endDate") or not payload.get("leaveType"):
            raise ValidationError("Missing required fields")

        try:
            leave_type = LeaveType(str(payload["leaveType"]).strip().lower())
        except ValueError:
            raise ValidationError("Invalid leave type")

        start = parse_iso_date(payload["startDate"])
        end = parse_iso_date(payload["endDate"])
        if start > end:
            raise ValidationError("Start date must be before end date")

        return cls(
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            reason=(payload.get("reason") or "").strip() or None,
        )


@dataclass(frozen=True)
class LeaveDecision:
    status: LeaveStatus
    admin_comment: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "LeaveDecision":
        raw = str(payload.get("status") or "").strip().upper()
        if raw not in (LeaveStatus.APPROVED.value, LeaveStatus.REJECTED.value):
            raise ValidationError("Invalid status")
        return cls(status=LeaveStatus(raw), admin_comment=(payload.get("adminComment") or "").strip() or None)
