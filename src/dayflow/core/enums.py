from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Status persisted on an attendance record."""

    PRESENT = "present"
    LATE = "late"
    HALF_DAY = "half-day"


class DayStatus(str, Enum):
    """Status of an employee for one day, derived for display."""

    NOT_CHECKED_IN = "not-checked-in"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    LATE = "late"
    HALF_DAY = "half-day"
    ON_LEAVE = "on-leave"
    ABSENT = "absent"


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    PROCESSED = "processed"


class LeaveStatus(str, Enum):
    """Approval workflow status of a leave request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LeaveType(str, Enum):
    PAID = "paid"
    SICK = "sick"
    UNPAID = "unpaid"


class NotificationType(str, Enum):
    ANNOUNCEMENT = "ANNOUNCEMENT"
    LEAVE = "LEAVE"
    PAYROLL = "PAYROLL"
    SYSTEM = "SYSTEM"
