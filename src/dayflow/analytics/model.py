from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..payroll.model import PayPeriodSummary, SalaryStatistics


@dataclass(frozen=True)
class Overview:
    total_employees: int
    present_today: int
    absent_today: int
    attendance_rate: int


@dataclass(frozen=True)
class Dashboard:
    """Read-model behind the admin analytics page."""

    overview: Overview
    departments: list[tuple[str, int]]
    weekly_attendance: list[tuple[date, int]]
    leaves: dict[str, int]
    salary: SalaryStatistics
    payroll: PayPeriodSummary
    unread_notifications: int
