from __future__ import annotations

from datetime import date, timedelta

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import pay_period_of
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError
from ..leaves.service import LeaveService
from ..notifications.service import NotificationService
from ..payroll.aggregation import UNASSIGNED, salary_statistics
from ..payroll.service import PayrollService
from ..salary.repository import SalaryRepository
from ..users.repository import UserRepository
from .model import Dashboard, Overview

WEEK_DAYS = 7


class AnalyticsService:
    """Company-wide figures for the admin dashboard."""

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        salaries: SalaryRepository,
        payroll: PayrollService,
        leaves: LeaveService,
        notifications: NotificationService,
    ):
        self._users = users
        self._attendance = attendance
        self._salaries = salaries
        self._payroll = payroll
        self._leaves = leaves
        self._notifications = notifications

    def dashboard(self, *, current_role: Role, company_id: int, today: date | None = None) -> Dashboard:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        today = today or date.today()
        company_id = int(company_id)

        employees = [u for u in self._users.list_for_company(company_id) if u.is_active]
        departments: dict[str, int] = {}
        for e in employees:
            key = e.department or UNASSIGNED
            departments[key] = departments.get(key, 0) + 1

        week_start = today - timedelta(days=WEEK_DAYS - 1)
        counts = self._attendance.count_by_date(company_id, start_date=week_start, end_date=today)
        weekly = [(week_start + timedelta(days=i), counts.get(week_start + timedelta(days=i), 0)) for i in range(WEEK_DAYS)]

        total = len(employees)
        present = min(counts.get(today, 0), total)
        overview = Overview(
            total_employees=total,
            present_today=present,
            absent_today=total - present,
            attendance_rate=round(present * 100 / total) if total else 0,
        )

        leaves = self._leaves.status_counts(company_id)
        leaves["total"] = sum(leaves[s.value] for s in LeaveStatus)

        wages = [row.info.monthly_wage for row in self._salaries.list_with_employees(company_id=company_id)]

        return Dashboard(
            overview=overview,
            departments=list(departments.items()),
            weekly_attendance=weekly,
            leaves=leaves,
            salary=salary_statistics(wages),
            payroll=self._payroll.period_summary(company_id=company_id, pay_period=pay_period_of(today)),
            unread_notifications=self._notifications.unread_count(company_id=company_id),
        )
