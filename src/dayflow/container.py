from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .analytics.service import AnalyticsService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.validators import require_non_negative_amount
from .company.mysql_company_repository import MySQLCompanyRepository
from .company.service import CompanyService
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .payroll.calculator.standard_calculator import StandardSalaryCalculator
from .payroll.model import SalaryPolicy
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollReportService, PayrollService
from .salary.mysql_salary_repository import MySQLSalaryRepository
from .salary.service import SalaryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, EmployeeService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    employee_service: EmployeeService
    company_service: CompanyService
    salary_service: SalaryService
    payroll_service: PayrollService
    payroll_report_service: PayrollReportService
    attendance_service: AttendanceService
    leave_service: LeaveService
    notification_service: NotificationService
    analytics_service: AnalyticsService


def parse_pf_cap(value) -> Optional[Decimal]:
    """PF ceiling from settings; empty or "none" turns the cap off."""

    if value is None:
        return constants.PF_CAP
    raw = str(value).strip().lower()
    if raw in ("", "none"):
        return None
    return require_non_negative_amount(raw, "PF_CAP")


def build_services(
    *,
    users_repo,
    companies_repo,
    salaries_repo,
    payrolls_repo,
    attendance_repo,
    leaves_repo,
    notifications_repo,
    policy: SalaryPolicy | None = None,
    default_grace_minutes: int = constants.DEFAULT_GRACE_MINUTES,
) -> Container:
    """Wire services over any repository implementations."""

    employee_service = EmployeeService(users_repo, companies_repo)
    payroll_service = PayrollService(payrolls_repo, employee_service)
    leave_service = LeaveService(leaves_repo)
    notification_service = NotificationService(notifications_repo, users_repo)

    return Container(
        auth_service=AuthService(users_repo),
        employee_service=employee_service,
        company_service=CompanyService(companies_repo),
        salary_service=SalaryService(
            salaries_repo,
            employee_service,
            calculator=StandardSalaryCalculator(policy or SalaryPolicy()),
        ),
        payroll_service=payroll_service,
        payroll_report_service=PayrollReportService(salaries_repo, payrolls_repo, attendance_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            companies_repo,
            leaves_repo,
            strategy_factory=AttendanceStrategyFactory(),
            default_grace_minutes=default_grace_minutes,
        ),
        leave_service=leave_service,
        notification_service=notification_service,
        analytics_service=AnalyticsService(
            users_repo,
            attendance_repo,
            salaries_repo,
            payroll_service,
            leave_service,
            notification_service,
        ),
    )


def build_container(
    *,
    db_config: dict,
    pf_cap=None,
    default_grace_minutes: int = constants.DEFAULT_GRACE_MINUTES,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        companies_repo=MySQLCompanyRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        payrolls_repo=MySQLPayrollRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        policy=SalaryPolicy(pf_cap=parse_pf_cap(pf_cap)),
        default_grace_minutes=default_grace_minutes,
    )
