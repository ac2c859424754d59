from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.enums import PayrollStatus, Role
from ..core.exceptions import AuthorizationError, DuplicateRecordError, NotFoundError, ValidationError
from ..salary.repository import SalaryRepository
from ..users.service import EmployeeService
from .aggregation import (
    build_salary_slip,
    department_breakdown,
    summarize_attendance,
    summarize_pay_period,
    summarize_salaries,
)
from .model import AttendanceReport, NewPayroll, PayPeriodSummary, PayrollHistoryRow, PayrollRecord, SalaryReport
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

PAYROLL_MANAGERS = {Role.ADMIN, Role.HR}


class PayrollService:
    """Use case: create, process and list payroll records."""

    def __init__(self, payrolls: PayrollRepository, employees: EmployeeService):
        self._payrolls = payrolls
        self._employees = employees

    @staticmethod
    def _require_manager(current_role: Role) -> None:
        if current_role not in PAYROLL_MANAGERS:
            raise AuthorizationError("Admin or HR access required")

    def create_payroll(self, *, current_role: Role, company_id: int, payroll: NewPayroll) -> PayrollRecord:
        self._require_manager(current_role)
        self._employees.get_in_company(company_id=company_id, user_id=payroll.user_id)

        if self._payrolls.get_for_user_and_period(payroll.user_id, payroll.pay_period):
            raise DuplicateRecordError("Payroll already exists for this period")

        payroll_id = self._payrolls.create(payroll)
        logger.info(
            "Payroll %s created for user %s period %s net=%s",
            payroll_id,
            payroll.user_id,
            payroll.pay_period,
            payroll.net_salary,
        )
        return self._payrolls.get_by_id(payroll_id)

    def process_payroll(
        self,
        *,
        current_role: Role,
        company_id: int,
        payroll_id: int,
        now: Optional[datetime] = None,
    ) -> PayrollRecord:
        """Finalize a draft. Processed records are never modified again."""

        self._require_manager(current_role)

        record = self._payrolls.get_by_id(int(payroll_id))
        if not record:
            raise NotFoundError("Payroll not found")
        self._employees.get_in_company(company_id=company_id, user_id=record.user_id)
        if record.status != PayrollStatus.DRAFT:
            raise ValidationError("Payroll has already been processed")

        if not self._payrolls.mark_processed(record.payroll_id, processed_at=now or datetime.now()):
            raise ValidationError("Payroll has already been processed")
        logger.info("Payroll %s processed", record.payroll_id)
        return self._payrolls.get_by_id(record.payroll_id)

    def list_payrolls(
        self,
        *,
        current_role: Role,
        current_user_id: int,
        company_id: int,
        employee_id: Optional[int] = None,
        pay_period: Optional[str] = None,
    ) -> list[PayrollHistoryRow]:
        # Employees only ever see their own payroll
        if current_role not in PAYROLL_MANAGERS:
            employee_id = current_user_id

        return list(
            self._payrolls.list_history(company_id=int(company_id), user_id=employee_id, pay_period=pay_period)
        )

    def period_summary(self, *, company_id: int, pay_period: str) -> PayPeriodSummary:
        rows = self._payrolls.list_history(company_id=int(company_id), pay_period=pay_period)
        return summarize_pay_period((r.record for r in rows), pay_period)


class PayrollReportService:
    """Company-wide reports: salary slips, payroll history and attendance totals."""

    def __init__(self, salaries: SalaryRepository, payrolls: PayrollRepository, attendance: AttendanceRepository):
        self._salaries = salaries
        self._payrolls = payrolls
        self._attendance = attendance

    @staticmethod
    def _require_manager(current_role: Role) -> None:
        if current_role not in PAYROLL_MANAGERS:
            raise AuthorizationError("Admin or HR access required")

    def build_salary_report(
        self,
        *,
        current_role: Role,
        company_id: int,
        employee_id: Optional[int] = None,
        pay_period: Optional[str] = None,
        department: Optional[str] = None,
    ) -> SalaryReport:
        self._require_manager(current_role)

        rows = self._salaries.list_with_employees(company_id=int(company_id), user_id=employee_id)
        if department:
            rows = [r for r in rows if r.employee.department == department]

        history = self._payrolls.list_history(company_id=int(company_id), user_id=employee_id, pay_period=pay_period)

        return SalaryReport(
            salary_slips=[build_salary_slip(r) for r in rows],
            payroll_history=list(history),
            summary=summarize_salaries(r.info for r in rows),
            department_breakdown=department_breakdown((r.employee.department, r.info.monthly_wage) for r in rows),
        )

    def build_attendance_report(
        self,
        *,
        current_role: Role,
        company_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        department: Optional[str] = None,
    ) -> AttendanceReport:
        """Attendance records in a date range with overall and per-employee totals.

        Either bound may be omitted. Hours are those stored at checkout, so open
        records count as days with zero hours.
        """

        self._require_manager(current_role)
        if start and end and start > end:
            raise ValidationError("Start date must be before end date")

        rows = list(
            self._attendance.get_report_rows(company_id=int(company_id), start_date=start, end_date=end, user_id=employee_id)
        )
        if department:
            rows = [r for r in rows if r.department == department]

        summary, employee_summary = summarize_attendance(rows)
        return AttendanceReport(rows=rows, summary=summary, employee_summary=employee_summary)
