"""Read-only roll-ups over stored salary and payroll rows.

All functions are pure: they never touch the database and an empty input
yields zero figures rather than an error.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from ..attendance.model import AttendanceReportRow
from ..common.validators import round_cents
from ..core.enums import AttendanceStatus, PayrollStatus
from ..salary.model import EmployeeSalary, SalaryInfo
from .model import (
    AttendanceTotals,
    DepartmentWage,
    EmployeeAttendanceTotals,
    PayPeriodSummary,
    PayrollRecord,
    SalarySlip,
    SalaryStatistics,
    SalarySummary,
)

ZERO = Decimal("0")
UNASSIGNED = "Unassigned"


def build_salary_slip(row: EmployeeSalary) -> SalarySlip:
    """Salary slip replaying the components stored at save time."""

    info, employee = row.info, row.employee
    return SalarySlip(
        user_id=employee.user_id,
        login_id=employee.login_id,
        employee_name=employee.full_name,
        email=employee.email,
        department=employee.department,
        job_title=employee.job_title,
        date_joined=employee.date_joined,
        components=info.components,
        monthly_wage=info.monthly_wage,
        yearly_wage=info.yearly_wage,
        working_days=info.working_days,
        working_hours=info.working_hours,
    )


def summarize_salaries(infos: Iterable[SalaryInfo]) -> SalarySummary:
    infos = list(infos)
    total_monthly = sum((i.monthly_wage for i in infos), ZERO)
    total_yearly = sum((i.yearly_wage for i in infos), ZERO)
    total_employer_pf = sum((i.components.pf_employer for i in infos), ZERO)
    total_employee_pf = sum((i.components.pf_employee for i in infos), ZERO)
    average = total_monthly / len(infos) if infos else ZERO

    return SalarySummary(
        total_employees=len(infos),
        total_monthly_wage=round_cents(total_monthly),
        total_yearly_wage=round_cents(total_yearly),
        average_salary=round_cents(average),
        total_employer_pf=round_cents(total_employer_pf),
        total_employee_pf=round_cents(total_employee_pf),
    )


def department_breakdown(rows: Iterable[tuple[Optional[str], Decimal]]) -> list[DepartmentWage]:
    """Sum of monthly wage and headcount per department, in first-seen order."""

    totals: dict[str, list] = {}
    for department, wage in rows:
        key = department or UNASSIGNED
        bucket = totals.setdefault(key, [ZERO, 0])
        bucket[0] += wage
        bucket[1] += 1

    return [
        DepartmentWage(department=name, total_wage=total, employee_count=count)
        for name, (total, count) in totals.items()
    ]


def salary_statistics(wages: Iterable[Decimal]) -> SalaryStatistics:
    wages = list(wages)
    if not wages:
        return SalaryStatistics(average_monthly=ZERO, total_monthly=ZERO, min_salary=ZERO, max_salary=ZERO)

    total = sum(wages, ZERO)
    return SalaryStatistics(
        average_monthly=round_cents(total / len(wages)),
        total_monthly=total,
        min_salary=min(wages),
        max_salary=max(wages),
    )


def summarize_pay_period(records: Iterable[PayrollRecord], pay_period: str) -> PayPeriodSummary:
    """Net payout and processed headcount of one pay period.

    Only processed records count; drafts are still open for review.
    """

    processed = [r for r in records if r.pay_period == pay_period and r.status == PayrollStatus.PROCESSED]
    return PayPeriodSummary(
        pay_period=pay_period,
        total_payout=round_cents(sum((r.net_salary for r in processed), ZERO)),
        employees_processed=len(processed),
    )


def summarize_attendance(rows: list[AttendanceReportRow]) -> tuple[AttendanceTotals, list[EmployeeAttendanceTotals]]:
    """Overall totals plus per-employee days and hours, busiest employee first."""

    total_hours = sum(r.record.work_hours or 0.0 for r in rows)
    totals = AttendanceTotals(
        total_records=len(rows),
        total_work_hours=round(total_hours, 2),
        total_extra_hours=round(sum(r.record.extra_hours or 0.0 for r in rows), 2),
        present_count=sum(1 for r in rows if r.record.status == AttendanceStatus.PRESENT),
        late_count=sum(1 for r in rows if r.record.status == AttendanceStatus.LATE),
        average_work_hours=round(total_hours / len(rows), 2) if rows else 0.0,
    )

    per_user: dict[int, list] = {}
    for r in rows:
        bucket = per_user.setdefault(r.record.user_id, [r, 0, 0.0])
        bucket[1] += 1
        bucket[2] += r.record.work_hours or 0.0

    employees = [
        EmployeeAttendanceTotals(
            user_id=first.record.user_id,
            login_id=first.login_id,
            employee_name=first.full_name,
            department=first.department or UNASSIGNED,
            total_days=days,
            total_hours=round(hours, 2),
            average_hours=round(hours / days, 2),
        )
        for first, days, hours in per_user.values()
    ]
    employees.sort(key=lambda e: e.total_hours, reverse=True)
    return totals, employees
