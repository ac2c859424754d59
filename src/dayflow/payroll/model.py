from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..attendance.model import AttendanceReportRow
from ..common.datetime_utils import parse_pay_period
from ..common.validators import require_cent_amount
from ..core import constants
from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class SalaryPolicy:
    """Rates and fixed amounts used to split a monthly wage into components.

    ``pf_cap`` limits each PF contribution; ``None`` leaves PF uncapped.
    """

    basic_rate: Decimal = constants.BASIC_RATE
    hra_rate: Decimal = constants.HRA_RATE
    standard_allowance: Decimal = constants.STANDARD_ALLOWANCE
    performance_bonus_rate: Decimal = constants.PERFORMANCE_BONUS_RATE
    lta_rate: Decimal = constants.LTA_RATE
    pf_rate: Decimal = constants.PF_RATE
    pf_cap: Optional[Decimal] = constants.PF_CAP
    professional_tax: Decimal = constants.PROFESSIONAL_TAX


DEFAULT_POLICY = SalaryPolicy()


@dataclass(frozen=True)
class SalaryComponents:
    """Earnings and deductions derived from one monthly wage."""

    basic: Decimal
    hra: Decimal
    standard_allowance: Decimal
    performance_bonus: Decimal
    lta: Decimal
    fixed_allowance: Decimal
    pf_employee: Decimal
    pf_employer: Decimal
    professional_tax: Decimal

    @property
    def gross_earnings(self) -> Decimal:
        return (
            self.basic
            + self.hra
            + self.standard_allowance
            + self.performance_bonus
            + self.lta
            + self.fixed_allowance
        )

    @property
    def total_deductions(self) -> Decimal:
        return self.pf_employee + self.professional_tax

    def as_dict(self) -> dict[str, Decimal]:
        return asdict(self)


@dataclass(frozen=True)
class PayrollRecord:
    """One payroll run for one employee and one pay period."""

    payroll_id: int
    user_id: int
    pay_period: str
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    status: PayrollStatus
    created_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None


@dataclass(frozen=True)
class PayrollHistoryRow:
    """Read-model: payroll record joined with the employee it belongs to."""

    record: PayrollRecord
    login_id: str
    full_name: str
    department: Optional[str]


@dataclass(frozen=True)
class NewPayroll:
    """Validated body of a "create payroll" request."""

    user_id: int
    pay_period: str
    basic_salary: Decimal
    allowances: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")

    @property
    def net_salary(self) -> Decimal:
        return self.basic_salary + self.allowances - self.deductions

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "NewPayroll":
        user_id = payload.get("userId")
        if user_id in (None, "") or not payload.get("payPeriod") or payload.get("basicSalary") in (None, ""):
            raise ValidationError("Missing required fields")
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            raise ValidationError("userId must be an integer")

        basic = require_cent_amount(payload["basicSalary"], "basicSalary", maximum=constants.MAX_STORED_AMOUNT)
        if basic == 0:
            raise ValidationError("basicSalary must be greater than zero")
        allowances = require_cent_amount(payload.get("allowances", 0), "allowances", maximum=constants.MAX_STORED_AMOUNT)
        deductions = require_cent_amount(payload.get("deductions", 0), "deductions", maximum=constants.MAX_STORED_AMOUNT)
        if basic + allowances - deductions > constants.MAX_STORED_AMOUNT:
            raise ValidationError(f"Net salary cannot exceed {constants.MAX_STORED_AMOUNT}")
        return cls(
            user_id=user_id,
            pay_period=parse_pay_period(payload["payPeriod"]),
            basic_salary=basic,
            allowances=allowances,
            deductions=deductions,
        )


@dataclass(frozen=True)
class SalarySlip:
    user_id: int
    login_id: str
    employee_name: str
    email: str
    department: Optional[str]
    job_title: Optional[str]
    date_joined: Optional[date]
    components: SalaryComponents
    monthly_wage: Decimal
    yearly_wage: Decimal
    working_days: Optional[int]
    working_hours: Optional[int]

    @property
    def gross_earnings(self) -> Decimal:
        return self.components.gross_earnings

    @property
    def total_deductions(self) -> Decimal:
        return self.components.total_deductions


@dataclass(frozen=True)
class SalarySummary:
    total_employees: int
    total_monthly_wage: Decimal
    total_yearly_wage: Decimal
    average_salary: Decimal
    total_employer_pf: Decimal
    total_employee_pf: Decimal


@dataclass(frozen=True)
class DepartmentWage:
    department: str
    total_wage: Decimal
    employee_count: int


@dataclass(frozen=True)
class SalaryStatistics:
    average_monthly: Decimal
    total_monthly: Decimal
    min_salary: Decimal
    max_salary: Decimal


@dataclass(frozen=True)
class PayPeriodSummary:
    pay_period: str
    total_payout: Decimal
    employees_processed: int


@dataclass(frozen=True)
class SalaryReport:
    salary_slips: list[SalarySlip]
    payroll_history: list[PayrollHistoryRow]
    summary: SalarySummary
    department_breakdown: list[DepartmentWage] = field(default_factory=list)



@dataclass(frozen=True)
class EmployeeAttendanceTotals:
    user_id: int
    login_id: str
    employee_name: str
    department: str
    total_days: int
    total_hours: float
    average_hours: float


@dataclass(frozen=True)
class AttendanceTotals:
    total_records: int
    total_work_hours: float
    total_extra_hours: float
    present_count: int
    late_count: int
    average_work_hours: float


@dataclass(frozen=True)
class AttendanceReport:
    rows: list[AttendanceReportRow]
    summary: AttendanceTotals
    employee_summary: list[EmployeeAttendanceTotals] = field(default_factory=list)
