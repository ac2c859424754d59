from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.validators import round_cents
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..payroll.calculator.base import SalaryCalculator
from ..payroll.calculator.standard_calculator import StandardSalaryCalculator
from ..users.service import EmployeeService
from .model import SalaryInfo, WageInput
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class SalaryService:
    """Use case: view and set an employee's salary structure (admin)."""

    def __init__(
        self,
        salaries: SalaryRepository,
        employees: EmployeeService,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._salaries = salaries
        self._employees = employees
        self._calculator = calculator or StandardSalaryCalculator()

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

    def get_salary_info(self, *, current_role: Role, company_id: int, user_id: int) -> Optional[SalaryInfo]:
        self._require_admin(current_role)
        user = self._employees.get_in_company(company_id=company_id, user_id=user_id)
        return self._salaries.get_for_user(user.user_id)

    def update_salary(self, *, current_role: Role, company_id: int, user_id: int, wage: WageInput) -> SalaryInfo:
        """Recompute every component from the wage and store the result."""

        self._require_admin(current_role)
        user = self._employees.get_in_company(company_id=company_id, user_id=user_id)

        wage = replace(wage, monthly_wage=round_cents(wage.monthly_wage))
        components = self._calculator.compute_components(wage.monthly_wage)
        yearly = self._calculator.yearly_wage(wage.monthly_wage)
        self._salaries.upsert(user_id=user.user_id, wage=wage, yearly_wage=yearly, components=components)
        logger.info("Salary updated for user %s: monthly=%s yearly=%s", user.user_id, wage.monthly_wage, yearly)

        return SalaryInfo(
            user_id=user.user_id,
            monthly_wage=wage.monthly_wage,
            yearly_wage=yearly,
            components=components,
            working_days=wage.working_days,
            working_hours=wage.working_hours,
        )
