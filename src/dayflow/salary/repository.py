from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..payroll.model import SalaryComponents
from .model import EmployeeSalary, SalaryInfo, WageInput


class SalaryRepository(Protocol):
    def get_for_user(self, user_id: int) -> Optional[SalaryInfo]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        user_id: int,
        wage: WageInput,
        yearly_wage: Decimal,
        components: SalaryComponents,
    ) -> None:
        """Create the user's salary row, or overwrite it when it exists."""

        raise NotImplementedError

    def list_with_employees(self, *, company_id: int, user_id: Optional[int] = None) -> Sequence[EmployeeSalary]:
        raise NotImplementedError
