from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from ...common.validators import require_non_negative_amount
from ...core.constants import MONTHS_PER_YEAR
from ..model import SalaryComponents


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for salary structures)."""

    @abstractmethod
    def compute_components(self, monthly_wage: Any) -> SalaryComponents:
        raise NotImplementedError

    def yearly_wage(self, monthly_wage: Any) -> Decimal:
        return require_non_negative_amount(monthly_wage, "Monthly wage") * MONTHS_PER_YEAR
