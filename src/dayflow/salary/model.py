from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.validators import optional_non_negative_int, require_cent_amount
from ..core import constants
from ..core.exceptions import ValidationError
from ..payroll.model import SalaryComponents
from ..users.model import User


@dataclass(frozen=True)
class WageInput:
    """Validated body of a salary update: the wage plus optional schedule."""

    monthly_wage: Decimal
    working_days: Optional[int] = None
    working_hours: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "WageInput":
        """The wage is rounded to the cent; everything stored derives from that amount."""

        if "monthlyWage" not in payload:
            raise ValidationError("monthlyWage is required")
        wage = require_cent_amount(payload["monthlyWage"], "monthlyWage", maximum=constants.MAX_STORED_AMOUNT)
        return cls(
            monthly_wage=wage,
            working_days=optional_non_negative_int(payload.get("workingDays"), "workingDays"),
            working_hours=optional_non_negative_int(payload.get("workingHours"), "workingHours"),
        )


@dataclass(frozen=True)
class SalaryInfo:
    """Stored salary structure of one employee (one row per user)."""

    user_id: int
    monthly_wage: Decimal
    yearly_wage: Decimal
    components: SalaryComponents
    working_days: Optional[int] = None
    working_hours: Optional[int] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class EmployeeSalary:
    """Read-model: salary info joined with the employee it belongs to."""

    info: SalaryInfo
    employee: User
