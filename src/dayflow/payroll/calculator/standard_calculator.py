from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from ...common.validators import CENT, require_non_negative_amount
from ..model import DEFAULT_POLICY, SalaryComponents, SalaryPolicy
from .base import SalaryCalculator

# Digits kept beyond the wage's own magnitude while splitting it
_EXTRA_DIGITS = 12


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_components(monthly_wage: Any, policy: SalaryPolicy = DEFAULT_POLICY) -> SalaryComponents:
    """Split a monthly wage into earning and deduction components.

    Every term is rounded to the cent before the fixed allowance is taken as
    the residual, so the six earnings add up to the wage exactly whenever the
    residual is non-negative. For small wages the fixed standard allowance
    alone exceeds the remainder; the fixed allowance is then clamped to zero.
    There is no upper limit on the wage.

    Raises ValidationError for negative or non-numeric input.
    """

    amount = require_non_negative_amount(monthly_wage, "Monthly wage")

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + _EXTRA_DIGITS)

        wage = _money(amount)
        basic = _money(wage * policy.basic_rate)
        hra = _money(basic * policy.hra_rate)
        standard_allowance = _money(policy.standard_allowance)
        performance_bonus = _money(wage * policy.performance_bonus_rate)
        lta = _money(wage * policy.lta_rate)

        subtotal = basic + hra + standard_allowance + performance_bonus + lta
        fixed_allowance = max(Decimal("0.00"), wage - subtotal)

        pf = basic * policy.pf_rate
        if policy.pf_cap is not None:
            pf = min(pf, policy.pf_cap)
        pf = _money(pf)

        return SalaryComponents(
            basic=basic,
            hra=hra,
            standard_allowance=standard_allowance,
            performance_bonus=performance_bonus,
            lta=lta,
            fixed_allowance=fixed_allowance,
            pf_employee=pf,
            pf_employer=pf,
            professional_tax=_money(policy.professional_tax),
        )


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: 50% basic, HRA on basic, PF on basic (capped)."""

    def __init__(self, policy: SalaryPolicy = DEFAULT_POLICY):
        self.policy = policy

    def compute_components(self, monthly_wage: Any) -> SalaryComponents:
        return compute_components(monthly_wage, self.policy)
