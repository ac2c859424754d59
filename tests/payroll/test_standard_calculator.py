from decimal import Decimal, localcontext

import pytest

from dayflow.core.exceptions import ValidationError
from dayflow.payroll.calculator.standard_calculator import StandardSalaryCalculator, compute_components
from dayflow.payroll.model import SalaryPolicy


def _earnings_sum(c):
    return c.basic + c.hra + c.standard_allowance + c.performance_bonus + c.lta + c.fixed_allowance


def test_components_for_50000():
    c = compute_components(50000)

    assert c.basic == Decimal("25000.00")
    assert c.hra == Decimal("12500.00")
    assert c.standard_allowance == Decimal("4167.00")
    assert c.performance_bonus == Decimal("4165.00")
    assert c.lta == Decimal("4165.00")
    assert c.fixed_allowance == Decimal("3.00")
    assert c.pf_employee == Decimal("1800.00")
    assert c.pf_employer == Decimal("1800.00")
    assert c.professional_tax == Decimal("200.00")
    assert c.gross_earnings == Decimal("50000.00")
    assert c.total_deductions == Decimal("2000.00")


def test_zero_wage_keeps_fixed_amounts_only():
    c = compute_components(0)

    assert c.basic == c.hra == c.performance_bonus == c.lta == Decimal("0")
    assert c.fixed_allowance == Decimal("0")
    assert c.pf_employee == c.pf_employer == Decimal("0")
    assert c.standard_allowance == Decimal("4167")
    assert c.professional_tax == Decimal("200")


@pytest.mark.parametrize("wage", [0, 1, 1000, 20000, 49963, 49964, 50000, 123456.78, 1000000])
def test_components_are_never_negative(wage):
    c = compute_components(wage)
    assert all(v >= 0 for v in c.as_dict().values())


@pytest.mark.parametrize("wage", [50000, 60000, 75000.5, 250000, 9999999])
def test_earnings_add_up_to_wage_above_threshold(wage):
    c = compute_components(wage)
    assert _earnings_sum(c) == Decimal(str(wage)).quantize(Decimal("0.01"))


def test_small_wage_clamps_fixed_allowance():
    c = compute_components(10000)
    assert c.fixed_allowance == Decimal("0.00")
    assert _earnings_sum(c) > Decimal("10000")


def test_pf_below_cap_is_twelve_percent_of_basic():
    c = compute_components(20000)
    assert c.pf_employee == Decimal("1200.00")


def test_uncapped_policy_uses_full_rate():
    c = compute_components(50000, SalaryPolicy(pf_cap=None))
    assert c.pf_employee == Decimal("3000.00")
    assert c.pf_employer == Decimal("3000.00")


def test_large_wage_has_no_upper_clamp():
    c = compute_components(1000000)
    assert c.fixed_allowance == Decimal("1000000") - (
        c.basic + c.hra + c.standard_allowance + c.performance_bonus + c.lta
    )
    assert c.pf_employee == Decimal("1800.00")


def test_deterministic_and_accepts_numeric_strings():
    assert compute_components("50000") == compute_components(Decimal("50000")) == compute_components(50000)


@pytest.mark.parametrize("bad", [-1, "-0.01", True, False, None, "abc", float("nan"), float("inf")])
def test_invalid_wage_rejected(bad):
    with pytest.raises(ValidationError):
        compute_components(bad)


def test_yearly_wage_is_twelve_months():
    calc = StandardSalaryCalculator()
    assert calc.yearly_wage(50000) == Decimal("600000")
    assert calc.yearly_wage("1234.56") == Decimal("14814.72")


def test_calculator_uses_its_policy():
    calc = StandardSalaryCalculator(SalaryPolicy(pf_cap=Decimal("1500")))
    assert calc.compute_components(50000).pf_employee == Decimal("1500.00")


def test_very_large_wage_has_no_upper_limit():
    wage = Decimal("1e26")

    c = compute_components(wage)

    assert c.basic == wage / 2
    assert c.pf_employee == Decimal("1800.00")
    with localcontext() as ctx:
        ctx.prec = 50
        assert _earnings_sum(c) == wage
