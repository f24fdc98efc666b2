"""Unit tests for retirement pension accrual and taxation."""

from __future__ import annotations

import pytest

from pensionkr.backend.app.services.calculators import retirement_pension
from pensionkr.backend.app.services.calculators.utils import CalculationDomainError


def test_calc_db_multiplies_average_wage_by_service() -> None:
    assert retirement_pension.calc_db(3_000_000, 10) == 30_000_000
    assert retirement_pension.calc_db(3_000_000, 0) == 0


def test_calc_dc_compounds_annual_contributions() -> None:
    assert retirement_pension.calc_dc(1_000_000, 2, return_rate=0.1) == 2_310_000


def test_calc_dc_rounds_partial_years_up() -> None:
    assert retirement_pension.calc_dc(1_000_000, 1.5, return_rate=0.1) == 2_310_000


def test_calc_dc_without_service_is_zero() -> None:
    assert retirement_pension.calc_dc(5_000_000, 0) == 0


def test_irp_tax_credit_caps_pension_saving(config) -> None:
    credit = retirement_pension.irp_tax_credit(config, 8_000_000, 3_000_000, 50_000_000)

    assert credit.pension_saving_applied == 6_000_000
    assert credit.total_deductible == 9_000_000
    assert credit.rate == pytest.approx(0.165)
    assert credit.credit_amount == 1_485_000
    assert credit.effective_rate == pytest.approx(0.165)


def test_irp_tax_credit_uses_lower_rate_above_salary_threshold(config) -> None:
    credit = retirement_pension.irp_tax_credit(config, 6_000_000, 3_000_000, 60_000_000)

    assert credit.rate == pytest.approx(0.132)
    assert credit.credit_amount == 1_188_000


def test_irp_tax_credit_without_contributions(config) -> None:
    credit = retirement_pension.irp_tax_credit(config, 0, 0, 40_000_000)

    assert credit.credit_amount == 0
    assert credit.effective_rate == 0.0


def test_retirement_income_tax_stages(config) -> None:
    result = retirement_pension.retirement_income_tax(config, 100_000_000, 10)

    assert result.service_deduction == pytest.approx(15_000_000)
    assert result.tax_base == pytest.approx(85_000_000)
    assert result.converted_income == 102_000_000
    assert result.converted_deduction == pytest.approx(62_600_000)
    assert result.taxable_converted == pytest.approx(39_400_000)
    assert result.converted_tax == 4_650_000
    assert result.income_tax == 3_875_000
    assert result.local_tax == 387_500
    assert result.total_tax == 4_262_500
    assert result.net_amount == pytest.approx(95_737_500)
    assert result.effective_rate == pytest.approx(0.042625)


def test_retirement_income_tax_is_zero_when_deduction_covers_income(config) -> None:
    result = retirement_pension.retirement_income_tax(config, 10_000_000, 20)

    assert result.tax_base == 0
    assert result.total_tax == 0
    assert result.net_amount == pytest.approx(10_000_000)


@pytest.mark.parametrize("years", [0, -1])
def test_retirement_income_tax_requires_positive_service(config, years: float) -> None:
    with pytest.raises(CalculationDomainError):
        retirement_pension.retirement_income_tax(config, 50_000_000, years)


@pytest.mark.parametrize(
    ("age", "expected"), [(55, 0.055), (69, 0.055), (70, 0.044), (79, 0.044), (80, 0.033)]
)
def test_pension_tax_rate_by_start_age(config, age: int, expected: float) -> None:
    assert retirement_pension.pension_tax_rate(config, age) == pytest.approx(expected)


def test_lump_sum_vs_pension_amortises_balance(config) -> None:
    comparison = retirement_pension.compare_lump_sum_vs_pension(
        config, 100_000_000, 10, pension_years=10, return_rate=0.03, start_age=55
    )

    payouts = comparison.pension.payouts
    assert len(payouts) == 120
    assert [payout.month for payout in payouts] == list(range(1, 121))
    assert abs(payouts[-1].balance) <= 1
    assert comparison.pension.tax_rate == pytest.approx(0.055)
    assert comparison.lump_sum.tax == 4_262_500
    assert comparison.lump_sum.net == pytest.approx(95_737_500)


def test_lump_sum_vs_pension_without_return(config) -> None:
    comparison = retirement_pension.compare_lump_sum_vs_pension(
        config, 100_000_000, 10, pension_years=10, return_rate=0.0, start_age=55
    )

    assert comparison.pension.monthly_gross == 833_333
    assert comparison.pension.total_tax == 5_500_000
    assert comparison.pension.total_received == 94_500_000
    assert comparison.tax_saving == -1_237_500


def test_lump_sum_vs_pension_requires_payout_period(config) -> None:
    with pytest.raises(CalculationDomainError):
        retirement_pension.compare_lump_sum_vs_pension(config, 100_000_000, 10, pension_years=0)


def test_lump_sum_comparison_rejects_overflowing_return(config) -> None:
    with pytest.raises(CalculationDomainError):
        retirement_pension.compare_lump_sum_vs_pension(
            config, 100_000_000, 10, pension_years=10, return_rate=1e5
        )


def test_lump_sum_comparison_rejects_total_loss_return(config) -> None:
    with pytest.raises(CalculationDomainError, match="Return rate"):
        retirement_pension.compare_lump_sum_vs_pension(
            config, 100_000_000, 10, pension_years=10, return_rate=-12
        )


def test_calc_dc_rejects_total_loss_return() -> None:
    with pytest.raises(CalculationDomainError, match="Return rate"):
        retirement_pension.calc_dc(1_000_000, 5, return_rate=-1.0)
