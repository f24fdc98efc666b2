"""Retirement pension (DB/DC/IRP) accrual and taxation calculations."""

from __future__ import annotations

import math

from pensionkr.backend.app.models import (
    IrpTaxCredit,
    LumpSumComparison,
    LumpSumOption,
    MonthlyPayout,
    PensionPayoutOption,
    RetirementIncomeTax,
)
from pensionkr.backend.config.year_config import YearConfiguration

from .utils import (
    CalculationDomainError,
    annuity_payment,
    apply_deduction_brackets,
    apply_tax_brackets,
    require_growth_rate,
    round_won,
    safe_ratio,
    select_bracket,
)


def calc_db(avg_salary_3m: float, service_years: float) -> int:
    """Return the defined-benefit severance: average monthly wage per service year."""

    return round_won(avg_salary_3m * service_years)


def calc_dc(annual_contribution: float, service_years: float, return_rate: float = 0.03) -> int:
    """Return the defined-contribution balance after ``service_years``.

    Contributions are made at the start of each year and the running total
    compounds once per year; only the final balance is rounded.
    """

    require_growth_rate(return_rate, "Return rate")
    total = 0.0
    for _ in range(max(math.ceil(service_years), 0)):
        total = (total + annual_contribution) * (1 + return_rate)
    return round_won(total)


def irp_tax_credit(
    config: YearConfiguration,
    pension_saving: float,
    irp_amount: float,
    total_salary: float,
) -> IrpTaxCredit:
    """Return the tax credit for pension savings and IRP contributions."""

    settings = config.retirement_pension
    pension_saving_applied = min(pension_saving, settings.pension_saving_limit)
    total_deductible = min(pension_saving_applied + irp_amount, settings.combined_credit_limit)

    if total_salary <= settings.credit_salary_threshold:
        rate = settings.credit_rate_low_salary
    else:
        rate = settings.credit_rate_high_salary

    credit_amount = round_won(total_deductible * rate)
    return IrpTaxCredit(
        pension_saving_applied=pension_saving_applied,
        total_deductible=total_deductible,
        rate=rate,
        credit_amount=credit_amount,
        effective_rate=safe_ratio(credit_amount, total_deductible),
    )


def service_year_deduction(config: YearConfiguration, service_years: float) -> float:
    """Return the service-year deduction for the retirement income tax."""

    return apply_deduction_brackets(
        service_years, config.retirement_pension.service_year_deduction
    )


def retirement_income_tax(
    config: YearConfiguration,
    retirement_income: float,
    service_years: float,
) -> RetirementIncomeTax:
    """Derive the retirement income tax with the averaged (annualised) method.

    The taxable base is annualised over the service period, deducted and
    taxed on the progressive scale, then scaled back to the service period.
    Every stage is kept on the result.
    """

    if service_years <= 0:
        raise CalculationDomainError(
            "Retirement income tax requires a positive number of service years"
        )

    settings = config.retirement_pension
    tax_settings = config.tax

    service_deduction = service_year_deduction(config, service_years)
    tax_base = max(retirement_income - service_deduction, 0)
    converted_income = round_won(tax_base * 12 / service_years)

    converted_deduction = apply_deduction_brackets(
        converted_income, settings.converted_income_deduction
    )
    taxable_converted = max(converted_income - converted_deduction, 0)

    raw_converted_tax, _ = apply_tax_brackets(
        taxable_converted, tax_settings.income_tax_brackets
    )
    converted_tax = max(raw_converted_tax, 0)

    final_tax = max(round_won(converted_tax * service_years / 12), 0)
    local_tax = round_won(final_tax * tax_settings.local_tax_rate)
    total_tax = final_tax + local_tax

    return RetirementIncomeTax(
        retirement_income=retirement_income,
        service_years=service_years,
        service_deduction=service_deduction,
        tax_base=tax_base,
        converted_income=converted_income,
        converted_deduction=converted_deduction,
        taxable_converted=taxable_converted,
        converted_tax=max(round_won(converted_tax), 0),
        income_tax=final_tax,
        local_tax=local_tax,
        total_tax=total_tax,
        net_amount=retirement_income - total_tax,
        effective_rate=safe_ratio(total_tax, retirement_income),
    )


def pension_tax_rate(config: YearConfiguration, start_age: int) -> float:
    """Return the flat pension income tax rate for payouts starting at ``start_age``."""

    _, band = select_bracket(start_age, config.retirement_pension.pension_tax_rates)
    return band.rate


def compare_lump_sum_vs_pension(
    config: YearConfiguration,
    retirement_income: float,
    service_years: float,
    pension_years: int = 10,
    return_rate: float = 0.03,
    start_age: int = 55,
) -> LumpSumComparison:
    """Compare a taxed lump sum with level monthly annuity payouts.

    The annuity amortises the whole retirement income at ``return_rate``;
    the flat pension tax applies to each gross payment.
    """

    lump_sum_tax = retirement_income_tax(config, retirement_income, service_years)
    tax_rate = pension_tax_rate(config, start_age)

    monthly_return = return_rate / 12
    total_months = pension_years * 12
    if total_months <= 0:
        raise CalculationDomainError("Pension payout period must be at least one month")
    require_growth_rate(return_rate, "Return rate")

    monthly_amount = annuity_payment(retirement_income, monthly_return, total_months)
    monthly_tax = monthly_amount * tax_rate

    balance = retirement_income
    total_pension_tax = 0.0
    total_received = 0.0
    payouts: list[MonthlyPayout] = []

    for month in range(1, total_months + 1):
        balance = balance * (1 + monthly_return) - monthly_amount
        total_pension_tax += monthly_tax
        total_received += monthly_amount - monthly_tax
        payouts.append(
            MonthlyPayout(
                month=month,
                net_amount=round_won(monthly_amount - monthly_tax),
                balance=round_won(balance),
            )
        )

    lump_sum = LumpSumOption(
        gross=retirement_income,
        tax=lump_sum_tax.total_tax,
        net=retirement_income - lump_sum_tax.total_tax,
        effective_rate=lump_sum_tax.effective_rate,
    )
    pension = PensionPayoutOption(
        monthly_gross=round_won(monthly_amount),
        monthly_net=round_won(monthly_amount * (1 - tax_rate)),
        total_received=round_won(total_received),
        total_tax=round_won(total_pension_tax),
        pension_years=pension_years,
        tax_rate=tax_rate,
        payouts=tuple(payouts),
    )

    return LumpSumComparison(
        lump_sum=lump_sum,
        pension=pension,
        tax_saving=round_won(lump_sum_tax.total_tax - total_pension_tax),
    )


__all__ = [
    "calc_db",
    "calc_dc",
    "compare_lump_sum_vs_pension",
    "irp_tax_credit",
    "pension_tax_rate",
    "retirement_income_tax",
    "service_year_deduction",
]
