"""Retirement fund sufficiency and withdrawal projections."""

from __future__ import annotations

from pensionkr.backend.app.models import (
    AgeValue,
    AvailableMonthly,
    BucketYear,
    RequiredFund,
    WithdrawalSimulation,
    YearBalance,
    YearlyExpense,
)
from pensionkr.backend.config.year_config import YearConfiguration

from .utils import (
    CalculationDomainError,
    annuity_payment,
    compound_factor,
    require_growth_rate,
    round_won,
    select_bracket,
)


def medical_cost_for_age(config: YearConfiguration, age: int) -> float:
    """Return the reference annual medical cost for ``age``."""

    _, band = select_bracket(age, config.retirement_fund.medical_costs)
    return band.amount


def required_fund(
    config: YearConfiguration,
    monthly_expense: float,
    retire_age: int,
    end_age: int,
    inflation_rate: float,
    return_rate: float,
    include_medical_costs: bool = False,
) -> RequiredFund:
    """Return the present value and nominal total of retirement expenses.

    Year ``y`` of retirement costs the annual expense inflated by
    ``(1 + inflation_rate) ** y``; its present value discounts the same
    amount by ``(1 + return_rate) ** y``.
    """

    require_growth_rate(inflation_rate, "Inflation rate")
    require_growth_rate(return_rate, "Return rate")

    years = max(end_age - retire_age, 0)
    present_value = 0.0
    nominal_total = 0.0
    yearly: list[YearlyExpense] = []

    for year in range(years):
        age = retire_age + year
        annual_expense = monthly_expense * 12
        if include_medical_costs:
            annual_expense += medical_cost_for_age(config, age)

        inflated = annual_expense * compound_factor(inflation_rate, year)
        present_value += inflated / compound_factor(return_rate, year)
        nominal_total += inflated
        yearly.append(
            YearlyExpense(
                age=age,
                annual_expense=round_won(inflated),
                cumulative_present_value=round_won(present_value),
            )
        )

    return RequiredFund(
        present_value=round_won(present_value),
        nominal_total=round_won(nominal_total),
        years=years,
        monthly_expense=monthly_expense,
        yearly=tuple(yearly),
    )


def available_monthly(
    config: YearConfiguration,
    total_assets: float,
    monthly_pension: float,
    retire_age: int,
    end_age: int,
    return_rate: float,
    inflation_rate: float,
) -> AvailableMonthly:
    """Return the sustainable monthly spending from assets plus pension.

    The withdrawal is a level payment at the real monthly rate, so it keeps
    its purchasing power. The timeline inflates the withdrawal each year and
    compounds the balance at the nominal return; reported balances floor at 0.
    """

    years = end_age - retire_age
    months = years * 12
    if months <= 0:
        raise CalculationDomainError("End age must be later than the retirement age")
    require_growth_rate(return_rate, "Return rate")
    require_growth_rate(inflation_rate, "Inflation rate")

    monthly_return = return_rate / 12
    monthly_inflation = inflation_rate / 12
    real_monthly_return = (1 + monthly_return) / (1 + monthly_inflation) - 1

    monthly_from_assets = annuity_payment(total_assets, real_monthly_return, months)

    balance = total_assets
    timeline: list[AgeValue] = []
    for year in range(years):
        annual_withdrawal = monthly_from_assets * 12 * compound_factor(inflation_rate, year)
        balance = balance * (1 + return_rate) - annual_withdrawal
        timeline.append(AgeValue(age=retire_age + year, value=max(round_won(balance), 0)))

    return AvailableMonthly(
        monthly_from_assets=round_won(monthly_from_assets),
        monthly_pension=monthly_pension,
        total_monthly=round_won(monthly_from_assets + monthly_pension),
        real_monthly_return=real_monthly_return,
        timeline=tuple(timeline),
    )


def _simulate_fixed(
    total_assets: float,
    annual_withdrawal: float,
    return_rate: float,
    inflation_rate: float,
    years: int,
) -> tuple[YearBalance, ...]:
    balance = total_assets
    series: list[YearBalance] = []
    for year in range(years):
        withdrawal = annual_withdrawal * compound_factor(inflation_rate, year)
        balance = max((balance - withdrawal) * (1 + return_rate), 0)
        series.append(YearBalance(year=year, balance=round_won(balance)))
    return tuple(series)


def _simulate_percentage(
    total_assets: float,
    withdrawal_rate: float,
    return_rate: float,
    years: int,
) -> tuple[YearBalance, ...]:
    balance = total_assets
    series: list[YearBalance] = []
    for year in range(years):
        withdrawal = balance * withdrawal_rate
        balance = max((balance - withdrawal) * (1 + return_rate), 0)
        series.append(YearBalance(year=year, balance=round_won(balance)))
    return tuple(series)


def _simulate_buckets(
    config: YearConfiguration,
    total_assets: float,
    annual_withdrawal: float,
    return_rate: float,
    inflation_rate: float,
    years: int,
) -> tuple[BucketYear, ...]:
    settings = config.retirement_fund.bucket
    conservative_share, moderate_share, aggressive_share = settings.shares

    conservative = total_assets * conservative_share
    moderate = total_assets * moderate_share
    aggressive = total_assets * aggressive_share
    aggressive_return = return_rate + settings.aggressive_premium

    series: list[BucketYear] = []
    for year in range(years):
        conservative -= annual_withdrawal * compound_factor(inflation_rate, year)

        # A shortfall spills into the next, riskier bucket.
        if conservative < 0:
            moderate += conservative
            conservative = 0.0
        if moderate < 0:
            aggressive += moderate
            moderate = 0.0

        conservative *= 1 + settings.conservative_return
        moderate *= 1 + settings.moderate_return
        aggressive *= 1 + aggressive_return

        rebalanced = year > 0 and year % settings.rebalance_interval == 0
        if rebalanced:
            combined = conservative + moderate + aggressive
            conservative = combined * conservative_share
            moderate = combined * moderate_share
            aggressive = combined * aggressive_share

        series.append(
            BucketYear(
                year=year,
                conservative=round_won(conservative),
                moderate=round_won(moderate),
                aggressive=round_won(aggressive),
                total=round_won(max(conservative + moderate + aggressive, 0)),
                rebalanced=rebalanced,
            )
        )
    return tuple(series)


def simulate_withdrawal(
    config: YearConfiguration,
    total_assets: float,
    annual_withdrawal: float,
    withdrawal_rate: float,
    return_rate: float,
    inflation_rate: float,
    years: int = 30,
) -> WithdrawalSimulation:
    """Simulate fixed, percentage and bucket withdrawal strategies side by side.

    Years are numbered from 0. Buckets rebalance to their target shares at
    the end of every ``rebalance_interval``-th year, after that year's
    withdrawal and growth; year 0 never rebalances.
    """

    require_growth_rate(return_rate, "Return rate")
    require_growth_rate(inflation_rate, "Inflation rate")

    return WithdrawalSimulation(
        fixed=_simulate_fixed(total_assets, annual_withdrawal, return_rate, inflation_rate, years),
        percentage=_simulate_percentage(total_assets, withdrawal_rate, return_rate, years),
        bucket=_simulate_buckets(
            config, total_assets, annual_withdrawal, return_rate, inflation_rate, years
        ),
    )


__all__ = [
    "available_monthly",
    "medical_cost_for_age",
    "required_fund",
    "simulate_withdrawal",
]
