"""Immutable result records returned by the calculators.

Every record holds plain numbers and ordered series only. Amounts are whole
won values once a formula stage has been rounded; rates stay unrounded.
Series are chronological and contain an entry for every period in range.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AgeValue:
    """Single point of an age-indexed series."""

    age: int
    value: float


@dataclass(frozen=True, slots=True)
class YearBalance:
    """Balance at the end of a simulated year (0-based)."""

    year: int
    balance: int


@dataclass(frozen=True, slots=True)
class MonthlyPayout:
    """Net payout and remaining balance after a simulated month (1-based)."""

    month: int
    net_amount: int
    balance: int


@dataclass(frozen=True, slots=True)
class YearlyExpense:
    """Nominal expense for a retirement year and the running present value."""

    age: int
    annual_expense: int
    cumulative_present_value: int


@dataclass(frozen=True, slots=True)
class BucketYear:
    """Bucket balances at the end of a simulated year (0-based)."""

    year: int
    conservative: int
    moderate: int
    aggressive: int
    total: int
    rebalanced: bool


# National pension -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PensionScenarioComparison:
    """Cumulative payouts for early, normal and deferred claiming."""

    basic_pension: int
    early_pension: int
    deferred_pension: int
    early_start_age: int
    start_age: int
    deferred_start_age: int
    early: tuple[AgeValue, ...]
    normal: tuple[AgeValue, ...]
    deferred: tuple[AgeValue, ...]
    normal_overtakes_early_age: int | None
    deferred_overtakes_normal_age: int | None

    @property
    def ages(self) -> tuple[int, ...]:
        return tuple(point.age for point in self.normal)


@dataclass(frozen=True, slots=True)
class AdditionalPaymentEffect:
    """Cost and payback of buying back missed contribution months.

    ``break_even_months`` is ``None`` when the purchase never pays back.
    """

    cost: float
    increase: int
    new_pension: int
    break_even_months: int | None

    @property
    def breaks_even(self) -> bool:
        return self.break_even_months is not None


# Retirement pension ---------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IrpTaxCredit:
    pension_saving_applied: float
    total_deductible: float
    rate: float
    credit_amount: int
    effective_rate: float


@dataclass(frozen=True, slots=True)
class RetirementIncomeTax:
    """Every stage of the averaged retirement-income taxation method."""

    retirement_income: float
    service_years: float
    service_deduction: float
    tax_base: float
    converted_income: int
    converted_deduction: float
    taxable_converted: float
    converted_tax: int
    income_tax: int
    local_tax: int
    total_tax: int
    net_amount: float
    effective_rate: float


@dataclass(frozen=True, slots=True)
class LumpSumOption:
    gross: float
    tax: int
    net: float
    effective_rate: float


@dataclass(frozen=True, slots=True)
class PensionPayoutOption:
    monthly_gross: int
    monthly_net: int
    total_received: int
    total_tax: int
    pension_years: int
    tax_rate: float
    payouts: tuple[MonthlyPayout, ...]


@dataclass(frozen=True, slots=True)
class LumpSumComparison:
    """Lump-sum versus annuity payout; positive ``tax_saving`` favours the annuity."""

    lump_sum: LumpSumOption
    pension: PensionPayoutOption
    tax_saving: int


# Personal pension -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ContributionRoom:
    contributed: float
    annual_limit: float
    remaining: float
    credit_limit: float
    credit_room: float


@dataclass(frozen=True, slots=True)
class IsaTransferCredit:
    transfer_amount: float
    extra_deductible: float
    rate: float
    credit_amount: int


@dataclass(frozen=True, slots=True)
class EarlyWithdrawalTax:
    amount: float
    rate: float
    tax: int
    net_amount: float


# Tax ------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IncomeTaxResult:
    taxable_income: float
    income_tax: int
    local_tax: int
    total_tax: int
    applied_rate: float
    applied_deduction: float
    effective_rate: float


@dataclass(frozen=True, slots=True)
class SeparateTaxation:
    rate: float
    tax: int
    local_tax: int
    total_tax: int


@dataclass(frozen=True, slots=True)
class ComprehensiveTaxation:
    total_income: float
    pension_deduction: int
    taxable_income: float
    tax: int
    other_only_tax: int
    additional_tax: int
    effective_rate: float


@dataclass(frozen=True, slots=True)
class PrivatePensionComparison:
    separate: SeparateTaxation
    comprehensive: ComprehensiveTaxation
    recommended: str
    saving: int


# Health insurance -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PremiumBreakdown:
    income: int
    property: int
    car: int


@dataclass(frozen=True, slots=True)
class RegionalPremium:
    monthly_premium: int
    long_term_care: int
    total: int
    property_score: float
    car_score: float
    breakdown: PremiumBreakdown


@dataclass(frozen=True, slots=True)
class DependentCheck:
    name: str
    limit: float
    actual: float
    passed: bool


@dataclass(frozen=True, slots=True)
class DependentStatus:
    qualified: bool
    checks: tuple[DependentCheck, ...]
    reasons: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class PremiumOption:
    premium: int
    long_term_care: int
    total: int


@dataclass(frozen=True, slots=True)
class VoluntaryComparison:
    """Voluntary continuation versus regional enrolment.

    ``monthly_saving`` is the voluntary total minus the regional total.
    """

    voluntary: PremiumOption
    regional: PremiumOption
    voluntary_max_years: int
    monthly_saving: int
    recommended: str


# Retirement fund ------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RequiredFund:
    present_value: int
    nominal_total: int
    years: int
    monthly_expense: float
    yearly: tuple[YearlyExpense, ...]


@dataclass(frozen=True, slots=True)
class AvailableMonthly:
    monthly_from_assets: int
    monthly_pension: float
    total_monthly: int
    real_monthly_return: float
    timeline: tuple[AgeValue, ...]


@dataclass(frozen=True, slots=True)
class WithdrawalSimulation:
    fixed: tuple[YearBalance, ...]
    percentage: tuple[YearBalance, ...]
    bucket: tuple[BucketYear, ...]


__all__ = [
    "AdditionalPaymentEffect",
    "AgeValue",
    "AvailableMonthly",
    "BucketYear",
    "ComprehensiveTaxation",
    "ContributionRoom",
    "DependentCheck",
    "DependentStatus",
    "EarlyWithdrawalTax",
    "IncomeTaxResult",
    "IrpTaxCredit",
    "IsaTransferCredit",
    "LumpSumComparison",
    "LumpSumOption",
    "MonthlyPayout",
    "PensionPayoutOption",
    "PensionScenarioComparison",
    "PremiumBreakdown",
    "PremiumOption",
    "PrivatePensionComparison",
    "RegionalPremium",
    "RequiredFund",
    "RetirementIncomeTax",
    "SeparateTaxation",
    "VoluntaryComparison",
    "WithdrawalSimulation",
    "YearBalance",
    "YearlyExpense",
]
