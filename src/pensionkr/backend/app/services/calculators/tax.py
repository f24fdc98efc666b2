"""Progressive income tax and pension income taxation helpers."""

from __future__ import annotations

from pensionkr.backend.app.models import (
    ComprehensiveTaxation,
    IncomeTaxResult,
    PrivatePensionComparison,
    SeparateTaxation,
)
from pensionkr.backend.config.year_config import YearConfiguration

from .utils import (
    apply_deduction_brackets,
    apply_tax_brackets,
    round_won,
    safe_ratio,
    select_bracket,
)

SEPARATE = "separate"
COMPREHENSIVE = "comprehensive"


def income_tax(config: YearConfiguration, taxable_income: float) -> IncomeTaxResult:
    """Apply the progressive income tax table plus the local surtax."""

    settings = config.tax
    raw_tax, bracket = apply_tax_brackets(taxable_income, settings.income_tax_brackets)
    tax = max(round_won(raw_tax), 0)
    local_tax = round_won(tax * settings.local_tax_rate)
    total = tax + local_tax

    return IncomeTaxResult(
        taxable_income=taxable_income,
        income_tax=tax,
        local_tax=local_tax,
        total_tax=total,
        applied_rate=bracket.rate,
        applied_deduction=bracket.deduction,
        effective_rate=safe_ratio(total, taxable_income),
    )


def pension_income_deduction(config: YearConfiguration, pension_income: float) -> int:
    """Return the pension income deduction, capped at the statutory maximum."""

    settings = config.tax
    deduction = apply_deduction_brackets(pension_income, settings.pension_income_deduction)
    return min(round_won(deduction), round_won(settings.pension_deduction_max))


def separate_pension_rate(config: YearConfiguration, private_pension: float, age: int) -> float:
    """Return the separate taxation rate for ``private_pension`` received at ``age``."""

    rules = config.tax.private_pension
    if private_pension <= rules.separate_limit:
        _, band = select_bracket(age, rules.separate_rates)
        return band.rate
    return rules.over_limit_rate


def compare_private_pension_tax(
    config: YearConfiguration,
    private_pension: float,
    other_income: float,
    age: int,
) -> PrivatePensionComparison:
    """Compare separate taxation with the marginal cost of comprehensive taxation.

    The comprehensive figure is the tax on pension plus other income less the
    tax on the other income alone, isolating what the pension adds.
    """

    settings = config.tax

    rate = separate_pension_rate(config, private_pension, age)
    separate_tax = round_won(private_pension * rate)
    separate_local = round_won(separate_tax * settings.local_tax_rate)
    separate = SeparateTaxation(
        rate=rate,
        tax=separate_tax,
        local_tax=separate_local,
        total_tax=separate_tax + separate_local,
    )

    total_income = private_pension + other_income
    deduction = pension_income_deduction(config, private_pension)
    taxable_income = max(total_income - deduction - settings.basic_deduction, 0)
    combined = income_tax(config, taxable_income)

    other_only_taxable = max(other_income - settings.basic_deduction, 0)
    other_only = income_tax(config, other_only_taxable)

    additional_tax = combined.total_tax - other_only.total_tax
    comprehensive = ComprehensiveTaxation(
        total_income=total_income,
        pension_deduction=deduction,
        taxable_income=taxable_income,
        tax=combined.total_tax,
        other_only_tax=other_only.total_tax,
        additional_tax=additional_tax,
        effective_rate=safe_ratio(additional_tax, private_pension),
    )

    recommended = SEPARATE if separate.total_tax <= additional_tax else COMPREHENSIVE
    return PrivatePensionComparison(
        separate=separate,
        comprehensive=comprehensive,
        recommended=recommended,
        saving=abs(separate.total_tax - additional_tax),
    )


__all__ = [
    "COMPREHENSIVE",
    "SEPARATE",
    "compare_private_pension_tax",
    "income_tax",
    "pension_income_deduction",
    "separate_pension_rate",
]
