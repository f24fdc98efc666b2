"""Domain-specific calculation helpers."""

from .health_insurance import (
    car_score,
    check_dependent_status,
    compare_voluntary_vs_regional,
    property_score,
    regional_premium,
)
from .national_pension import (
    additional_payment_effect,
    basic_monthly_pension,
    compare_scenarios,
    deferred_adjusted,
    early_adjusted,
    start_age,
)
from .personal_pension import contribution_room, early_withdrawal_tax, isa_transfer_credit
from .retirement_fund import (
    available_monthly,
    medical_cost_for_age,
    required_fund,
    simulate_withdrawal,
)
from .retirement_pension import (
    calc_db,
    calc_dc,
    compare_lump_sum_vs_pension,
    irp_tax_credit,
    pension_tax_rate,
    retirement_income_tax,
    service_year_deduction,
)
from .tax import (
    compare_private_pension_tax,
    income_tax,
    pension_income_deduction,
    separate_pension_rate,
)
from .utils import CalculationDomainError, round_won

__all__ = [
    "CalculationDomainError",
    "additional_payment_effect",
    "available_monthly",
    "basic_monthly_pension",
    "calc_db",
    "calc_dc",
    "car_score",
    "check_dependent_status",
    "compare_lump_sum_vs_pension",
    "compare_private_pension_tax",
    "compare_scenarios",
    "compare_voluntary_vs_regional",
    "contribution_room",
    "deferred_adjusted",
    "early_adjusted",
    "early_withdrawal_tax",
    "income_tax",
    "irp_tax_credit",
    "isa_transfer_credit",
    "medical_cost_for_age",
    "pension_income_deduction",
    "pension_tax_rate",
    "property_score",
    "regional_premium",
    "required_fund",
    "retirement_income_tax",
    "round_won",
    "separate_pension_rate",
    "service_year_deduction",
    "simulate_withdrawal",
    "start_age",
]
