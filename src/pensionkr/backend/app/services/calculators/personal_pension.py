"""Pension savings account contribution limits and withdrawal taxes."""

from __future__ import annotations

from pensionkr.backend.app.models import (
    ContributionRoom,
    EarlyWithdrawalTax,
    IsaTransferCredit,
)
from pensionkr.backend.config.year_config import YearConfiguration

from .utils import round_won


def contribution_room(
    config: YearConfiguration, pension_saving: float, irp_amount: float
) -> ContributionRoom:
    """Return the remaining annual contribution and tax-credit room."""

    annual_limit = config.personal_pension.annual_contribution_limit
    credit_limit = config.retirement_pension.combined_credit_limit
    saving_limit = config.retirement_pension.pension_saving_limit

    contributed = pension_saving + irp_amount
    credited = min(min(pension_saving, saving_limit) + irp_amount, credit_limit)

    return ContributionRoom(
        contributed=contributed,
        annual_limit=annual_limit,
        remaining=max(annual_limit - contributed, 0),
        credit_limit=credit_limit,
        credit_room=max(credit_limit - credited, 0),
    )


def isa_transfer_credit(
    config: YearConfiguration, transfer_amount: float, total_salary: float
) -> IsaTransferCredit:
    """Return the extra tax credit for moving a matured ISA into a pension account."""

    settings = config.personal_pension
    retirement = config.retirement_pension

    extra_deductible = min(max(transfer_amount, 0) * settings.isa_transfer_rate, settings.isa_transfer_limit)
    if total_salary <= retirement.credit_salary_threshold:
        rate = retirement.credit_rate_low_salary
    else:
        rate = retirement.credit_rate_high_salary

    return IsaTransferCredit(
        transfer_amount=transfer_amount,
        extra_deductible=extra_deductible,
        rate=rate,
        credit_amount=round_won(extra_deductible * rate),
    )


def early_withdrawal_tax(config: YearConfiguration, amount: float) -> EarlyWithdrawalTax:
    """Return the other-income tax due on a non-pension withdrawal."""

    rate = config.personal_pension.early_withdrawal_tax_rate
    tax = round_won(amount * rate)
    return EarlyWithdrawalTax(amount=amount, rate=rate, tax=tax, net_amount=amount - tax)


__all__ = ["contribution_room", "early_withdrawal_tax", "isa_transfer_credit"]
