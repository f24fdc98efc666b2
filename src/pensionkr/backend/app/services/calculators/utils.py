"""Utility helpers for calculator modules."""

from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

from pensionkr.backend.config.year_config import (
    BoundedRow,
    DeductionBracket,
    TaxBracket,
)

RowT = TypeVar("RowT", bound=BoundedRow)


class CalculationDomainError(ValueError):
    """Raised when an input lies outside a formula's mathematical domain."""


def round_won(value: float) -> int:
    """Round ``value`` half away from zero to a whole won amount."""

    if not math.isfinite(value):
        raise CalculationDomainError("Calculation result is not a finite amount")
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def require_growth_rate(rate: float, label: str) -> None:
    """Reject rates at or below -100%, which would wipe out or flip a balance."""

    if 1 + rate <= 0:
        raise CalculationDomainError(f"{label} must be greater than -1 (got {rate})")


def compound_factor(rate: float, periods: float) -> float:
    """Return ``(1 + rate) ** periods`` for a rate above -100%."""

    require_growth_rate(rate, "Rate")
    try:
        return (1 + rate) ** periods
    except OverflowError as exc:
        raise CalculationDomainError(
            f"Compounding {rate} over {periods} periods overflows"
        ) from exc


def select_bracket(value: float, rows: Sequence[RowT]) -> tuple[int, RowT]:
    """Return the first row whose inclusive upper bound covers ``value``.

    Tables are validated to end with an open row, so a match always exists.
    """

    for index, row in enumerate(rows):
        if row.upper_bound is None or value <= row.upper_bound:
            return index, row
    raise LookupError(f"No bracket covers {value}")  # pragma: no cover - schema invariant


def apply_tax_brackets(amount: float, brackets: Sequence[TaxBracket]) -> tuple[float, TaxBracket]:
    """Return the unrounded progressive tax for ``amount`` and the bracket used.

    Each bracket stores the deduction that turns ``amount * rate`` into the
    cumulative marginal tax, so a single lookup replaces a per-tier loop.
    """

    _, bracket = select_bracket(amount, brackets)
    return amount * bracket.rate - bracket.deduction, bracket


def apply_deduction_brackets(amount: float, brackets: Sequence[DeductionBracket]) -> float:
    """Return the unrounded cumulative deduction for ``amount``."""

    index, bracket = select_bracket(amount, brackets)
    if index == 0:
        return amount * bracket.rate
    previous_upper = brackets[index - 1].upper_bound or 0.0
    return bracket.base + (amount - previous_upper) * bracket.rate


def annuity_payment(principal: float, rate: float, periods: int) -> float:
    """Return the level payment that amortises ``principal`` over ``periods``."""

    if periods <= 0:
        raise CalculationDomainError("Payment periods must be a positive number")
    growth = compound_factor(rate, periods)
    if rate == 0 or growth == 1:
        return principal / periods
    return principal * rate / (1 - 1 / growth)


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator`` or ``0.0`` for a zero denominator."""

    return numerator / denominator if denominator else 0.0


__all__ = [
    "CalculationDomainError",
    "annuity_payment",
    "apply_deduction_brackets",
    "apply_tax_brackets",
    "compound_factor",
    "require_growth_rate",
    "round_won",
    "safe_ratio",
    "select_bracket",
]
