"""National pension benefit, claiming-age and buy-back calculations."""

from __future__ import annotations

import math

from pensionkr.backend.app.models import (
    AdditionalPaymentEffect,
    AgeValue,
    PensionScenarioComparison,
)
from pensionkr.backend.config.year_config import YearConfiguration

from .utils import round_won, select_bracket


def start_age(config: YearConfiguration, birth_year: int) -> int:
    """Return the normal pension start age for ``birth_year``."""

    _, band = select_bracket(birth_year, config.national_pension.start_ages)
    return band.age


def basic_monthly_pension(
    config: YearConfiguration,
    self_avg_monthly_income: float,
    enrollment_months: float,
) -> int:
    """Return the basic monthly pension before any claiming-age adjustment.

    The individual's income (B-value) is capped at the contribution ceiling
    and combined with the economy-wide average (A-value). Enrolment below the
    qualifying minimum yields no pension. Up to the full-pension period the
    amount ramps linearly; each further year adds ``extra_year_increment``.
    Enrolment beyond ``max_pension_years`` does not count.
    """

    settings = config.national_pension
    capped_income = min(self_avg_monthly_income, settings.income_upper)
    years = min(enrollment_months / 12, settings.max_pension_years)

    if years < settings.min_pension_years:
        return 0

    full_years = settings.full_pension_years
    if years <= full_years:
        factor = years / full_years
    else:
        factor = 1 + settings.extra_year_increment * (years - full_years)

    amount = settings.replacement_rate * (settings.a_value + capped_income) * factor
    return round_won(amount)


def early_adjusted(config: YearConfiguration, basic_pension: float, early_years: int) -> int:
    """Return the reduced pension when claiming ``early_years`` before start age."""

    early = config.national_pension.early
    reduction = min(early_years, early.max_years) * early.yearly_rate
    return round_won(basic_pension * (1 - reduction))


def deferred_adjusted(config: YearConfiguration, basic_pension: float, defer_years: int) -> int:
    """Return the increased pension when deferring ``defer_years`` past start age."""

    deferral = config.national_pension.deferral
    increase = min(defer_years, deferral.max_years) * deferral.yearly_rate
    return round_won(basic_pension * (1 + increase))


def _first_catch_up_age(
    later: list[AgeValue], earlier: list[AgeValue], later_start: int
) -> int | None:
    for later_point, earlier_point in zip(later, earlier):
        if later_point.age >= later_start and later_point.value >= earlier_point.value:
            return later_point.age
    return None


def compare_scenarios(
    config: YearConfiguration,
    basic_pension: int,
    normal_start_age: int,
    early_years: int,
    defer_years: int,
    end_age: int = 90,
) -> PensionScenarioComparison:
    """Project cumulative payouts for early, normal and deferred claiming.

    All three series run from the early start age through ``end_age``
    inclusive. A scenario adds twelve monthly payments for every age at or
    after its own start and carries its total forward before that.
    """

    early_pension = early_adjusted(config, basic_pension, early_years)
    deferred_pension = deferred_adjusted(config, basic_pension, defer_years)

    early_start = normal_start_age - early_years
    deferred_start = normal_start_age + defer_years

    early: list[AgeValue] = []
    normal: list[AgeValue] = []
    deferred: list[AgeValue] = []
    cumulative_early = cumulative_normal = cumulative_deferred = 0

    for age in range(early_start, end_age + 1):
        cumulative_early += early_pension * 12
        if age >= normal_start_age:
            cumulative_normal += basic_pension * 12
        if age >= deferred_start:
            cumulative_deferred += deferred_pension * 12

        early.append(AgeValue(age=age, value=cumulative_early))
        normal.append(AgeValue(age=age, value=cumulative_normal))
        deferred.append(AgeValue(age=age, value=cumulative_deferred))

    return PensionScenarioComparison(
        basic_pension=basic_pension,
        early_pension=early_pension,
        deferred_pension=deferred_pension,
        early_start_age=early_start,
        start_age=normal_start_age,
        deferred_start_age=deferred_start,
        early=tuple(early),
        normal=tuple(normal),
        deferred=tuple(deferred),
        normal_overtakes_early_age=_first_catch_up_age(normal, early, normal_start_age),
        deferred_overtakes_normal_age=_first_catch_up_age(deferred, normal, deferred_start),
    )


def additional_payment_effect(
    config: YearConfiguration,
    current_pension: float,
    additional_months: int,
    current_avg_income: float,
) -> AdditionalPaymentEffect:
    """Estimate the cost and payback of buying back ``additional_months``."""

    settings = config.national_pension
    cost = current_avg_income * settings.contribution_rate * additional_months
    increase_rate = additional_months / 12 * settings.additional_payment_increment
    increase = round_won(current_pension * increase_rate)

    break_even_months = math.ceil(cost / increase) if increase > 0 else None

    return AdditionalPaymentEffect(
        cost=cost,
        increase=increase,
        new_pension=round_won(current_pension + increase),
        break_even_months=break_even_months,
    )


__all__ = [
    "additional_payment_effect",
    "basic_monthly_pension",
    "compare_scenarios",
    "deferred_adjusted",
    "early_adjusted",
    "start_age",
]
