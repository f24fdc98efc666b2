"""Health insurance premium and dependent eligibility calculations.

Property and car values for regional subscribers are given in units of
10,000 won, matching the published scoring tables; incomes are in won.
"""

from __future__ import annotations

from pensionkr.backend.app.models import (
    DependentCheck,
    DependentStatus,
    PremiumBreakdown,
    PremiumOption,
    RegionalPremium,
    VoluntaryComparison,
)
from pensionkr.backend.config.year_config import YearConfiguration

from .utils import round_won, select_bracket

VOLUNTARY = "voluntary"
REGIONAL = "regional"

DEPENDENT_QUALIFIED_MESSAGE = "Meets the dependent eligibility requirements."


def property_score(config: YearConfiguration, property_value: float) -> float:
    """Return the graduated score for ``property_value`` after the basic deduction."""

    regional = config.health_insurance.regional
    excess = max(property_value - regional.property_basic_deduction, 0)
    _, grade = select_bracket(excess, regional.property_grades)
    return grade.score


def car_score(config: YearConfiguration, car_value: float, car_cc: float) -> float:
    """Return the flat vehicle score; cheaper or smaller cars are exempt."""

    car = config.health_insurance.regional.car
    if car_value >= car.min_value and car_cc >= car.min_cc:
        return car.score_high if car_cc >= car.high_cc else car.score_standard
    return 0.0


def regional_premium(
    config: YearConfiguration,
    annual_income: float,
    property_value: float = 0,
    car_value: float = 0,
    car_cc: float = 0,
) -> RegionalPremium:
    """Return the monthly regional subscriber premium and long-term care add-on."""

    settings = config.health_insurance
    point_value = settings.regional.point_value

    income_premium = round_won(annual_income / 12 * settings.rate)

    property_points = property_score(config, property_value)
    property_premium = round_won(property_points * point_value)

    car_points = car_score(config, car_value, car_cc)
    car_premium = round_won(car_points * point_value)

    monthly_premium = income_premium + property_premium + car_premium
    long_term_care = round_won(monthly_premium * settings.long_term_care_rate)

    return RegionalPremium(
        monthly_premium=monthly_premium,
        long_term_care=long_term_care,
        total=monthly_premium + long_term_care,
        property_score=property_points,
        car_score=car_points,
        breakdown=PremiumBreakdown(
            income=income_premium,
            property=property_premium,
            car=car_premium,
        ),
    )


def check_dependent_status(
    config: YearConfiguration, annual_income: float, property_tax_base: float
) -> DependentStatus:
    """Evaluate the income and property conditions for dependent status."""

    rules = config.health_insurance.dependent
    high_property = property_tax_base > rules.property_high
    income_limit = rules.income_limit_high_property if high_property else rules.income_limit

    income_check = DependentCheck(
        name="income",
        limit=income_limit,
        actual=annual_income,
        passed=annual_income <= income_limit,
    )
    property_check = DependentCheck(
        name="property_tax_base",
        limit=rules.property_tax_limit,
        actual=property_tax_base,
        passed=property_tax_base <= rules.property_tax_limit,
    )

    reasons: list[str] = []
    if not income_check.passed:
        condition = (
            f" when the property tax base exceeds {rules.property_high:,.0f} won"
            if high_property
            else ""
        )
        reasons.append(
            f"Annual income must not exceed {income_limit:,.0f} won{condition} "
            f"(current: {annual_income:,.0f} won)"
        )
    if not property_check.passed:
        reasons.append(
            f"Property tax base must not exceed {rules.property_tax_limit:,.0f} won "
            f"(current: {property_tax_base:,.0f} won)"
        )

    qualified = income_check.passed and property_check.passed
    if qualified:
        reasons.append(DEPENDENT_QUALIFIED_MESSAGE)

    return DependentStatus(
        qualified=qualified,
        checks=(income_check, property_check),
        reasons=tuple(reasons),
    )


def compare_voluntary_vs_regional(
    config: YearConfiguration,
    last_salary: float,
    annual_income: float,
    property_value: float,
) -> VoluntaryComparison:
    """Compare voluntary workplace continuation with regional enrolment."""

    settings = config.health_insurance

    voluntary_premium = round_won(last_salary * settings.employee_half_rate)
    voluntary_ltc = round_won(voluntary_premium * settings.long_term_care_rate)
    voluntary = PremiumOption(
        premium=voluntary_premium,
        long_term_care=voluntary_ltc,
        total=voluntary_premium + voluntary_ltc,
    )

    regional_result = regional_premium(config, annual_income, property_value)
    regional = PremiumOption(
        premium=regional_result.monthly_premium,
        long_term_care=regional_result.long_term_care,
        total=regional_result.total,
    )

    return VoluntaryComparison(
        voluntary=voluntary,
        regional=regional,
        voluntary_max_years=settings.voluntary_max_years,
        monthly_saving=voluntary.total - regional.total,
        recommended=VOLUNTARY if voluntary.total < regional.total else REGIONAL,
    )


__all__ = [
    "DEPENDENT_QUALIFIED_MESSAGE",
    "REGIONAL",
    "VOLUNTARY",
    "car_score",
    "check_dependent_status",
    "compare_voluntary_vs_regional",
    "property_score",
    "regional_premium",
]
