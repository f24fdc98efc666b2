"""Unit tests for health insurance premiums and dependent eligibility."""

from __future__ import annotations

import pytest

from pensionkr.backend.app.services.calculators import health_insurance


@pytest.mark.parametrize(
    ("property_value", "expected"),
    [(0, 0), (5_000, 0), (10_000, 0), (10_450, 22), (10_451, 44), (2_000_000, 2_341)],
)
def test_property_score_after_basic_deduction(config, property_value: float, expected: float) -> None:
    assert health_insurance.property_score(config, property_value) == expected


@pytest.mark.parametrize(
    ("value", "cc", "expected"),
    [(4_000, 1_600, 18), (4_000, 3_000, 27), (3_999, 2_000, 0), (5_000, 1_500, 0), (0, 0, 0)],
)
def test_car_score(config, value: float, cc: float, expected: float) -> None:
    assert health_insurance.car_score(config, value, cc) == expected


def test_regional_premium_income_only(config) -> None:
    premium = health_insurance.regional_premium(config, 24_000_000)

    assert premium.breakdown.income == 143_800
    assert premium.breakdown.property == 0
    assert premium.breakdown.car == 0
    assert premium.monthly_premium == 143_800
    assert premium.long_term_care == 18_622
    assert premium.total == 162_422


def test_regional_premium_with_property_and_car(config) -> None:
    premium = health_insurance.regional_premium(
        config, 24_000_000, property_value=10_450, car_value=4_000, car_cc=2_000
    )

    assert premium.property_score == 22
    assert premium.car_score == 18
    assert premium.breakdown.property == 4_585
    assert premium.breakdown.car == 3_751
    assert premium.monthly_premium == 152_136
    assert premium.long_term_care == 19_702
    assert premium.total == 171_838


def test_dependent_status_qualified(config) -> None:
    status = health_insurance.check_dependent_status(config, 15_000_000, 300_000_000)

    assert status.qualified
    assert all(check.passed for check in status.checks)
    assert status.reasons == (health_insurance.DEPENDENT_QUALIFIED_MESSAGE,)


def test_dependent_status_income_too_high(config) -> None:
    status = health_insurance.check_dependent_status(config, 25_000_000, 300_000_000)

    assert not status.qualified
    assert len(status.reasons) == 1
    assert "20,000,000" in status.reasons[0]


def test_dependent_status_high_property_lowers_income_limit(config) -> None:
    status = health_insurance.check_dependent_status(config, 15_000_000, 950_000_000)

    income_check, property_check = status.checks
    assert income_check.limit == 10_000_000
    assert not income_check.passed
    assert not property_check.passed
    assert len(status.reasons) == 2
    assert not status.qualified


def test_dependent_status_property_only_failure(config) -> None:
    status = health_insurance.check_dependent_status(config, 5_000_000, 950_000_000)

    income_check, property_check = status.checks
    assert income_check.passed
    assert not property_check.passed
    assert "540,000,000" in status.reasons[0]


def test_voluntary_vs_regional_tie_recommends_regional(config) -> None:
    comparison = health_insurance.compare_voluntary_vs_regional(config, 4_000_000, 24_000_000, 0)

    assert comparison.voluntary.premium == 143_800
    assert comparison.voluntary.total == comparison.regional.total == 162_422
    assert comparison.monthly_saving == 0
    assert comparison.recommended == health_insurance.REGIONAL
    assert comparison.voluntary_max_years == 3


def test_voluntary_vs_regional_prefers_cheaper_voluntary(config) -> None:
    comparison = health_insurance.compare_voluntary_vs_regional(
        config, 2_000_000, 24_000_000, 20_000
    )

    assert comparison.voluntary.total == comparison.voluntary.premium + comparison.voluntary.long_term_care
    assert comparison.voluntary.total < comparison.regional.total
    assert comparison.monthly_saving < 0
    assert comparison.recommended == health_insurance.VOLUNTARY
