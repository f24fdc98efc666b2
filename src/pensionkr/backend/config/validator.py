"""Calibration checks for yearly constant tables that the schema cannot express.

The schema guarantees structure (ordering, open final rows, rate ranges);
these checks confirm the published constants agree with each other, for
example that precomputed bracket deductions keep the tax continuous.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from .year_config import (
    BoundedRow,
    DeductionBracket,
    TaxBracket,
    YearConfiguration,
    available_years,
    load_year_configuration,
)

# Published constants are whole won; anything closer than this is equal.
TOLERANCE = 0.5


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_tax_continuity(scope: str, brackets: Sequence[TaxBracket]) -> list[str]:
    errors: list[str] = []
    for lower, upper in zip(brackets, brackets[1:]):
        boundary = lower.upper_bound
        if boundary is None:
            continue
        below = boundary * lower.rate - lower.deduction
        above = boundary * upper.rate - upper.deduction
        if abs(below - above) > TOLERANCE:
            errors.append(
                _format_scope(
                    scope,
                    (
                        f"tax is discontinuous at {boundary:,.0f} "
                        f"({below:,.0f} below vs {above:,.0f} above)"
                    ),
                )
            )
    return errors


def _validate_deduction_bases(scope: str, brackets: Sequence[DeductionBracket]) -> list[str]:
    errors: list[str] = []
    previous_upper = 0.0
    cumulative = 0.0
    for index, bracket in enumerate(brackets):
        if index > 0 and abs(bracket.base - cumulative) > TOLERANCE:
            errors.append(
                _format_scope(
                    scope,
                    (
                        f"tier {index} base {bracket.base:,.0f} does not match the "
                        f"cumulative deduction {cumulative:,.0f} at {previous_upper:,.0f}"
                    ),
                )
            )
        if bracket.upper_bound is None:
            break
        span = bracket.upper_bound - previous_upper
        cumulative = (bracket.base if index > 0 else 0.0) + span * bracket.rate
        previous_upper = bracket.upper_bound
    return errors


def _validate_monotonic(
    scope: str,
    rows: Sequence[BoundedRow],
    attribute: str,
    *,
    increasing: bool,
) -> list[str]:
    values = [getattr(row, attribute) for row in rows]
    pairs = zip(values, values[1:])
    if increasing:
        ordered = all(first <= second for first, second in pairs)
        expectation = "non-decreasing"
    else:
        ordered = all(first >= second for first, second in pairs)
        expectation = "non-increasing"
    if ordered:
        return []
    return [_format_scope(scope, f"'{attribute}' values must be {expectation}")]


def validate_year_configuration(config: YearConfiguration) -> list[str]:
    """Return a list of calibration issues for the provided configuration."""

    errors: list[str] = []

    national = config.national_pension
    retirement = config.retirement_pension
    tax = config.tax
    regional = config.health_insurance.regional

    errors.extend(_validate_tax_continuity("tax.income_tax_brackets", tax.income_tax_brackets))
    errors.extend(
        _validate_deduction_bases("tax.pension_income_deduction", tax.pension_income_deduction)
    )
    errors.extend(
        _validate_deduction_bases(
            "retirement_pension.service_year_deduction", retirement.service_year_deduction
        )
    )
    errors.extend(
        _validate_deduction_bases(
            "retirement_pension.converted_income_deduction",
            retirement.converted_income_deduction,
        )
    )

    errors.extend(
        _validate_monotonic(
            "retirement_pension.pension_tax_rates",
            retirement.pension_tax_rates,
            "rate",
            increasing=False,
        )
    )
    errors.extend(
        _validate_monotonic(
            "tax.private_pension.separate_rates",
            tax.private_pension.separate_rates,
            "rate",
            increasing=False,
        )
    )
    errors.extend(
        _validate_monotonic(
            "national_pension.start_ages", national.start_ages, "age", increasing=True
        )
    )
    errors.extend(
        _validate_monotonic(
            "health_insurance.regional.property_grades",
            regional.property_grades,
            "score",
            increasing=True,
        )
    )
    errors.extend(
        _validate_monotonic(
            "retirement_fund.medical_costs",
            config.retirement_fund.medical_costs,
            "amount",
            increasing=True,
        )
    )

    if tax.private_pension.over_limit_rate < max(
        band.rate for band in tax.private_pension.separate_rates
    ):
        errors.append(
            _format_scope(
                "tax.private_pension",
                "over-limit rate should not be lower than the separate taxation rates",
            )
        )

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        config = load_year_configuration(year)
        results[int(year)] = validate_year_configuration(config)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check configured constant tables for calibration issues."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        try:
            config = load_year_configuration(year)
        except FileNotFoundError as error:
            print(f"[{year}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_year_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
