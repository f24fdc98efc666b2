from pensionkr.backend.config.validator import (
    main,
    validate_all_years,
    validate_year_configuration,
)
from pensionkr.backend.config.year_config import load_year_configuration


def _replace_row(rows, index, **update):
    updated = list(rows)
    updated[index] = updated[index].model_copy(update=update)
    return updated


def test_current_configurations_are_valid() -> None:
    results = validate_all_years()
    assert set(results) == {2025, 2026}
    assert all(not issues for issues in results.values()), results


def test_validator_flags_discontinuous_tax_brackets() -> None:
    config = load_year_configuration(2026)
    tax = config.tax.model_copy(
        update={
            "income_tax_brackets": _replace_row(
                config.tax.income_tax_brackets, 1, deduction=1_000_000
            )
        }
    )
    broken = config.model_copy(update={"tax": tax})

    errors = validate_year_configuration(broken)

    assert any("tax.income_tax_brackets" in error and "discontinuous" in error for error in errors)


def test_validator_flags_inconsistent_deduction_base() -> None:
    config = load_year_configuration(2026)
    retirement = config.retirement_pension.model_copy(
        update={
            "service_year_deduction": _replace_row(
                config.retirement_pension.service_year_deduction, 2, base=16_000_000
            )
        }
    )
    broken = config.model_copy(update={"retirement_pension": retirement})

    errors = validate_year_configuration(broken)

    assert any("service_year_deduction" in error and "tier 2" in error for error in errors)


def test_validator_flags_rising_age_band_rates() -> None:
    config = load_year_configuration(2026)
    retirement = config.retirement_pension.model_copy(
        update={
            "pension_tax_rates": _replace_row(
                config.retirement_pension.pension_tax_rates, 2, rate=0.09
            )
        }
    )
    broken = config.model_copy(update={"retirement_pension": retirement})

    errors = validate_year_configuration(broken)

    assert any("pension_tax_rates" in error and "non-increasing" in error for error in errors)


def test_cli_reports_ok_for_each_year(capsys) -> None:
    exit_code = main([])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "[2025] OK" in output
    assert "[2026] OK" in output


def test_cli_reports_missing_year(capsys) -> None:
    exit_code = main(["1999"])

    output = capsys.readouterr().out
    assert exit_code == 1
    assert "[1999] failed to load configuration" in output
