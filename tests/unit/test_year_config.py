"""Unit coverage for constant table discovery, parsing and schema checks."""

from __future__ import annotations

from pathlib import Path
from shutil import copy2

import pytest
import yaml

from pensionkr.backend.config import year_config
from pensionkr.backend.config.year_config import ConfigurationError


@pytest.fixture()
def isolated_config_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a temporary configuration directory patched into ``year_config``."""

    original_directory = year_config.CONFIG_DIRECTORY
    for filename in ("2025.yaml", "2026.yaml"):
        copy2(original_directory / filename, tmp_path / filename)

    manifest_path = tmp_path / "manifest.yaml"
    copy2(original_directory / "manifest.yaml", manifest_path)

    monkeypatch.setattr(year_config, "CONFIG_DIRECTORY", tmp_path)
    monkeypatch.setattr(year_config, "MANIFEST_FILE", manifest_path)
    year_config.load_year_configuration.cache_clear()
    year_config.load_manifest.cache_clear()

    yield tmp_path

    year_config.load_year_configuration.cache_clear()
    year_config.load_manifest.cache_clear()


def _raw_table(year: int = 2026) -> dict:
    path = year_config.CONFIG_DIRECTORY / f"{year}.yaml"
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def test_available_years_lists_manifest_entries() -> None:
    assert year_config.available_years() == (2025, 2026)
    assert year_config.default_year() == 2026


def test_available_years_discovers_new_manifest_entry(
    isolated_config_directory: Path,
) -> None:
    new_year_path = isolated_config_directory / "2030.yaml"
    raw = yaml.safe_load((isolated_config_directory / "2026.yaml").read_text())
    raw["year"] = 2030
    new_year_path.write_text(yaml.safe_dump(raw, sort_keys=False))

    manifest_path = isolated_config_directory / "manifest.yaml"
    manifest = yaml.safe_load(manifest_path.read_text())
    manifest["years"].append({"year": 2030})
    manifest_path.write_text(yaml.safe_dump(manifest, sort_keys=False))
    year_config.load_manifest.cache_clear()

    assert year_config.available_years() == (2025, 2026, 2030)
    assert year_config.default_year() == 2030
    assert year_config.load_year_configuration(2030).year == 2030


def test_undeclared_year_raises_file_not_found() -> None:
    with pytest.raises(FileNotFoundError):
        year_config.load_year_configuration(1999)


def test_declared_year_with_missing_file_raises(isolated_config_directory: Path) -> None:
    (isolated_config_directory / "2025.yaml").unlink()

    with pytest.raises(FileNotFoundError, match="missing"):
        year_config.load_year_configuration(2025)


def test_duplicate_manifest_years_are_rejected(isolated_config_directory: Path) -> None:
    manifest_path = isolated_config_directory / "manifest.yaml"
    manifest_path.write_text("years:\n  - year: 2026\n  - year: 2026\n")
    year_config.load_manifest.cache_clear()

    with pytest.raises(ConfigurationError, match="Duplicate year"):
        year_config.load_manifest()


def test_year_mismatch_is_rejected() -> None:
    raw = _raw_table()
    raw["year"] = 2024

    with pytest.raises(ConfigurationError, match="year mismatch"):
        year_config.parse_year_configuration(raw, 2026)


def test_tables_are_cached_and_immutable() -> None:
    first = year_config.load_year_configuration(2026)
    second = year_config.load_year_configuration(2026)

    assert first is second
    with pytest.raises(Exception):
        first.national_pension.a_value = 0  # type: ignore[misc]


def test_years_hold_independent_values() -> None:
    older = year_config.load_year_configuration(2025)
    newer = year_config.load_year_configuration(2026)

    assert older.national_pension.a_value == 2989237
    assert newer.national_pension.a_value == 3089062
    assert older.health_insurance.rate == pytest.approx(0.0709)
    assert newer.health_insurance.rate == pytest.approx(0.0719)


def test_brackets_must_ascend() -> None:
    raw = _raw_table()
    brackets = raw["tax"]["income_tax_brackets"]
    brackets[0], brackets[1] = brackets[1], brackets[0]

    with pytest.raises(ConfigurationError, match="ascending"):
        year_config.parse_year_configuration(raw, 2026)


def test_final_bracket_must_be_open() -> None:
    raw = _raw_table()
    raw["tax"]["income_tax_brackets"][-1]["upper"] = 2_000_000_000

    with pytest.raises(ConfigurationError, match="open upper bound"):
        year_config.parse_year_configuration(raw, 2026)


def test_only_final_row_may_be_open() -> None:
    raw = _raw_table()
    raw["national_pension"]["start_ages"][2]["upper"] = None

    with pytest.raises(ConfigurationError, match="only leave the final row"):
        year_config.parse_year_configuration(raw, 2026)


def test_empty_tables_are_rejected() -> None:
    raw = _raw_table()
    raw["retirement_fund"]["medical_costs"] = []

    with pytest.raises(ConfigurationError, match="at least one row"):
        year_config.parse_year_configuration(raw, 2026)


def test_fractional_rates_must_lie_in_unit_interval() -> None:
    raw = _raw_table()
    raw["health_insurance"]["rate"] = 1.5

    with pytest.raises(ConfigurationError, match="between 0 and 1"):
        year_config.parse_year_configuration(raw, 2026)


def test_unknown_fields_are_rejected() -> None:
    raw = _raw_table()
    raw["tax"]["surprise"] = 1

    with pytest.raises(ConfigurationError):
        year_config.parse_year_configuration(raw, 2026)


def test_bucket_shares_must_sum_to_one() -> None:
    raw = _raw_table()
    raw["retirement_fund"]["bucket"]["shares"] = [0.2, 0.3, 0.4]

    with pytest.raises(ConfigurationError, match="sum to 1"):
        year_config.parse_year_configuration(raw, 2026)


def test_top_level_must_be_mapping(isolated_config_directory: Path) -> None:
    (isolated_config_directory / "2026.yaml").write_text("- 1\n- 2\n")

    with pytest.raises(ConfigurationError, match="mapping"):
        year_config.load_year_configuration(2026)


def test_maximum_enrolment_cannot_undercut_full_pension_period() -> None:
    raw = _raw_table()
    raw["national_pension"]["max_pension_years"] = 15

    with pytest.raises(ConfigurationError, match="max_pension_years"):
        year_config.parse_year_configuration(raw, 2026)
