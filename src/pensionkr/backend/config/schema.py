"""Pydantic models describing the yearly constant table schema."""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _require_fraction(value: float, label: str) -> None:
    if value < 0 or value > 1:
        raise ConfigurationError(f"{label} must be between 0 and 1")


def _require_non_negative(value: float, label: str) -> None:
    if value < 0:
        raise ConfigurationError(f"{label} must be non-negative")


class BoundedRow(ImmutableModel):
    """A table row applying to values up to and including ``upper_bound``.

    ``None`` marks the open-ended final row.
    """

    upper_bound: float | None = Field(default=None, alias="upper")

    @model_validator(mode="after")
    def _validate_bound(self) -> Self:
        if self.upper_bound is not None and self.upper_bound < 0:
            raise ConfigurationError("Upper bounds must be non-negative values")
        return self


class TaxBracket(BoundedRow):
    """Progressive income tax row with its precomputed deduction constant."""

    rate: float
    deduction: float = 0.0

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        _require_fraction(self.rate, "Tax rates")
        _require_non_negative(self.deduction, "Bracket deductions")
        return self


class DeductionBracket(BoundedRow):
    """Cumulative deduction tier.

    The first tier deducts ``value * rate``; later tiers deduct
    ``base + (value - previous upper) * rate``.
    """

    rate: float
    base: float = 0.0

    @model_validator(mode="after")
    def _validate_values(self) -> DeductionBracket:
        _require_non_negative(self.rate, "Deduction rates")
        _require_non_negative(self.base, "Deduction bases")
        return self


class ScoreGrade(BoundedRow):
    """Graduated property score row."""

    score: float

    @model_validator(mode="after")
    def _validate_score(self) -> ScoreGrade:
        _require_non_negative(self.score, "Property scores")
        return self


class BandRate(BoundedRow):
    """Flat rate applying to an inclusive age band."""

    rate: float

    @model_validator(mode="after")
    def _validate_rate(self) -> BandRate:
        _require_fraction(self.rate, "Band rates")
        return self


class BandAmount(BoundedRow):
    """Flat amount applying to an inclusive age band."""

    amount: float

    @model_validator(mode="after")
    def _validate_amount(self) -> BandAmount:
        _require_non_negative(self.amount, "Band amounts")
        return self


class BirthYearBand(BoundedRow):
    """Pension start age for birth years up to ``upper_bound``."""

    age: int

    @model_validator(mode="after")
    def _validate_age(self) -> BirthYearBand:
        if self.age <= 0:
            raise ConfigurationError("Start ages must be positive integers")
        return self


def validate_bracket_sequence(rows: Sequence[BoundedRow], label: str) -> None:
    """Ensure ``rows`` ascend strictly and end with an open upper bound."""

    if not rows:
        raise ConfigurationError(f"'{label}' must define at least one row")
    last_upper: float | None = None
    for row in rows[:-1]:
        upper = row.upper_bound
        if upper is None:
            raise ConfigurationError(f"'{label}' may only leave the final row unbounded")
        if last_upper is not None and upper <= last_upper:
            raise ConfigurationError(f"'{label}' rows must be in ascending order")
        last_upper = upper
    final_upper = rows[-1].upper_bound
    if final_upper is not None:
        raise ConfigurationError(f"Final row of '{label}' must have an open upper bound")


class AdjustmentConfig(ImmutableModel):
    """Yearly early-reduction or deferral-increase rule."""

    yearly_rate: float
    max_years: int

    @model_validator(mode="after")
    def _validate_adjustment(self) -> AdjustmentConfig:
        _require_fraction(self.yearly_rate, "Adjustment yearly_rate")
        if self.max_years < 0:
            raise ConfigurationError("Adjustment max_years must be non-negative")
        return self


class NationalPensionConfig(ImmutableModel):
    """National pension benefit formula constants."""

    a_value: float
    contribution_rate: float
    income_upper: float
    full_pension_years: float
    min_pension_years: float
    max_pension_years: float
    replacement_rate: float
    extra_year_increment: float
    additional_payment_increment: float
    early: AdjustmentConfig
    deferral: AdjustmentConfig
    start_ages: Sequence[BirthYearBand]

    @model_validator(mode="after")
    def _validate_config(self) -> NationalPensionConfig:
        _require_non_negative(self.a_value, "'a_value'")
        _require_fraction(self.contribution_rate, "'contribution_rate'")
        _require_fraction(self.replacement_rate, "'replacement_rate'")
        _require_fraction(self.extra_year_increment, "'extra_year_increment'")
        _require_fraction(
            self.additional_payment_increment, "'additional_payment_increment'"
        )
        _require_non_negative(self.income_upper, "'income_upper'")
        if self.full_pension_years <= 0:
            raise ConfigurationError("'full_pension_years' must be positive")
        if not 0 <= self.min_pension_years <= self.full_pension_years:
            raise ConfigurationError(
                "'min_pension_years' must lie between 0 and 'full_pension_years'"
            )
        if self.max_pension_years < self.full_pension_years:
            raise ConfigurationError(
                "'max_pension_years' cannot be shorter than 'full_pension_years'"
            )
        validate_bracket_sequence(self.start_ages, "national_pension.start_ages")
        return self


class RetirementPensionConfig(ImmutableModel):
    """DB/DC/IRP constants and the averaged retirement-income tax tables."""

    pension_saving_limit: float
    combined_credit_limit: float
    credit_salary_threshold: float
    credit_rate_low_salary: float
    credit_rate_high_salary: float
    pension_tax_rates: Sequence[BandRate]
    service_year_deduction: Sequence[DeductionBracket]
    converted_income_deduction: Sequence[DeductionBracket]

    @model_validator(mode="after")
    def _validate_config(self) -> RetirementPensionConfig:
        _require_non_negative(self.pension_saving_limit, "'pension_saving_limit'")
        if self.combined_credit_limit < self.pension_saving_limit:
            raise ConfigurationError(
                "'combined_credit_limit' cannot be lower than 'pension_saving_limit'"
            )
        _require_fraction(self.credit_rate_low_salary, "'credit_rate_low_salary'")
        _require_fraction(self.credit_rate_high_salary, "'credit_rate_high_salary'")
        validate_bracket_sequence(
            self.pension_tax_rates, "retirement_pension.pension_tax_rates"
        )
        validate_bracket_sequence(
            self.service_year_deduction, "retirement_pension.service_year_deduction"
        )
        validate_bracket_sequence(
            self.converted_income_deduction,
            "retirement_pension.converted_income_deduction",
        )
        return self


class PersonalPensionConfig(ImmutableModel):
    """Pension savings account limits."""

    annual_contribution_limit: float
    isa_transfer_rate: float
    isa_transfer_limit: float
    early_withdrawal_tax_rate: float

    @model_validator(mode="after")
    def _validate_config(self) -> PersonalPensionConfig:
        _require_non_negative(
            self.annual_contribution_limit, "'annual_contribution_limit'"
        )
        _require_fraction(self.isa_transfer_rate, "'isa_transfer_rate'")
        _require_non_negative(self.isa_transfer_limit, "'isa_transfer_limit'")
        _require_fraction(self.early_withdrawal_tax_rate, "'early_withdrawal_tax_rate'")
        return self


class PrivatePensionConfig(ImmutableModel):
    """Separate taxation rules for private pension income."""

    separate_limit: float
    separate_rates: Sequence[BandRate]
    over_limit_rate: float

    @model_validator(mode="after")
    def _validate_config(self) -> PrivatePensionConfig:
        _require_non_negative(self.separate_limit, "'separate_limit'")
        _require_fraction(self.over_limit_rate, "'over_limit_rate'")
        validate_bracket_sequence(self.separate_rates, "tax.private_pension.separate_rates")
        return self


class TaxConfig(ImmutableModel):
    """Income tax brackets, local surtax and pension income deductions."""

    income_tax_brackets: Sequence[TaxBracket]
    local_tax_rate: float
    basic_deduction: float
    pension_income_deduction: Sequence[DeductionBracket]
    pension_deduction_max: float
    private_pension: PrivatePensionConfig

    @model_validator(mode="after")
    def _validate_config(self) -> TaxConfig:
        _require_fraction(self.local_tax_rate, "'local_tax_rate'")
        _require_non_negative(self.basic_deduction, "'basic_deduction'")
        _require_non_negative(self.pension_deduction_max, "'pension_deduction_max'")
        validate_bracket_sequence(self.income_tax_brackets, "tax.income_tax_brackets")
        validate_bracket_sequence(
            self.pension_income_deduction, "tax.pension_income_deduction"
        )
        return self


class CarScoreConfig(ImmutableModel):
    """Flat vehicle score applied to regional subscribers."""

    min_value: float
    min_cc: float
    high_cc: float
    score_standard: float
    score_high: float

    @model_validator(mode="after")
    def _validate_config(self) -> CarScoreConfig:
        if self.high_cc < self.min_cc:
            raise ConfigurationError("'high_cc' cannot be lower than 'min_cc'")
        return self


class RegionalConfig(ImmutableModel):
    """Regional subscriber scoring tables (property and car values in 10,000 won)."""

    property_basic_deduction: float
    property_grades: Sequence[ScoreGrade]
    point_value: float
    car: CarScoreConfig

    @model_validator(mode="after")
    def _validate_config(self) -> RegionalConfig:
        _require_non_negative(self.property_basic_deduction, "'property_basic_deduction'")
        _require_non_negative(self.point_value, "'point_value'")
        validate_bracket_sequence(
            self.property_grades, "health_insurance.regional.property_grades"
        )
        return self


class DependentConfig(ImmutableModel):
    """Dependent eligibility thresholds."""

    income_limit: float
    income_limit_high_property: float
    property_tax_limit: float
    property_high: float

    @model_validator(mode="after")
    def _validate_config(self) -> DependentConfig:
        if self.income_limit_high_property > self.income_limit:
            raise ConfigurationError(
                "'income_limit_high_property' cannot exceed 'income_limit'"
            )
        return self


class HealthInsuranceConfig(ImmutableModel):
    """Health insurance premium rates."""

    rate: float
    long_term_care_rate: float
    employee_half_rate: float
    voluntary_max_years: int
    regional: RegionalConfig
    dependent: DependentConfig

    @model_validator(mode="after")
    def _validate_config(self) -> HealthInsuranceConfig:
        _require_fraction(self.rate, "'rate'")
        _require_fraction(self.long_term_care_rate, "'long_term_care_rate'")
        _require_fraction(self.employee_half_rate, "'employee_half_rate'")
        return self


class BucketConfig(ImmutableModel):
    """Three-bucket withdrawal allocation and returns."""

    shares: Sequence[float]
    conservative_return: float
    moderate_return: float
    aggressive_premium: float
    rebalance_interval: int

    @model_validator(mode="after")
    def _validate_config(self) -> BucketConfig:
        if len(self.shares) != 3:
            raise ConfigurationError("Bucket 'shares' must list exactly three entries")
        for share in self.shares:
            _require_fraction(share, "Bucket shares")
        if abs(sum(self.shares) - 1.0) > 1e-9:
            raise ConfigurationError("Bucket 'shares' must sum to 1")
        if self.rebalance_interval <= 0:
            raise ConfigurationError("'rebalance_interval' must be a positive integer")
        return self


class RetirementFundConfig(ImmutableModel):
    """Defaults and reference data for retirement fund projections."""

    default_inflation: float
    default_return: float
    default_life_expectancy: int
    default_withdrawal_years: int
    medical_costs: Sequence[BandAmount]
    bucket: BucketConfig

    @model_validator(mode="after")
    def _validate_config(self) -> RetirementFundConfig:
        validate_bracket_sequence(self.medical_costs, "retirement_fund.medical_costs")
        return self


class YearConfiguration(ImmutableModel):
    """Structured representation of one effective year's constant table."""

    year: int
    meta: dict[str, Any] = Field(default_factory=dict)
    national_pension: NationalPensionConfig
    retirement_pension: RetirementPensionConfig
    personal_pension: PersonalPensionConfig
    tax: TaxConfig
    health_insurance: HealthInsuranceConfig
    retirement_fund: RetirementFundConfig

    @model_validator(mode="before")
    @classmethod
    def _prepare(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must define a mapping at the top level")
        prepared = dict(data)
        meta = prepared.get("meta")
        if meta is None:
            prepared["meta"] = {}
        elif not isinstance(meta, dict):
            raise ConfigurationError("'meta' section must be a mapping if provided")
        return prepared


class TaxYearManifestEntry(ImmutableModel):
    """Entry describing a supported year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Manifest describing the available configuration files."""

    years: Sequence[TaxYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> TaxYearManifest:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "AdjustmentConfig",
    "BandAmount",
    "BandRate",
    "BirthYearBand",
    "BoundedRow",
    "BucketConfig",
    "CarScoreConfig",
    "ConfigurationError",
    "DeductionBracket",
    "DependentConfig",
    "HealthInsuranceConfig",
    "ImmutableModel",
    "NationalPensionConfig",
    "PersonalPensionConfig",
    "PrivatePensionConfig",
    "RegionalConfig",
    "RetirementFundConfig",
    "RetirementPensionConfig",
    "ScoreGrade",
    "TaxBracket",
    "TaxConfig",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "ValidationError",
    "YearConfiguration",
    "validate_bracket_sequence",
]
