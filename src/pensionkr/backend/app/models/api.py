"""Pydantic models describing the public API surface."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

__all__ = [
    "AdditionalPaymentRequest",
    "AvailableMonthlyRequest",
    "BasicPensionRequest",
    "CalculationRequest",
    "CompareScenariosRequest",
    "ContributionRoomRequest",
    "DbRequest",
    "DcRequest",
    "DeferredPensionRequest",
    "DependentStatusRequest",
    "EarlyPensionRequest",
    "EarlyWithdrawalTaxRequest",
    "IncomeTaxRequest",
    "IrpTaxCreditRequest",
    "IsaTransferCreditRequest",
    "LumpSumVsPensionRequest",
    "PensionIncomeDeductionRequest",
    "PrivatePensionComparisonRequest",
    "RegionalPremiumRequest",
    "RequiredFundRequest",
    "RetirementIncomeTaxRequest",
    "StartAgeRequest",
    "VoluntaryVsRegionalRequest",
    "WithdrawalSimulationRequest",
    "format_validation_error",
]


# Upper bounds for inputs that size a projection loop.
MAX_ADJUSTMENT_YEARS = 10
MAX_SERVICE_YEARS = 60
MAX_PAYOUT_YEARS = 50


class CalculationRequest(BaseModel):
    """Fields shared by every calculation payload.

    ``year`` selects the constant table; omitting it uses the latest
    configured year.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int | None = Field(default=None, ge=1900, le=2100)


# National pension -----------------------------------------------------------


class StartAgeRequest(CalculationRequest):
    birth_year: int = Field(..., ge=1900, le=2100)


class BasicPensionRequest(CalculationRequest):
    self_avg_monthly_income: float = Field(..., ge=0)
    enrollment_months: float = Field(..., ge=0)


class EarlyPensionRequest(CalculationRequest):
    basic_pension: float = Field(..., ge=0)
    early_years: int = Field(..., ge=0, le=MAX_ADJUSTMENT_YEARS)


class DeferredPensionRequest(CalculationRequest):
    basic_pension: float = Field(..., ge=0)
    defer_years: int = Field(..., ge=0, le=MAX_ADJUSTMENT_YEARS)


class CompareScenariosRequest(CalculationRequest):
    """Scenario comparison inputs.

    ``normal_start_age`` may be omitted when ``birth_year`` is given; the
    start age is then looked up from the birth-year table.
    """

    basic_pension: int = Field(..., ge=0)
    normal_start_age: int | None = Field(default=None, ge=0, le=120)
    birth_year: int | None = Field(default=None, ge=1900, le=2100)
    early_years: int = Field(default=5, ge=0, le=MAX_ADJUSTMENT_YEARS)
    defer_years: int = Field(default=5, ge=0, le=MAX_ADJUSTMENT_YEARS)
    end_age: int = Field(default=90, ge=0, le=120)

    @model_validator(mode="after")
    def _require_start(self) -> "CompareScenariosRequest":
        if self.normal_start_age is None and self.birth_year is None:
            raise ValueError("Provide either normal_start_age or birth_year")
        return self


class AdditionalPaymentRequest(CalculationRequest):
    current_pension: float = Field(..., ge=0)
    additional_months: int = Field(..., ge=0)
    current_avg_income: float = Field(..., ge=0)


# Retirement pension ---------------------------------------------------------


class DbRequest(CalculationRequest):
    avg_salary_3m: float = Field(..., ge=0)
    service_years: float = Field(..., ge=0, le=MAX_SERVICE_YEARS)


class DcRequest(CalculationRequest):
    annual_contribution: float = Field(..., ge=0)
    service_years: float = Field(..., ge=0, le=MAX_SERVICE_YEARS)
    return_rate: float = Field(default=0.03, gt=-1, le=1)


class IrpTaxCreditRequest(CalculationRequest):
    pension_saving: float = Field(..., ge=0)
    irp_amount: float = Field(..., ge=0)
    total_salary: float = Field(..., ge=0)


class RetirementIncomeTaxRequest(CalculationRequest):
    retirement_income: float = Field(..., ge=0)
    service_years: float


class LumpSumVsPensionRequest(CalculationRequest):
    retirement_income: float = Field(..., ge=0)
    service_years: float
    pension_years: int = Field(default=10, ge=1, le=MAX_PAYOUT_YEARS)
    return_rate: float = Field(default=0.03, gt=-1, le=1)
    start_age: int = Field(default=55, ge=0, le=120)


# Personal pension -----------------------------------------------------------


class ContributionRoomRequest(CalculationRequest):
    pension_saving: float = Field(default=0.0, ge=0)
    irp_amount: float = Field(default=0.0, ge=0)


class IsaTransferCreditRequest(CalculationRequest):
    transfer_amount: float = Field(..., ge=0)
    total_salary: float = Field(..., ge=0)


class EarlyWithdrawalTaxRequest(CalculationRequest):
    amount: float = Field(..., ge=0)


# Tax ------------------------------------------------------------------------


class IncomeTaxRequest(CalculationRequest):
    taxable_income: float = Field(..., ge=0)


class PensionIncomeDeductionRequest(CalculationRequest):
    pension_income: float = Field(..., ge=0)


class PrivatePensionComparisonRequest(CalculationRequest):
    private_pension: float = Field(..., ge=0)
    other_income: float = Field(default=0.0, ge=0)
    age: int = Field(..., ge=0, le=120)


# Health insurance -----------------------------------------------------------


class RegionalPremiumRequest(CalculationRequest):
    """Regional premium inputs; property and car values in 10,000 won."""

    annual_income: float = Field(..., ge=0)
    property_value: float = Field(default=0.0, ge=0)
    car_value: float = Field(default=0.0, ge=0)
    car_cc: float = Field(default=0.0, ge=0)


class DependentStatusRequest(CalculationRequest):
    annual_income: float = Field(..., ge=0)
    property_tax_base: float = Field(..., ge=0)


class VoluntaryVsRegionalRequest(CalculationRequest):
    last_salary: float = Field(..., ge=0)
    annual_income: float = Field(..., ge=0)
    property_value: float = Field(default=0.0, ge=0)


# Retirement fund ------------------------------------------------------------


class RequiredFundRequest(CalculationRequest):
    """Required fund inputs; omitted rates and ages use the table defaults."""

    monthly_expense: float = Field(..., ge=0)
    retire_age: int = Field(..., ge=0, le=120)
    end_age: int | None = Field(default=None, ge=0, le=120)
    inflation_rate: float | None = Field(default=None, gt=-1, le=1)
    return_rate: float | None = Field(default=None, gt=-1, le=1)
    include_medical_costs: bool = False


class AvailableMonthlyRequest(CalculationRequest):
    total_assets: float = Field(..., ge=0)
    monthly_pension: float = Field(default=0.0, ge=0)
    retire_age: int = Field(..., ge=0, le=120)
    end_age: int | None = Field(default=None, ge=0, le=120)
    return_rate: float | None = Field(default=None, gt=-1, le=1)
    inflation_rate: float | None = Field(default=None, gt=-1, le=1)


class WithdrawalSimulationRequest(CalculationRequest):
    total_assets: float = Field(..., ge=0)
    annual_withdrawal: float = Field(..., ge=0)
    withdrawal_rate: float = Field(..., ge=0, le=1)
    return_rate: float | None = Field(default=None, gt=-1, le=1)
    inflation_rate: float | None = Field(default=None, gt=-1, le=1)
    years: int | None = Field(default=None, ge=1, le=100)


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
