"""Dispatch validated calculation requests to the calculator modules.

Each operation identifier maps to a request model and a handler that receives
the year's constant table. Reference defaults (inflation, return, horizon)
that a request omits are filled in from the table here, so the calculators
themselves always take explicit arguments.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from pensionkr.backend.app.models import (
    AdditionalPaymentRequest,
    AvailableMonthlyRequest,
    BasicPensionRequest,
    CalculationRequest,
    CompareScenariosRequest,
    ContributionRoomRequest,
    DbRequest,
    DcRequest,
    DeferredPensionRequest,
    DependentStatusRequest,
    EarlyPensionRequest,
    EarlyWithdrawalTaxRequest,
    IncomeTaxRequest,
    IrpTaxCreditRequest,
    IsaTransferCreditRequest,
    LumpSumVsPensionRequest,
    PensionIncomeDeductionRequest,
    PrivatePensionComparisonRequest,
    RegionalPremiumRequest,
    RequiredFundRequest,
    RetirementIncomeTaxRequest,
    StartAgeRequest,
    VoluntaryVsRegionalRequest,
    WithdrawalSimulationRequest,
    format_validation_error,
)
from pensionkr.backend.config.year_config import (
    YearConfiguration,
    default_year,
    load_year_configuration,
)

from . import calculators

_LOGGER = logging.getLogger(__name__)

Handler = Callable[[YearConfiguration, Any], Any]


class UnknownOperationError(LookupError):
    """Raised when a calculation identifier is not registered."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Unknown calculation '{operation}'")
        self.operation = operation


@dataclass(frozen=True)
class Operation:
    """A registered calculation: its payload model and handler."""

    name: str
    request_model: type[CalculationRequest]
    handler: Handler


@dataclass(frozen=True)
class CalculationOutcome:
    """Result of one dispatched calculation with the year it was computed for."""

    operation: str
    year: int
    result: Any


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("PENSIONKR_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def _compare_scenarios(config: YearConfiguration, req: CompareScenariosRequest):
    normal_start_age = req.normal_start_age
    if normal_start_age is None:
        normal_start_age = calculators.start_age(config, req.birth_year)
    return calculators.compare_scenarios(
        config,
        req.basic_pension,
        normal_start_age,
        req.early_years,
        req.defer_years,
        req.end_age,
    )


def _required_fund(config: YearConfiguration, req: RequiredFundRequest):
    fund = config.retirement_fund
    return calculators.required_fund(
        config,
        req.monthly_expense,
        req.retire_age,
        _or_default(req.end_age, fund.default_life_expectancy),
        _or_default(req.inflation_rate, fund.default_inflation),
        _or_default(req.return_rate, fund.default_return),
        include_medical_costs=req.include_medical_costs,
    )


def _available_monthly(config: YearConfiguration, req: AvailableMonthlyRequest):
    fund = config.retirement_fund
    return calculators.available_monthly(
        config,
        req.total_assets,
        req.monthly_pension,
        req.retire_age,
        _or_default(req.end_age, fund.default_life_expectancy),
        _or_default(req.return_rate, fund.default_return),
        _or_default(req.inflation_rate, fund.default_inflation),
    )


def _withdrawal_simulation(config: YearConfiguration, req: WithdrawalSimulationRequest):
    fund = config.retirement_fund
    return calculators.simulate_withdrawal(
        config,
        req.total_assets,
        req.annual_withdrawal,
        req.withdrawal_rate,
        _or_default(req.return_rate, fund.default_return),
        _or_default(req.inflation_rate, fund.default_inflation),
        _or_default(req.years, fund.default_withdrawal_years),
    )


_OPERATIONS: tuple[Operation, ...] = (
    Operation(
        "national-pension/start-age",
        StartAgeRequest,
        lambda config, req: calculators.start_age(config, req.birth_year),
    ),
    Operation(
        "national-pension/basic-pension",
        BasicPensionRequest,
        lambda config, req: calculators.basic_monthly_pension(
            config, req.self_avg_monthly_income, req.enrollment_months
        ),
    ),
    Operation(
        "national-pension/early-pension",
        EarlyPensionRequest,
        lambda config, req: calculators.early_adjusted(
            config, req.basic_pension, req.early_years
        ),
    ),
    Operation(
        "national-pension/deferred-pension",
        DeferredPensionRequest,
        lambda config, req: calculators.deferred_adjusted(
            config, req.basic_pension, req.defer_years
        ),
    ),
    Operation("national-pension/compare-scenarios", CompareScenariosRequest, _compare_scenarios),
    Operation(
        "national-pension/additional-payment",
        AdditionalPaymentRequest,
        lambda config, req: calculators.additional_payment_effect(
            config, req.current_pension, req.additional_months, req.current_avg_income
        ),
    ),
    Operation(
        "retirement-pension/db",
        DbRequest,
        lambda config, req: calculators.calc_db(req.avg_salary_3m, req.service_years),
    ),
    Operation(
        "retirement-pension/dc",
        DcRequest,
        lambda config, req: calculators.calc_dc(
            req.annual_contribution, req.service_years, req.return_rate
        ),
    ),
    Operation(
        "retirement-pension/irp-tax-credit",
        IrpTaxCreditRequest,
        lambda config, req: calculators.irp_tax_credit(
            config, req.pension_saving, req.irp_amount, req.total_salary
        ),
    ),
    Operation(
        "retirement-pension/retirement-income-tax",
        RetirementIncomeTaxRequest,
        lambda config, req: calculators.retirement_income_tax(
            config, req.retirement_income, req.service_years
        ),
    ),
    Operation(
        "retirement-pension/lump-sum-vs-pension",
        LumpSumVsPensionRequest,
        lambda config, req: calculators.compare_lump_sum_vs_pension(
            config,
            req.retirement_income,
            req.service_years,
            req.pension_years,
            req.return_rate,
            req.start_age,
        ),
    ),
    Operation(
        "personal-pension/contribution-room",
        ContributionRoomRequest,
        lambda config, req: calculators.contribution_room(
            config, req.pension_saving, req.irp_amount
        ),
    ),
    Operation(
        "personal-pension/isa-transfer-credit",
        IsaTransferCreditRequest,
        lambda config, req: calculators.isa_transfer_credit(
            config, req.transfer_amount, req.total_salary
        ),
    ),
    Operation(
        "personal-pension/early-withdrawal-tax",
        EarlyWithdrawalTaxRequest,
        lambda config, req: calculators.early_withdrawal_tax(config, req.amount),
    ),
    Operation(
        "tax/income-tax",
        IncomeTaxRequest,
        lambda config, req: calculators.income_tax(config, req.taxable_income),
    ),
    Operation(
        "tax/pension-income-deduction",
        PensionIncomeDeductionRequest,
        lambda config, req: calculators.pension_income_deduction(config, req.pension_income),
    ),
    Operation(
        "tax/private-pension-comparison",
        PrivatePensionComparisonRequest,
        lambda config, req: calculators.compare_private_pension_tax(
            config, req.private_pension, req.other_income, req.age
        ),
    ),
    Operation(
        "health-insurance/regional-premium",
        RegionalPremiumRequest,
        lambda config, req: calculators.regional_premium(
            config, req.annual_income, req.property_value, req.car_value, req.car_cc
        ),
    ),
    Operation(
        "health-insurance/dependent-status",
        DependentStatusRequest,
        lambda config, req: calculators.check_dependent_status(
            config, req.annual_income, req.property_tax_base
        ),
    ),
    Operation(
        "health-insurance/voluntary-vs-regional",
        VoluntaryVsRegionalRequest,
        lambda config, req: calculators.compare_voluntary_vs_regional(
            config, req.last_salary, req.annual_income, req.property_value
        ),
    ),
    Operation("retirement-fund/required-fund", RequiredFundRequest, _required_fund),
    Operation("retirement-fund/available-monthly", AvailableMonthlyRequest, _available_monthly),
    Operation(
        "retirement-fund/withdrawal-simulation",
        WithdrawalSimulationRequest,
        _withdrawal_simulation,
    ),
)

OPERATIONS: Mapping[str, Operation] = {operation.name: operation for operation in _OPERATIONS}


def available_operations() -> tuple[str, ...]:
    """Return the registered operation identifiers in registration order."""

    return tuple(OPERATIONS)


def get_operation(name: str) -> Operation:
    try:
        return OPERATIONS[name]
    except KeyError as exc:
        raise UnknownOperationError(name) from exc


def run_calculation(name: str, payload: Mapping[str, Any] | None = None) -> CalculationOutcome:
    """Validate ``payload`` for operation ``name`` and run it.

    Raises ``UnknownOperationError`` for unregistered names, ``ValueError``
    for invalid payloads, ``CalculationDomainError`` for inputs outside a
    formula's domain and ``FileNotFoundError`` for years without a
    constant table.
    """

    operation = get_operation(name)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    with _profile_section("validation", timings):
        try:
            request = operation.request_model.model_validate(dict(payload or {}))
        except ValidationError as exc:
            raise ValueError(format_validation_error(exc)) from exc

    year = request.year if request.year is not None else default_year()
    with _profile_section("configuration", timings):
        config = load_year_configuration(year)

    _LOGGER.debug("Running calculation %s for year %s", name, year)
    with _profile_section(name, timings):
        result = operation.handler(config, request)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "run_calculation timings (ms): %s",
            {section: round(duration * 1000, 3) for section, duration in timings.items()},
        )

    return CalculationOutcome(operation=name, year=year, result=result)


__all__ = [
    "CalculationOutcome",
    "OPERATIONS",
    "Operation",
    "UnknownOperationError",
    "available_operations",
    "get_operation",
    "run_calculation",
]
