"""Typed request and result models shared across the calculation services.

Request payloads are validated with Pydantic models (``api``), while the
calculators return lightweight frozen dataclasses (``results``). Keeping both
here lets routes, the calculation service and tests agree on one schema.
"""

from __future__ import annotations

from .api import (
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
from .results import (
    AdditionalPaymentEffect,
    AgeValue,
    AvailableMonthly,
    BucketYear,
    ComprehensiveTaxation,
    ContributionRoom,
    DependentCheck,
    DependentStatus,
    EarlyWithdrawalTax,
    IncomeTaxResult,
    IrpTaxCredit,
    IsaTransferCredit,
    LumpSumComparison,
    LumpSumOption,
    MonthlyPayout,
    PensionPayoutOption,
    PensionScenarioComparison,
    PremiumBreakdown,
    PremiumOption,
    PrivatePensionComparison,
    RegionalPremium,
    RequiredFund,
    RetirementIncomeTax,
    SeparateTaxation,
    VoluntaryComparison,
    WithdrawalSimulation,
    YearBalance,
    YearlyExpense,
)

__all__ = [
    "AdditionalPaymentEffect",
    "AdditionalPaymentRequest",
    "AgeValue",
    "AvailableMonthly",
    "AvailableMonthlyRequest",
    "BasicPensionRequest",
    "BucketYear",
    "CalculationRequest",
    "CompareScenariosRequest",
    "ComprehensiveTaxation",
    "ContributionRoom",
    "ContributionRoomRequest",
    "DbRequest",
    "DcRequest",
    "DeferredPensionRequest",
    "DependentCheck",
    "DependentStatus",
    "DependentStatusRequest",
    "EarlyPensionRequest",
    "EarlyWithdrawalTax",
    "EarlyWithdrawalTaxRequest",
    "IncomeTaxRequest",
    "IncomeTaxResult",
    "IrpTaxCredit",
    "IrpTaxCreditRequest",
    "IsaTransferCredit",
    "IsaTransferCreditRequest",
    "LumpSumComparison",
    "LumpSumOption",
    "LumpSumVsPensionRequest",
    "MonthlyPayout",
    "PensionIncomeDeductionRequest",
    "PensionPayoutOption",
    "PensionScenarioComparison",
    "PremiumBreakdown",
    "PremiumOption",
    "PrivatePensionComparison",
    "PrivatePensionComparisonRequest",
    "RegionalPremium",
    "RegionalPremiumRequest",
    "RequiredFund",
    "RequiredFundRequest",
    "RetirementIncomeTax",
    "RetirementIncomeTaxRequest",
    "SeparateTaxation",
    "StartAgeRequest",
    "VoluntaryComparison",
    "VoluntaryVsRegionalRequest",
    "WithdrawalSimulation",
    "WithdrawalSimulationRequest",
    "YearBalance",
    "YearlyExpense",
    "format_validation_error",
]
