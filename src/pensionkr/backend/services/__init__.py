"""Service-layer helpers for the pensionkr backend."""

from pensionkr.backend.app.services.calculation_service import (
    UnknownOperationError,
    available_operations,
    run_calculation,
)

from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response, serialise_result

__all__ = [
    "UnknownOperationError",
    "available_operations",
    "build_calculation_response",
    "parse_calculation_payload",
    "run_calculation",
    "serialise_result",
]
