"""Utilities for serialising calculation responses."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass
from typing import Any, Tuple

from flask import jsonify

from pensionkr.backend.app.services.calculation_service import CalculationOutcome

ResponseTuple = Tuple[Any, int]


def serialise_result(value: Any) -> Any:
    """Convert dataclasses or Pydantic models into JSON-ready structures."""

    if value is None:
        return None

    if hasattr(value, "model_dump"):
        return serialise_result(value.model_dump(mode="python", by_alias=True))

    if is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: serialise_result(getattr(value, field.name))
            for field in fields(value)
        }

    if isinstance(value, Mapping):
        return {key: serialise_result(item) for key, item in value.items()}

    if isinstance(value, Sequence) and not isinstance(value, str | bytes | bytearray):
        return [serialise_result(item) for item in value]

    return value


def build_calculation_response(outcome: CalculationOutcome) -> ResponseTuple:
    """Return a Flask JSON response for a calculation ``outcome``."""

    payload = {
        "operation": outcome.operation,
        "year": outcome.year,
        "result": serialise_result(outcome.result),
    }
    return jsonify(payload), 200
