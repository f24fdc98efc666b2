"""REST endpoints for the retirement calculators."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from pensionkr.backend.services import (
    available_operations,
    build_calculation_response,
    parse_calculation_payload,
    run_calculation,
)

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.get("/calculations")
def list_calculations() -> tuple[Any, int]:
    """Return the identifiers of every available calculation."""

    return jsonify({"operations": list(available_operations())}), 200


@blueprint.post("/calculations/<path:operation>")
def create_calculation(operation: str) -> tuple[Any, int]:
    """Run ``operation`` with the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    outcome = run_calculation(operation, payload)

    return build_calculation_response(outcome)
