"""Problem payloads and the exception-to-status mapping for the JSON API.

Every failure leaves the API as ``{"error", "status", "message"}`` so clients
can branch on ``error`` without parsing messages:

- ``bad_request``: the body is not a JSON object or the query is malformed.
- ``validation_error``: the payload fails its request model.
- ``domain_error``: inputs are well formed but outside a formula's domain.
- ``not_found``: unknown operation or a year without a constant table.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import BadRequest

from .services.calculation_service import UnknownOperationError
from .services.calculators import CalculationDomainError

_LOGGER = logging.getLogger(__name__)


def problem(error: str, status: HTTPStatus, message: str, **details: Any) -> tuple[Any, int]:
    """Return a Flask response tuple carrying a problem payload."""

    body: dict[str, Any] = {"error": error, "status": int(status), "message": message}
    body.update(details)
    return jsonify(body), int(status)


def register_error_handlers(app: Flask) -> None:
    """Translate calculation and lookup exceptions into problem payloads."""

    @app.errorhandler(BadRequest)
    def _bad_request(error: BadRequest):
        return problem(
            "bad_request", HTTPStatus.BAD_REQUEST, error.description or "Invalid request"
        )

    @app.errorhandler(CalculationDomainError)
    def _domain_error(error: CalculationDomainError):
        _LOGGER.debug("Rejected out-of-domain input: %s", error)
        return problem("domain_error", HTTPStatus.BAD_REQUEST, str(error))

    @app.errorhandler(ValueError)
    def _validation_error(error: ValueError):
        return problem("validation_error", HTTPStatus.BAD_REQUEST, str(error))

    @app.errorhandler(UnknownOperationError)
    def _unknown_operation(error: UnknownOperationError):
        return problem(
            "not_found", HTTPStatus.NOT_FOUND, str(error), operation=error.operation
        )

    @app.errorhandler(FileNotFoundError)
    def _missing_year(error: FileNotFoundError):
        _LOGGER.info("Constant table lookup failed: %s", error)
        return problem("not_found", HTTPStatus.NOT_FOUND, str(error))


__all__ = ["problem", "register_error_handlers"]
