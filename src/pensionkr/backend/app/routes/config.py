"""Expose the yearly constant tables and manifest metadata.

Clients read bracket tables, limits and reference defaults from these
endpoints instead of duplicating rates.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, jsonify

from pensionkr.backend.app.http import problem
from pensionkr.backend.config.year_config import (
    available_years,
    load_manifest,
    load_year_configuration,
)
from pensionkr.backend.services.response_builder import serialise_result
from pensionkr.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    manifest = load_manifest()
    supported_years = list(manifest.supported_years)
    default_year = supported_years[-1] if supported_years else None
    return {
        "version": get_project_version(),
        "supported_years": supported_years,
        "default_year": default_year,
    }


def _serialise_year(year: int) -> dict[str, Any]:
    config = load_year_configuration(year)
    entry = load_manifest().get_entry(year)
    payload = serialise_result(config)
    payload["status"] = entry.status
    return payload


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    return jsonify(get_configuration_metadata()), 200


@blueprint.get("/years")
def list_years() -> tuple[Any, int]:
    """Return all configured years with their constant tables."""

    metadata = get_configuration_metadata()
    payload = {
        "years": [_serialise_year(year) for year in available_years()],
        "default_year": metadata["default_year"],
        "supported_years": metadata["supported_years"],
    }
    return jsonify(payload), 200


@blueprint.get("/<int:year>")
def get_year(year: int) -> tuple[Any, int]:
    """Return the constant table for a single year."""

    if year not in available_years():
        return problem(
            "not_found",
            HTTPStatus.NOT_FOUND,
            f"Configuration for year {year} not declared in manifest",
        )

    return jsonify(_serialise_year(year)), 200
