"""Integration coverage for configuration metadata endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient

from pensionkr.backend.version import get_project_version


def test_meta_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/meta")

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {
        "version": get_project_version(),
        "supported_years": [2025, 2026],
        "default_year": 2026,
    }


def test_list_years_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/years")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["default_year"] == 2026
    years = {entry["year"]: entry for entry in payload["years"]}
    assert set(years) == {2025, 2026}
    assert years[2025]["status"] == "archived"
    assert years[2026]["status"] == "active"
    assert years[2026]["national_pension"]["a_value"] == 3_089_062


def test_single_year_endpoint_serialises_tables(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/2026")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    brackets = payload["tax"]["income_tax_brackets"]
    assert brackets[0] == {"upper": 14_000_000, "rate": 0.06, "deduction": 0}
    assert brackets[-1]["upper"] is None
    start_ages = payload["national_pension"]["start_ages"]
    assert start_ages[-1] == {"upper": None, "age": 65}
    assert payload["retirement_fund"]["default_life_expectancy"] == 90


def test_single_year_endpoint_unknown_year(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/1999")

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json()["error"] == "not_found"
