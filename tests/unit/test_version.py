"""Unit coverage for the project version helper."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

from pensionkr.backend.version import get_project_version, version_from_pyproject


@pytest.fixture(autouse=True)
def _fresh_version_cache():
    get_project_version.cache_clear()  # type: ignore[attr-defined]
    yield
    get_project_version.cache_clear()  # type: ignore[attr-defined]


def _package_missing(_: str) -> str:
    raise metadata.PackageNotFoundError


def test_installed_metadata_wins(monkeypatch) -> None:
    monkeypatch.setattr(metadata, "version", lambda distribution: "9.9.9")

    assert get_project_version() == "9.9.9"


def test_checkout_falls_back_to_pyproject(monkeypatch) -> None:
    monkeypatch.setattr(metadata, "version", _package_missing)

    assert get_project_version() == "0.4.0"


def test_pyproject_without_version_is_rejected(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "pensionkr"\n', encoding="utf-8")

    with pytest.raises(RuntimeError, match=r"\[project\]\.version"):
        version_from_pyproject(pyproject)


def test_missing_pyproject_is_reported(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError, match="No project metadata"):
        version_from_pyproject(tmp_path / "pyproject.toml")
