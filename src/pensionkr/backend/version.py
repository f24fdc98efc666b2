"""Report the running pensionkr version.

Installed distributions answer from package metadata. A source checkout that
was never installed (the test suite, ``passenger_wsgi`` on a bare deploy)
reads ``[project].version`` from the repository's ``pyproject.toml``.
"""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

DISTRIBUTION: Final = "pensionkr"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


def version_from_pyproject(pyproject_path: Path = PYPROJECT_PATH) -> str:
    try:
        with pyproject_path.open("rb") as handle:
            project = tomllib.load(handle).get("project", {})
    except FileNotFoundError as exc:
        raise RuntimeError(f"No project metadata at {pyproject_path}") from exc

    version = project.get("version")
    if not isinstance(version, str) or not version:
        raise RuntimeError(f"{pyproject_path.name} does not declare [project].version")
    return version


@lru_cache(maxsize=1)
def get_project_version() -> str:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return version_from_pyproject()


__all__ = ["DISTRIBUTION", "get_project_version", "version_from_pyproject"]
