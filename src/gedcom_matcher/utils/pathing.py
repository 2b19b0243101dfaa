# src/gedcom_matcher/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union

# <project_root>/src/gedcom_matcher/utils/pathing.py
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """Checkout directory holding config/, mock_files/, src/ and tests/."""
    return _PROJECT_ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    """``resolve_project_path("config/gedcom_matcher.yml")`` -> absolute path."""
    return project_root() / Path(relative)


def mock_file_path(filename: Union[str, Path]) -> Path:
    """Sample GEDCOM files used by the tests, e.g. ``mock_file_path("old_1.ged")``."""
    return resolve_project_path(Path("mock_files") / filename)
