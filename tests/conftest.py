import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from gedcom_matcher.config import get_config  # noqa: E402
from gedcom_matcher.core.session import ReconcileSession  # noqa: E402
from gedcom_matcher.loader import parse  # noqa: E402
from gedcom_matcher.logging import get_logger  # noqa: E402


def _dedent_lines(text: str) -> bytes:
    lines = [line.strip() for line in text.strip().splitlines()]
    return ("\n".join(line for line in lines if line) + "\n").encode("utf-8")


@pytest.fixture
def gedcom():
    """
    Build a GEDCOMTree from inline GEDCOM text. Leading indentation is
    ignored so records can be written nested for readability.
    """
    def _build(text: str, name: str = "inline"):
        return parse(_dedent_lines(text), "utf-8", name=name)

    return _build


@pytest.fixture
def session():
    return ReconcileSession(config=get_config(), logger=get_logger("gedcom_matcher.tests"))
