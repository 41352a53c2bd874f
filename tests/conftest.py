from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Keep `import src...` and `import tests...` working when running `pytest` from the repo root.
REPO_ROOT = str(Path(__file__).resolve().parents[1])
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from src.state.settings import AppSettings  # noqa: E402
from tests.utils import make_settings  # noqa: E402


@pytest.fixture
def app_settings() -> AppSettings:
    return make_settings()
