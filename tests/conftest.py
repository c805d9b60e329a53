"""Root test configuration: session-level cleanup of build output"""

import shutil
from pathlib import Path

import pytest


_PROJECT_ROOT = Path(__file__).parent.parent

# Default Settings.output_dir, written by `semdoc build` run from the repo root.
_OUTPUT_DIRS = ["dist"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_output():
    """Remove parsed JSON output left in the project root by the session."""
    yield
    for name in _OUTPUT_DIRS:
        p = _PROJECT_ROOT / name
        if p.is_dir():
            shutil.rmtree(p)
