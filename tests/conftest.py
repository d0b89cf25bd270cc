import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'depvendor'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from depvendor.core.stdlib_logging import reset_logging_for_tests
from helpers.workspace import Workspace


@pytest.fixture(autouse=True)
def _isolate_depvendor_env(monkeypatch: pytest.MonkeyPatch):
    """Keep DEPVENDOR_* variables from the developer shell out of tests."""
    for key in list(os.environ):
        if key.startswith("DEPVENDOR_"):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_logging_for_tests()


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """A project root with a repositories.yaml builder and source trees."""
    return Workspace(tmp_path)
