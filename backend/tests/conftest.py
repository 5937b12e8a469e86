import pytest

from lpbridge.domain.configuration import Configuration
from lpbridge.solvers.ortools.solver import OrToolsSolver


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch):
    """Keep process-level solver defaults out of the tests."""
    monkeypatch.delenv("LPBRIDGE_MAX_WALL_TIME_SECONDS", raising=False)


@pytest.fixture()
def solver() -> OrToolsSolver:
    """
    A fresh adapter for each test.
    This avoids shared state between tests.
    """
    return OrToolsSolver(Configuration())
