"""
Pytest configuration and shared fixtures for proof of reserve tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fixtures import make_records, make_registry  # noqa: E402
from core.crypto.hashing import TagHashCache  # noqa: E402
from core.reserve import ReserveService  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def five_records():
    """The classic aaa..eee record set."""
    return [s.encode("utf-8") for s in ["aaa", "bbb", "ccc", "ddd", "eee"]]


@pytest.fixture
def records_factory():
    """Provide the make_records factory."""
    return make_records


@pytest.fixture
def scoped_cache():
    """A fresh tag cache, independent of the process-wide one."""
    return TagHashCache()


@pytest.fixture
def default_service():
    """ReserveService over the built-in eight accounts."""
    return ReserveService()


@pytest.fixture
def small_service():
    """ReserveService over three accounts (odd-sized tree)."""
    return ReserveService(make_registry([(3, 300), (1, 100), (2, 200)]))


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep POR_* variables from the developer's shell out of tests."""
    for key in (
        "POR_HOST", "POR_PORT", "PORT", "POR_LOG_LEVEL",
        "POR_LEAF_TAG", "POR_BRANCH_TAG", "POR_ACCOUNTS_FILE",
    ):
        monkeypatch.delenv(key, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
