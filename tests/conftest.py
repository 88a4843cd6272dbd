"""
Pytest configuration and shared fixtures for vmt tests.

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

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

DEFAULT_ALGORITHM = _common.DEFAULT_ALGORITHM
make_values = _common.make_values
make_tree = _common.make_tree

from vmt.config.runtime import TreeConfig, set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def algo():
    """Provide the default digest algorithm for tree tests."""
    return DEFAULT_ALGORITHM


@pytest.fixture(params=[False, True], ids=["linear", "indexed"])
def indexed(request):
    """Run a test once per lookup mode."""
    return request.param


@pytest.fixture
def four_leaf_tree(indexed):
    """Provide a tree over ["one", "two", "three", "four"] in each lookup mode."""
    return make_tree(make_values(4), indexed=indexed)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep VMT_* environment variables and the default config out of tests."""
    for key in ("VMT_ALGORITHM", "VMT_USE_INDEX", "VMT_LOG_LEVEL", "VMT_LOG_FILE"):
        monkeypatch.delenv(key, raising=False)
    set_default_config(TreeConfig())
    yield
    set_default_config(None)


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
