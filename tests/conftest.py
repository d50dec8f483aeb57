"""Pytest configuration and shared fixtures for conjmin tests.

This module provides:
- A deterministic numpy RNG fixture
- Reset of global debug mode between tests
"""

import os

import numpy as np
import pytest

from conjmin.diagnostics import set_debug_enabled


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def reset_debug_mode():
    """Run every test with debug mode off and restore it afterwards."""
    set_debug_enabled(False)
    yield
    set_debug_enabled(False)
