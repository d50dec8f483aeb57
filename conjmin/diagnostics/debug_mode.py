"""Debug mode management for conjmin.

With debug mode on, every minimizer verifies at construction that the
objective's combined value-and-gradient call agrees with the separate calls
(see :func:`check_objective_if_debug`). The flag starts from the
``CONJMIN_DEBUG`` environment variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

import numpy as np

from ..logging import get_logger
from ..optimize.objective import Objective, check_objective_consistency

logger = get_logger(__name__)

_DEBUG_ENV_VAR = "CONJMIN_DEBUG"
_TRUTHY = ("1", "true", "yes", "on")

_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").strip().lower() in _TRUTHY


def is_debug_enabled() -> bool:
    """Return whether objective consistency checks run on minimizer construction."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily switch debug mode, restoring the previous setting on exit.

    Example
    -------
    >>> from conjmin.models import Paraboloid
    >>> from conjmin.optimize import minimize
    >>> with debug_context(True):
    ...     res = minimize(Paraboloid.from_params([1, 2, 3, 4, 5]), [0.0, 0.0])
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev


def check_objective_if_debug(objective: Objective, x: np.ndarray) -> bool:
    """
    Run :func:`check_objective_consistency` at ``x`` when debug mode is on.

    Returns True when the check ran (and passed), False when debug mode is
    off. A mismatch raises ``ValueError`` before any iteration starts.
    """
    if not _debug_enabled:
        return False
    logger.debug("Checking objective consistency at the starting point")
    check_objective_consistency(objective, x)
    return True


__all__ = [
    "check_objective_if_debug",
    "debug_context",
    "is_debug_enabled",
    "set_debug_enabled",
]
