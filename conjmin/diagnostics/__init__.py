"""Diagnostics and debugging utilities for conjmin."""

from .core import check_objective_consistency, gradient_error
from .debug_mode import (
    check_objective_if_debug,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "check_objective_consistency",
    "check_objective_if_debug",
    "gradient_error",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
