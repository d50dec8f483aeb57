"""conjmin - conjugate-gradient minimization of smooth objectives."""

__version__ = "0.1.0"

from .diagnostics import (
    check_objective_consistency,
    debug_context,
    gradient_error,
    is_debug_enabled,
    set_debug_enabled,
)
from .logging import configure_logging, get_logger, set_log_level
from .models import Paraboloid
from .optimize import (
    ConjugateGradientMinimizer,
    LineSearchError,
    MinimizationError,
    MinimizationResult,
    MinimizerConfig,
    NonDescentDirectionError,
    NonFiniteError,
    Objective,
    Phase,
    Problem,
    Status,
    TraceRecord,
    backtracking_armijo,
    check_gradient,
    conjugate_direction,
    gradient_converged,
    minimize,
    wolfe_line_search,
)

__all__ = [
    "__version__",
    # Optimization
    "ConjugateGradientMinimizer",
    "LineSearchError",
    "MinimizationError",
    "MinimizationResult",
    "MinimizerConfig",
    "NonDescentDirectionError",
    "NonFiniteError",
    "Objective",
    "Phase",
    "Problem",
    "Status",
    "TraceRecord",
    "backtracking_armijo",
    "check_gradient",
    "conjugate_direction",
    "gradient_converged",
    "minimize",
    "wolfe_line_search",
    # Models
    "Paraboloid",
    # Diagnostics
    "check_objective_consistency",
    "debug_context",
    "gradient_error",
    "is_debug_enabled",
    "set_debug_enabled",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
]
