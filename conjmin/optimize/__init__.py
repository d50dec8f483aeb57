"""Conjugate-gradient minimization of smooth objectives.

Example
-------
>>> import numpy as np
>>> from conjmin.optimize import Problem, minimize
>>> def bowl(x):
...     return 3 * (x[0] - 1) ** 2 + 4 * (x[1] - 2) ** 2 + 5
>>> def bowl_grad(x):
...     return np.array([6 * (x[0] - 1), 8 * (x[1] - 2)])
>>> res = minimize(Problem(fun=bowl, grad=bowl_grad, dim=2), np.zeros(2))
>>> round(res.fun, 6)
5.0
"""

from .convergence import check_gradient, gradient_converged
from .core import (
    GRADIENT_TOL,
    INITIAL_STEP,
    LINE_SEARCH_TOL,
    MAX_ITERATIONS,
    LineSearchError,
    MinimizationError,
    MinimizationResult,
    MinimizerConfig,
    NonDescentDirectionError,
    NonFiniteError,
    Phase,
    Status,
    TraceRecord,
)
from .direction import conjugacy_coefficient, conjugate_direction
from .line_search import (
    LineSearchResult,
    backtracking_armijo,
    directional_derivative,
    wolfe_line_search,
)
from .minimizer import ConjugateGradientMinimizer, minimize
from .objective import Objective, Problem, as_objective
from .utils import approx_grad
from .vector import as_point

__all__ = [
    "ConjugateGradientMinimizer",
    "GRADIENT_TOL",
    "INITIAL_STEP",
    "LINE_SEARCH_TOL",
    "LineSearchError",
    "LineSearchResult",
    "MAX_ITERATIONS",
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
    "approx_grad",
    "as_objective",
    "as_point",
    "backtracking_armijo",
    "check_gradient",
    "conjugacy_coefficient",
    "conjugate_direction",
    "directional_derivative",
    "gradient_converged",
    "minimize",
    "wolfe_line_search",
]
