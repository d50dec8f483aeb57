"""Checks for user-supplied objectives."""

from __future__ import annotations

import numpy as np

from ..optimize.objective import Objective, check_objective_consistency
from ..optimize.utils import approx_grad


def gradient_error(objective: Objective, x: np.ndarray, eps: float = 1e-6) -> float:
    """
    Max-norm difference between the analytic and a central-difference gradient.

    A large value usually means the gradient callback does not belong to
    the objective, e.g. a sign error or a missing factor.
    """
    x = np.asarray(x, dtype=float)
    analytic = np.asarray(objective.gradient(x), dtype=float)
    numeric = approx_grad(objective.evaluate, x, eps=eps)
    return float(np.max(np.abs(analytic - numeric)))


__all__ = ["check_objective_consistency", "gradient_error"]
