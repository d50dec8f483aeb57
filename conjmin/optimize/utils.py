"""Finite-difference helpers.

Pure NumPy; used to validate analytic gradients, never inside the
minimization loop.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

Array = np.ndarray
ValueFn = Callable[[Array], float]


def approx_grad(
    fun: ValueFn, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Central-difference gradient of ``fun`` at ``x``.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation applied to one coordinate at a time.
    return_evals:
        Also return the number of function evaluations (``2 * x.size``).
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).reshape(-1)
    offsets = np.eye(x.size) * eps
    diffs = [float(fun(x + e)) - float(fun(x - e)) for e in offsets]
    grad = np.asarray(diffs, dtype=float) / (2.0 * eps)
    if return_evals:
        return grad, 2 * x.size
    return grad


__all__ = ["Array", "ValueFn", "approx_grad"]
