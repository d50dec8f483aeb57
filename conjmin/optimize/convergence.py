"""Gradient-norm convergence test."""

from __future__ import annotations

from .core import GRADIENT_TOL, Array, Status
from .vector import norm


def gradient_converged(grad: Array, tol: float = GRADIENT_TOL) -> bool:
    """Return True if the Euclidean norm of ``grad`` is below ``tol``."""
    if tol < 0:
        raise ValueError(f"tol must be non-negative, got {tol}.")
    return norm(grad) < tol


def check_gradient(grad: Array, tol: float = GRADIENT_TOL) -> Status:
    """Status-valued form of :func:`gradient_converged`."""
    return Status.CONVERGED if gradient_converged(grad, tol) else Status.CONTINUE


__all__ = ["check_gradient", "gradient_converged"]
