"""Objective interface consumed by the minimizer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .core import Array

ValueFn = Callable[[Array], float]
GradientFn = Callable[[Array], Array]
ValueGradientFn = Callable[[Array], Tuple[float, Array]]


class Objective(ABC):
    """
    A smooth real-valued function together with its analytic gradient.

    Implementations must be pure functions of the point and of their own
    (read-only) parameters: the minimizer may evaluate the same point more
    than once, and one instance may be shared by independent runs.

    ``evaluate_with_gradient`` exists so that subclasses can share work
    between the value and the gradient. Overrides must return exactly what
    the separate calls return.
    """

    dim: Optional[int] = None

    @abstractmethod
    def evaluate(self, x: Array) -> float:
        """Return f(x)."""

    @abstractmethod
    def gradient(self, x: Array) -> Array:
        """Return the gradient of f at x."""

    def evaluate_with_gradient(self, x: Array) -> Tuple[float, Array]:
        return self.evaluate(x), self.gradient(x)


@dataclass(frozen=True)
class Problem(Objective):
    """Objective built from plain callables.

    Example
    -------
    >>> import numpy as np
    >>> problem = Problem(fun=lambda x: float(x @ x), grad=lambda x: 2 * x)
    >>> problem.evaluate_with_gradient(np.array([1.0, 2.0]))[0]
    5.0
    """

    fun: ValueFn
    grad: GradientFn
    fdf: Optional[ValueGradientFn] = None
    dim: Optional[int] = None

    def __post_init__(self) -> None:
        if not callable(self.fun) or not callable(self.grad):
            raise TypeError("fun and grad must be callable.")
        if self.fdf is not None and not callable(self.fdf):
            raise TypeError("fdf must be callable or None.")
        if self.dim is not None and self.dim < 1:
            raise ValueError(f"dim must be >= 1, got {self.dim}.")

    def evaluate(self, x: Array) -> float:
        return float(self.fun(x))

    def gradient(self, x: Array) -> Array:
        return np.asarray(self.grad(x), dtype=float)

    def evaluate_with_gradient(self, x: Array) -> Tuple[float, Array]:
        if self.fdf is None:
            return self.evaluate(x), self.gradient(x)
        value, grad = self.fdf(x)
        return float(value), np.asarray(grad, dtype=float)


def check_objective_consistency(
    objective: Objective,
    x: Array,
    rtol: float = 1e-10,
    atol: float = 1e-12,
) -> None:
    """
    Assert that ``evaluate_with_gradient`` matches the separate calls at ``x``.

    Raises
    ------
    ValueError
        If the combined value or gradient differs from ``evaluate`` or
        ``gradient`` beyond the tolerances.
    """
    value = objective.evaluate(x)
    grad = np.asarray(objective.gradient(x), dtype=float)
    fdf_value, fdf_grad = objective.evaluate_with_gradient(x)
    fdf_grad = np.asarray(fdf_grad, dtype=float)

    if not np.allclose(value, fdf_value, rtol=rtol, atol=atol, equal_nan=True):
        raise ValueError(
            f"evaluate_with_gradient value {fdf_value!r} differs from evaluate {value!r}."
        )
    if grad.shape != fdf_grad.shape:
        raise ValueError(
            f"evaluate_with_gradient gradient has shape {fdf_grad.shape}, "
            f"gradient has shape {grad.shape}."
        )
    if not np.allclose(grad, fdf_grad, rtol=rtol, atol=atol, equal_nan=True):
        diff = float(np.max(np.abs(grad - fdf_grad)))
        raise ValueError(
            f"evaluate_with_gradient gradient differs from gradient (max abs diff {diff:.3e})."
        )


def as_objective(objective) -> Objective:
    """Accept an :class:`Objective` or a ``(fun, grad)`` / ``(fun, grad, fdf)`` tuple."""
    if isinstance(objective, Objective):
        return objective
    if isinstance(objective, tuple) and len(objective) in (2, 3):
        return Problem(*objective)
    raise TypeError(
        "objective must be an Objective or a (fun, grad[, fdf]) tuple, "
        f"got {type(objective).__name__}."
    )


__all__ = [
    "GradientFn",
    "Objective",
    "Problem",
    "ValueFn",
    "ValueGradientFn",
    "as_objective",
    "check_objective_consistency",
]
