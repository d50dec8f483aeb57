"""Line searches along a descent direction, following Nocedal & Wright.

Both searches take the current point together with its value and gradient,
so that no work is repeated, and return a :class:`LineSearchResult` carrying
the accepted point with its value and gradient. They raise
:class:`NonDescentDirectionError` for a direction with non-negative slope and
:class:`LineSearchError` when no acceptable step exists above ``min_step``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .core import (
    INITIAL_STEP,
    LINE_SEARCH_TOL,
    Array,
    LineSearchError,
    NonDescentDirectionError,
)
from .objective import Objective
from .vector import dot, norm


@dataclass(frozen=True)
class LineSearchResult:
    """Accepted step ``x_new = x + alpha * direction``."""

    alpha: float
    x: Array
    fun: float
    grad: Array
    nfev: int
    njev: int


def directional_derivative(grad: Array, direction: Array) -> float:
    """Return the slope of f along ``direction``, requiring strict descent."""
    slope = dot(grad, direction)
    if not np.isfinite(slope) or slope >= 0:
        raise NonDescentDirectionError(
            f"Search direction must be a descent direction (slope={slope:.3e})."
        )
    return slope


def _parabola_minimizer(
    f0: float, slope: float, alpha: float, f_alpha: float
) -> Optional[float]:
    """Minimizer of the parabola through (0, f0) with slope ``slope`` and (alpha, f_alpha).

    Returns None when the fitted curvature is not positive.
    """
    curvature = (f_alpha - f0 - slope * alpha) / (alpha * alpha)
    if not np.isfinite(curvature) or curvature <= 0:
        return None
    return -slope / (2.0 * curvature)


def backtracking_armijo(
    objective: Objective,
    x: Array,
    fx: float,
    grad: Array,
    direction: Array,
    step: float = INITIAL_STEP,
    c1: float = LINE_SEARCH_TOL,
    shrink: float = 0.5,
    min_step: float = 1e-12,
    max_extrapolation: float = 1e3,
    max_iter: int = 60,
) -> LineSearchResult:
    """Armijo backtracking with parabolic step refinement.

    The first trial point lies ``step`` away from ``x`` along ``direction``.
    Rejected trials shrink alpha to the minimizer of the parabola fitted
    through (0, f0, slope) and the trial value, kept within
    ``[0.1 * alpha, shrink * alpha]``. When the first trial is accepted the
    fitted minimizer (at most ``max_extrapolation`` times further, or twice as
    far when the fit is not convex) is tried once more and kept if it also
    satisfies sufficient decrease with a lower value. On a quadratic this
    recovers the exact line minimum.

    Only function values are used at trial points; the gradient is evaluated
    once, at the accepted point.
    """
    if not (0 < c1 < 1):
        raise ValueError("Armijo constant c1 must lie in (0, 1)")
    if not (0 < shrink < 1):
        raise ValueError("shrink must lie in (0, 1)")
    if step <= 0 or min_step <= 0:
        raise ValueError("step and min_step must be positive")
    slope = directional_derivative(grad, direction)
    d_norm = norm(direction)
    nfev = 0

    def phi(alpha: float) -> float:
        nonlocal nfev
        nfev += 1
        return float(objective.evaluate(x + alpha * direction))

    def sufficient(alpha: float, f_alpha: float) -> bool:
        return bool(np.isfinite(f_alpha)) and f_alpha <= fx + c1 * alpha * slope

    alpha = step / d_norm
    for attempt in range(max_iter):
        if alpha * d_norm < min_step:
            raise LineSearchError(
                f"Step underflow: {alpha * d_norm:.3e} < min_step={min_step:.3e}."
            )
        f_alpha = phi(alpha)
        if sufficient(alpha, f_alpha):
            break
        fitted = None
        if np.isfinite(f_alpha):
            fitted = _parabola_minimizer(fx, slope, alpha, f_alpha)
        if fitted is None:
            alpha *= shrink
        else:
            alpha = min(max(fitted, 0.1 * alpha), shrink * alpha)
    else:
        raise LineSearchError(f"No sufficient decrease after {max_iter} trials.")

    if attempt == 0:
        fitted = _parabola_minimizer(fx, slope, alpha, f_alpha)
        target = 2.0 * alpha if fitted is None else min(fitted, max_extrapolation * alpha)
        if target != alpha:
            f_target = phi(target)
            if sufficient(target, f_target) and f_target < f_alpha:
                alpha = target

    x_new = x + alpha * direction
    fun, grad_new = objective.evaluate_with_gradient(x_new)
    return LineSearchResult(
        alpha=float(alpha),
        x=x_new,
        fun=float(fun),
        grad=np.asarray(grad_new, dtype=float),
        nfev=nfev + 1,
        njev=1,
    )


def wolfe_line_search(
    objective: Objective,
    x: Array,
    fx: float,
    grad: Array,
    direction: Array,
    step: float = INITIAL_STEP,
    c1: float = LINE_SEARCH_TOL,
    c2: float = 0.1,
    min_step: float = 1e-12,
    max_iter: int = 40,
) -> LineSearchResult:
    """Strong Wolfe line search using bracketing and zoom.

    Every trial evaluates value and gradient together, so the gradient at
    the accepted point comes for free.
    """
    if not (0 < c1 < c2 < 1):
        raise ValueError("Require 0 < c1 < c2 < 1 for Wolfe conditions.")
    der0 = directional_derivative(grad, direction)
    d_norm = norm(direction)
    nfev = 0

    def phi(alpha: float) -> tuple[float, float, Array]:
        nonlocal nfev
        nfev += 1
        value, g = objective.evaluate_with_gradient(x + alpha * direction)
        g = np.asarray(g, dtype=float)
        return float(value), dot(g, direction), g

    def done(alpha: float, phi_alpha: float, g_alpha: Array) -> LineSearchResult:
        return LineSearchResult(
            alpha=float(alpha),
            x=x + alpha * direction,
            fun=phi_alpha,
            grad=g_alpha,
            nfev=nfev,
            njev=nfev,
        )

    alpha_prev, phi_prev, g_prev = 0.0, fx, grad
    alpha = step / d_norm
    amin = min_step / d_norm
    for iteration in range(max_iter):
        phi_alpha, der_alpha, g_alpha = phi(alpha)
        if (
            not np.isfinite(phi_alpha)
            or phi_alpha > fx + c1 * alpha * der0
            or (iteration > 0 and phi_alpha >= phi_prev)
        ):
            return done(
                *_zoom(
                    phi, alpha_prev, alpha, phi_prev, g_prev, fx, der0, c1, c2, amin
                )
            )
        if abs(der_alpha) <= -c2 * der0:
            return done(alpha, phi_alpha, g_alpha)
        if der_alpha >= 0:
            return done(
                *_zoom(
                    phi, alpha, alpha_prev, phi_alpha, g_alpha, fx, der0, c1, c2, amin
                )
            )
        alpha_prev, phi_prev, g_prev = alpha, phi_alpha, g_alpha
        alpha *= 2.0
    if alpha_prev == 0.0:
        raise LineSearchError("Wolfe search made no trial.")
    # Still expanding: the last trial satisfies sufficient decrease.
    return done(alpha_prev, phi_prev, g_prev)


def _zoom(
    phi: Callable[[float], tuple[float, float, Array]],
    alo: float,
    ahi: float,
    phi_alo: float,
    g_alo: Array,
    phi0: float,
    der0: float,
    c1: float,
    c2: float,
    min_alpha: float,
) -> tuple[float, float, Array]:
    """Zoom stage enforcing strong Wolfe conditions.

    ``alo`` always satisfies sufficient decrease; when the bracket collapses
    it is returned as long as it moved away from the start point.
    """
    for _ in range(32):
        alpha = 0.5 * (alo + ahi)
        phi_alpha, der_alpha, g_alpha = phi(alpha)
        if (
            not np.isfinite(phi_alpha)
            or phi_alpha > phi0 + c1 * alpha * der0
            or phi_alpha >= phi_alo
        ):
            ahi = alpha
        else:
            if abs(der_alpha) <= -c2 * der0:
                return alpha, phi_alpha, g_alpha
            if der_alpha * (ahi - alo) >= 0:
                ahi = alo
            alo, phi_alo, g_alo = alpha, phi_alpha, g_alpha
        if abs(ahi - alo) < min_alpha:
            break
    if alo > 0:
        return alo, phi_alo, g_alo
    raise LineSearchError("Wolfe zoom collapsed without sufficient decrease.")


__all__ = [
    "LineSearchResult",
    "backtracking_armijo",
    "directional_derivative",
    "wolfe_line_search",
]
