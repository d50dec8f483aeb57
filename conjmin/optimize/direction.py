"""Conjugate-gradient search direction update with restarts."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .core import BETA_RULES, Array
from .vector import dot


def conjugacy_coefficient(
    grad: Array, prev_grad: Array, rule: str = "fletcher-reeves"
) -> float:
    """Return beta for the given rule.

    Fletcher-Reeves: <g_k, g_k> / <g_{k-1}, g_{k-1}>.
    Polak-Ribiere:   <g_k, g_k - g_{k-1}> / <g_{k-1}, g_{k-1}>.
    A vanishing previous gradient yields NaN, which callers treat as a restart.
    """
    if rule not in BETA_RULES:
        raise ValueError(f"Unknown beta rule {rule!r}; expected one of {BETA_RULES}.")
    denom = dot(prev_grad, prev_grad)
    if denom == 0.0:
        return float("nan")
    if rule == "fletcher-reeves":
        return dot(grad, grad) / denom
    return dot(grad, grad - prev_grad) / denom


def conjugate_direction(
    grad: Array,
    prev_grad: Optional[Array] = None,
    prev_direction: Optional[Array] = None,
    rule: str = "fletcher-reeves",
    force_restart: bool = False,
) -> tuple[Array, float, bool]:
    """Propose the next search direction.

    Returns ``(direction, beta, restarted)``. The direction is steepest
    descent when there is no history, when ``force_restart`` is set, when
    beta is negative or non-finite, or when the conjugate combination would
    not be a strict descent direction.
    """
    steepest = -np.asarray(grad, dtype=float)
    if force_restart or prev_grad is None or prev_direction is None:
        return steepest, 0.0, True
    beta = conjugacy_coefficient(grad, prev_grad, rule)
    if not np.isfinite(beta) or beta < 0:
        return steepest, 0.0, True
    direction = steepest + beta * prev_direction
    slope = dot(grad, direction)
    if not np.isfinite(slope) or slope >= 0:
        return steepest, 0.0, True
    return direction, beta, False


__all__ = ["conjugacy_coefficient", "conjugate_direction"]
