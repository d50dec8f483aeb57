"""Point and gradient helpers.

Points are plain 1-D float64 arrays. Arrays stored by the minimizer are
frozen with :func:`freeze` so that values handed to callers cannot be
modified behind the minimizer's back.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .core import Array


def as_point(x, dim: Optional[int] = None) -> Array:
    """Return a fresh 1-D float64 copy of ``x``.

    Raises ``ValueError`` for empty or multi-dimensional input, for a
    dimension mismatch against ``dim`` and for non-finite coordinates.
    """
    point = np.array(x, dtype=float, copy=True)
    if point.ndim == 0:
        point = point.reshape(1)
    if point.ndim != 1:
        raise ValueError(f"point must be 1D, got shape {point.shape}.")
    if point.size == 0:
        raise ValueError("point must have at least one coordinate.")
    if dim is not None and point.size != dim:
        raise ValueError(f"point has dimension {point.size}, expected {dim}.")
    if not np.all(np.isfinite(point)):
        raise ValueError("point must contain only finite values.")
    return point


def as_gradient(g, dim: int) -> Array:
    """Coerce an objective's gradient output, checking its shape.

    Non-finite entries are allowed here; the caller decides how to treat them.
    """
    grad = np.asarray(g, dtype=float).reshape(-1)
    if grad.size != dim:
        raise ValueError(
            f"gradient has {grad.size} components, expected {dim}."
        )
    return grad


def freeze(x: Array) -> Array:
    """Mark ``x`` read-only and return it."""
    x.flags.writeable = False
    return x


def dot(a: Array, b: Array) -> float:
    return float(np.dot(a, b))


def norm(a: Array) -> float:
    """Euclidean norm."""
    return float(np.linalg.norm(a))


def is_finite(a) -> bool:
    return bool(np.all(np.isfinite(a)))


__all__ = ["as_gradient", "as_point", "dot", "freeze", "is_finite", "norm"]
