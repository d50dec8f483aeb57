"""Axis-aligned paraboloid test objective."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from conjmin.optimize.objective import Objective
from conjmin.optimize.vector import freeze


@dataclass(frozen=True, init=False, eq=False)
class Paraboloid(Objective):
    """
    Paraboloid centred on ``center`` with per-axis ``scale`` and ``minimum``:

        f(x) = sum_i scale_i * (x_i - center_i)**2 + minimum

    with gradient ``2 * scale * (x - center)``. For positive scales the unique
    minimizer is ``center`` with value ``minimum``.

    Parameters are stored as read-only arrays, so one instance can be shared
    by any number of concurrent runs.

    Example
    -------
    >>> import numpy as np
    >>> bowl = Paraboloid(center=(1.0, 2.0), scale=(3.0, 4.0), minimum=5.0)
    >>> bowl.evaluate(np.array([1.0, 2.0]))
    5.0
    """

    center: np.ndarray
    scale: np.ndarray
    minimum: float

    def __init__(
        self,
        center: Sequence[float],
        scale: Sequence[float],
        minimum: float = 0.0,
    ) -> None:
        center_arr = np.array(center, dtype=float).reshape(-1)
        scale_arr = np.array(scale, dtype=float).reshape(-1)
        if center_arr.size == 0:
            raise ValueError("center must have at least one coordinate.")
        if center_arr.shape != scale_arr.shape:
            raise ValueError(
                f"center and scale must have the same length, got "
                f"{center_arr.size} and {scale_arr.size}."
            )
        if not (np.all(np.isfinite(center_arr)) and np.all(np.isfinite(scale_arr))):
            raise ValueError("center and scale must be finite.")
        object.__setattr__(self, "center", freeze(center_arr))
        object.__setattr__(self, "scale", freeze(scale_arr))
        object.__setattr__(self, "minimum", float(minimum))

    @classmethod
    def from_params(cls, params: Sequence[float]) -> "Paraboloid":
        """Build the two-dimensional paraboloid from ``(cx, cy, a, b, m)``."""
        p = np.asarray(params, dtype=float).reshape(-1)
        if p.size != 5:
            raise ValueError(f"expected 5 parameters (cx, cy, a, b, m), got {p.size}.")
        return cls(center=p[0:2], scale=p[2:4], minimum=p[4])

    @property
    def dim(self) -> int:
        return self.center.size

    def evaluate(self, x: np.ndarray) -> float:
        shifted = np.asarray(x, dtype=float) - self.center
        return float(np.dot(self.scale, shifted * shifted) + self.minimum)

    def gradient(self, x: np.ndarray) -> np.ndarray:
        return 2.0 * self.scale * (np.asarray(x, dtype=float) - self.center)

    def evaluate_with_gradient(self, x: np.ndarray) -> Tuple[float, np.ndarray]:
        shifted = np.asarray(x, dtype=float) - self.center
        value = float(np.dot(self.scale, shifted * shifted) + self.minimum)
        return value, 2.0 * self.scale * shifted


__all__ = ["Paraboloid"]
