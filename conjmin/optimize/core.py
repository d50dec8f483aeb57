"""Core types shared across the conjugate-gradient minimizer.

The driver, line searches and direction update all exchange the same small
vocabulary: a :class:`Status` for every step, a :class:`MinimizerConfig`
describing the run, :class:`TraceRecord` entries for diagnostics and the
final :class:`MinimizationResult`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

Array = np.ndarray

GRADIENT_TOL = 1e-3
INITIAL_STEP = 0.01
LINE_SEARCH_TOL = 1e-4
MAX_ITERATIONS = 100

BETA_RULES = ("fletcher-reeves", "polak-ribiere")
LINE_SEARCHES = ("armijo", "wolfe")


class Status(Enum):
    """Outcome of a single driver step."""

    CONTINUE = "continue"
    CONVERGED = "converged"
    MAX_ITER = "max_iter"
    LINE_SEARCH_FAILED = "line_search_failed"
    NUMERICAL_ERROR = "numerical_error"

    @property
    def is_terminal(self) -> bool:
        return self is not Status.CONTINUE


class Phase(Enum):
    """Lifecycle of a minimizer instance."""

    INITIALIZED = "initialized"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITER = "max_iter"
    LINE_SEARCH_FAILED = "line_search_failed"
    NUMERICAL_ERROR = "numerical_error"

    @classmethod
    def from_status(cls, status: Status) -> "Phase":
        if status is Status.CONTINUE:
            return cls.ITERATING
        return cls(status.value)


class MinimizationError(ArithmeticError):
    """Base class for failures raised inside a minimization step."""


class NonDescentDirectionError(MinimizationError):
    """Search direction has a non-negative (or non-finite) slope."""


class LineSearchError(MinimizationError):
    """No step length satisfying sufficient decrease was found."""


class NonFiniteError(MinimizationError):
    """Objective value or gradient evaluated to inf or NaN."""


@dataclass(frozen=True)
class MinimizerConfig:
    """
    Tunable parameters of a conjugate-gradient run.

    ``initial_step`` is a length in x-space: the first trial point of the
    first line search lies ``initial_step`` away from the starting point.
    ``line_search_tol`` is the Armijo constant c1. ``restart_interval=None``
    restarts the conjugacy every ``n`` iterations (``n`` the dimension);
    ``0`` never forces a restart.
    """

    gradient_tol: float = GRADIENT_TOL
    initial_step: float = INITIAL_STEP
    max_iterations: int = MAX_ITERATIONS
    line_search_tol: float = LINE_SEARCH_TOL
    wolfe_c2: float = 0.1
    shrink: float = 0.5
    min_step: float = 1e-12
    max_extrapolation: float = 1e3
    beta_rule: str = "fletcher-reeves"
    restart_interval: Optional[int] = None
    line_search: str = "armijo"
    trace: bool = False

    def __post_init__(self) -> None:
        """Validate MinimizerConfig invariants."""
        if self.gradient_tol < 0:
            raise ValueError(
                f"gradient_tol must be non-negative, got {self.gradient_tol}."
            )
        if self.initial_step <= 0:
            raise ValueError(
                f"initial_step must be positive, got {self.initial_step}."
            )
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be >= 1, got {self.max_iterations}."
            )
        if not (0 < self.line_search_tol < 1):
            raise ValueError("line_search_tol (Armijo c1) must lie in (0, 1).")
        wolfe = self.line_search == "wolfe"
        if wolfe and not (self.line_search_tol < self.wolfe_c2 < 1):
            raise ValueError(
                "Require line_search_tol < wolfe_c2 < 1 for Wolfe conditions."
            )
        if not (0 < self.shrink < 1):
            raise ValueError(f"shrink must lie in (0, 1), got {self.shrink}.")
        if self.min_step <= 0:
            raise ValueError(f"min_step must be positive, got {self.min_step}.")
        if self.max_extrapolation < 1:
            raise ValueError(
                f"max_extrapolation must be >= 1, got {self.max_extrapolation}."
            )
        if self.beta_rule not in BETA_RULES:
            raise ValueError(
                f"Unknown beta_rule {self.beta_rule!r}; expected one of {BETA_RULES}."
            )
        if self.restart_interval is not None and self.restart_interval < 0:
            raise ValueError(
                f"restart_interval must be non-negative, got {self.restart_interval}."
            )
        if self.line_search not in LINE_SEARCHES:
            raise ValueError(
                f"Unknown line_search {self.line_search!r}; "
                f"expected one of {LINE_SEARCHES}."
            )

    def replace(self, **changes) -> "MinimizerConfig":
        """Return a validated copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class TraceRecord:
    """Snapshot taken after an accepted step."""

    iteration: int
    x: Array
    fun: float
    grad_norm: float
    step: float
    restarted: bool


@dataclass
class MinimizationResult:
    """Result returned by :func:`minimize` and ``ConjugateGradientMinimizer.result``."""

    x: Array
    fun: float
    grad_norm: float
    nit: int
    status: Status
    message: str
    nfev: int
    njev: int
    trace: List[TraceRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is Status.CONVERGED


__all__ = [
    "Array",
    "BETA_RULES",
    "GRADIENT_TOL",
    "INITIAL_STEP",
    "LINE_SEARCHES",
    "LINE_SEARCH_TOL",
    "LineSearchError",
    "MAX_ITERATIONS",
    "MinimizationError",
    "MinimizationResult",
    "MinimizerConfig",
    "NonDescentDirectionError",
    "NonFiniteError",
    "Phase",
    "Status",
    "TraceRecord",
]
