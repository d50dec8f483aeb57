"""Conjugate-gradient minimizer driver.

:class:`ConjugateGradientMinimizer` is an explicit state machine: it is
created in the ``INITIALIZED`` phase, each :meth:`~ConjugateGradientMinimizer.step`
performs one direction update, one line search and one gradient evaluation,
and the run ends in one of the absorbing phases ``CONVERGED``, ``MAX_ITER``,
``LINE_SEARCH_FAILED`` or ``NUMERICAL_ERROR``. :func:`minimize` runs a
minimizer to completion.

Example
-------
>>> import numpy as np
>>> from conjmin.optimize import minimize
>>> res = minimize(
...     (lambda x: float((x[0] - 1) ** 2 + 4 * (x[1] - 2) ** 2),
...      lambda x: np.array([2 * (x[0] - 1), 8 * (x[1] - 2)])),
...     np.zeros(2),
... )
>>> res.status
<Status.CONVERGED: 'converged'>
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import numpy as np

from ..diagnostics.debug_mode import check_objective_if_debug
from ..logging import get_logger
from .convergence import gradient_converged
from .core import (
    Array,
    LineSearchError,
    MinimizationResult,
    MinimizerConfig,
    NonDescentDirectionError,
    NonFiniteError,
    Phase,
    Status,
    TraceRecord,
)
from .direction import conjugate_direction
from .line_search import LineSearchResult, backtracking_armijo, wolfe_line_search
from .objective import Objective, as_objective
from .vector import as_gradient, as_point, freeze, is_finite, norm

logger = get_logger(__name__)

Callback = Callable[[TraceRecord], None]
DirectionHook = Callable[[int, Array, Array, bool], None]

_MESSAGES = {
    Status.CONVERGED: "Gradient tolerance satisfied.",
    Status.MAX_ITER: "Maximum iterations reached.",
    Status.CONTINUE: "Minimization in progress.",
}


class ConjugateGradientMinimizer:
    """
    Step-wise conjugate-gradient minimizer.

    Parameters
    ----------
    objective:
        An :class:`Objective` or a ``(fun, grad[, fdf])`` tuple.
    x0:
        Finite starting point.
    config:
        Run parameters; keyword ``overrides`` are applied on top.
    callback:
        Called with a :class:`TraceRecord` after every accepted step.
    direction_hook:
        Called as ``hook(iteration, grad, direction, restarted)`` before every
        line search. Hooks observe copies and cannot alter the run.
    """

    def __init__(
        self,
        objective,
        x0,
        config: Optional[MinimizerConfig] = None,
        callback: Optional[Callback] = None,
        direction_hook: Optional[DirectionHook] = None,
        **overrides,
    ) -> None:
        config = config if config is not None else MinimizerConfig()
        if overrides:
            config = config.replace(**overrides)
        self.config = config
        self.objective: Objective = as_objective(objective)
        self.callback = callback
        self.direction_hook = direction_hook

        x = as_point(x0, dim=self.objective.dim)
        self.dim = x.size
        self._restart_interval = (
            self.dim if config.restart_interval is None else config.restart_interval
        )
        check_objective_if_debug(self.objective, x)

        self._iteration = 0
        self._since_restart = 0
        self._step_length = config.initial_step
        self._prev_grad: Optional[Array] = None
        self._prev_direction: Optional[Array] = None
        self._trace: List[TraceRecord] = []
        self._phase = Phase.INITIALIZED
        self._status = Status.CONTINUE
        self._message = _MESSAGES[Status.CONTINUE]

        fun, grad = self.objective.evaluate_with_gradient(x)
        self.nfev = 1
        self.njev = 1
        grad = as_gradient(grad, self.dim)
        self._x = freeze(x)
        self._fun = float(fun)
        self._grad = freeze(grad.copy())
        if not (np.isfinite(self._fun) and is_finite(grad)):
            self._terminate(
                Status.NUMERICAL_ERROR,
                "Objective is not finite at the initial point.",
            )

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def x(self) -> Array:
        return self._x

    @property
    def fun(self) -> float:
        return self._fun

    @property
    def grad(self) -> Array:
        return self._grad

    @property
    def grad_norm(self) -> float:
        return norm(self._grad)

    @property
    def iteration(self) -> int:
        return self._iteration

    @property
    def status(self) -> Status:
        return self._status

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def trace(self) -> List[TraceRecord]:
        return list(self._trace)

    def current_state(self) -> Tuple[Array, float, Array]:
        """Return ``(x, fun, grad)`` at the current iterate."""
        return self._x, self._fun, self._grad

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------
    def restart(self) -> None:
        """Forget conjugacy history; the next step uses steepest descent."""
        self._prev_grad = None
        self._prev_direction = None
        self._since_restart = 0

    def step(self) -> Status:
        """Advance by one iteration and return the resulting status.

        Terminal phases are absorbing: once the run has ended, ``step`` does
        nothing and returns the terminal status again.
        """
        if self._status.is_terminal:
            return self._status
        self._phase = Phase.ITERATING
        cfg = self.config

        if gradient_converged(self._grad, cfg.gradient_tol):
            return self._terminate(Status.CONVERGED, _MESSAGES[Status.CONVERGED])

        force_restart = (
            self._restart_interval > 0 and self._since_restart >= self._restart_interval
        )
        direction, beta, restarted = conjugate_direction(
            self._grad,
            self._prev_grad,
            self._prev_direction,
            rule=cfg.beta_rule,
            force_restart=force_restart,
        )
        if restarted:
            self._since_restart = 0
        if self.direction_hook is not None:
            self.direction_hook(
                self._iteration, self._grad.copy(), direction.copy(), restarted
            )

        try:
            found = self._line_search(direction)
            grad_new = as_gradient(found.grad, self.dim)
            if not (np.isfinite(found.fun) and is_finite(grad_new)):
                raise NonFiniteError(
                    f"Objective is not finite at the accepted point (f={found.fun})."
                )
        except (NonDescentDirectionError, NonFiniteError) as exc:
            return self._terminate(Status.NUMERICAL_ERROR, str(exc))
        except LineSearchError as exc:
            return self._terminate(Status.LINE_SEARCH_FAILED, str(exc))

        self._step_length = found.alpha * norm(direction)
        self._prev_grad = self._grad
        self._prev_direction = direction
        self._since_restart += 1
        self._iteration += 1
        self._x = freeze(found.x)
        self._fun = found.fun
        self._grad = freeze(grad_new.copy())

        record = TraceRecord(
            iteration=self._iteration,
            x=self._x,
            fun=self._fun,
            grad_norm=self.grad_norm,
            step=self._step_length,
            restarted=restarted,
        )
        if cfg.trace:
            self._trace.append(record)
        if self.callback is not None:
            self.callback(record)
        logger.debug(
            "iter %d: f=%.6g |g|=%.3e step=%.3e beta=%.3g%s",
            self._iteration,
            self._fun,
            record.grad_norm,
            self._step_length,
            beta,
            " (restart)" if restarted else "",
        )

        if gradient_converged(self._grad, cfg.gradient_tol):
            return self._terminate(Status.CONVERGED, _MESSAGES[Status.CONVERGED])
        if self._iteration >= cfg.max_iterations:
            return self._terminate(Status.MAX_ITER, _MESSAGES[Status.MAX_ITER])
        return Status.CONTINUE

    def run(self) -> MinimizationResult:
        """Step until a terminal status is reached and return the result."""
        while not self.step().is_terminal:
            pass
        return self.result()

    def result(self) -> MinimizationResult:
        return MinimizationResult(
            x=self._x,
            fun=self._fun,
            grad_norm=self.grad_norm,
            nit=self._iteration,
            status=self._status,
            message=self._message,
            nfev=self.nfev,
            njev=self.njev,
            trace=self.trace,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _line_search(self, direction: Array) -> LineSearchResult:
        cfg = self.config
        if cfg.line_search == "wolfe":
            found = wolfe_line_search(
                self.objective,
                self._x,
                self._fun,
                self._grad,
                direction,
                step=self._step_length,
                c1=cfg.line_search_tol,
                c2=cfg.wolfe_c2,
                min_step=cfg.min_step,
            )
        else:
            found = backtracking_armijo(
                self.objective,
                self._x,
                self._fun,
                self._grad,
                direction,
                step=self._step_length,
                c1=cfg.line_search_tol,
                shrink=cfg.shrink,
                min_step=cfg.min_step,
                max_extrapolation=cfg.max_extrapolation,
            )
        self.nfev += found.nfev
        self.njev += found.njev
        return found

    def _terminate(self, status: Status, message: str) -> Status:
        self._status = status
        self._phase = Phase.from_status(status)
        self._message = message
        if status is Status.CONVERGED:
            logger.info(
                "Converged after %d iterations: f=%.6g |g|=%.3e",
                self._iteration,
                self._fun,
                self.grad_norm,
            )
        elif status is Status.MAX_ITER:
            logger.info(
                "Stopped after %d iterations without convergence (|g|=%.3e)",
                self._iteration,
                self.grad_norm,
            )
        else:
            logger.warning(
                "Minimization failed at iteration %d (%s): %s",
                self._iteration,
                status.value,
                message,
            )
        return status


def minimize(
    objective,
    x0,
    gradient_tol: Optional[float] = None,
    initial_step: Optional[float] = None,
    max_iterations: Optional[int] = None,
    callback: Optional[Callback] = None,
    direction_hook: Optional[DirectionHook] = None,
    config: Optional[MinimizerConfig] = None,
    **options,
) -> MinimizationResult:
    """Minimize ``objective`` from ``x0`` with Fletcher-Reeves conjugate gradients.

    ``gradient_tol``, ``initial_step`` and ``max_iterations`` default to the
    values of ``config`` (or of a default :class:`MinimizerConfig`); only the
    arguments given explicitly override it. ``options`` are further
    :class:`MinimizerConfig` fields, e.g. ``beta_rule="polak-ribiere"``,
    ``line_search="wolfe"`` or ``trace=True``.
    """
    if gradient_tol is not None:
        options["gradient_tol"] = gradient_tol
    if initial_step is not None:
        options["initial_step"] = initial_step
    if max_iterations is not None:
        options["max_iterations"] = max_iterations
    minimizer = ConjugateGradientMinimizer(
        objective,
        x0,
        config=config,
        callback=callback,
        direction_hook=direction_hook,
        **options,
    )
    return minimizer.run()


__all__ = ["ConjugateGradientMinimizer", "minimize"]
