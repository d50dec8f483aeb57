"""
Example: minimizing a paraboloid step by step.

Drives a ConjugateGradientMinimizer one iteration at a time and prints the
iteration number, the current point and the function value after every
step, announcing the minimum on the converging iteration. The paraboloid is
centred on (1, 2) with scale factors (3, 4) and minimum 5.

Pass ``--verbose`` to also see the minimizer's own DEBUG log on stderr.
"""

import logging
import sys

import numpy as np

from conjmin import ConjugateGradientMinimizer, Paraboloid, Status, configure_logging


def run(params=(1.0, 2.0, 3.0, 4.0, 5.0), x0=(0.0, 0.0), objective=None) -> Status:
    objective = Paraboloid.from_params(params) if objective is None else objective
    minimizer = ConjugateGradientMinimizer(
        objective,
        np.asarray(x0, dtype=float),
        gradient_tol=1e-3,
        initial_step=0.01,
        line_search_tol=1e-4,
        max_iterations=100,
    )

    status = Status.CONTINUE
    while not status.is_terminal:
        status = minimizer.step()
        if status in (Status.LINE_SEARCH_FAILED, Status.NUMERICAL_ERROR):
            break
        if status is Status.CONVERGED:
            print("Minimum found at:")
        x, fun, _ = minimizer.current_state()
        print(f"{minimizer.iteration:5d} {x[0]:.5f} {x[1]:.5f} {fun:10.5f}")

    return status


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if "--verbose" in argv:
        configure_logging(level=logging.DEBUG)
    status = run()
    if status is not Status.CONVERGED:
        print(f"Minimization stopped: {status.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
