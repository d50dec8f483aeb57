import numpy as np
import pytest

from conjmin.optimize import Objective, Problem, as_objective
from conjmin.optimize.objective import check_objective_consistency


def sphere(x: np.ndarray) -> float:
    return float(x @ x)


def sphere_grad(x: np.ndarray) -> np.ndarray:
    return 2 * x


def test_problem_separate_and_combined_calls_agree():
    problem = Problem(fun=sphere, grad=sphere_grad, dim=2)
    x = np.array([1.0, -2.0])
    value, grad = problem.evaluate_with_gradient(x)
    assert value == problem.evaluate(x) == 5.0
    assert np.array_equal(grad, problem.gradient(x))


def test_problem_uses_fdf_when_given():
    calls = {"fdf": 0}

    def fdf(x):
        calls["fdf"] += 1
        return sphere(x), sphere_grad(x)

    problem = Problem(fun=sphere, grad=sphere_grad, fdf=fdf)
    problem.evaluate_with_gradient(np.ones(3))
    assert calls["fdf"] == 1


def test_problem_validation():
    with pytest.raises(TypeError):
        Problem(fun=sphere, grad=None)
    with pytest.raises(ValueError):
        Problem(fun=sphere, grad=sphere_grad, dim=0)


def test_objective_default_combined_call():
    class Shifted(Objective):
        def evaluate(self, x):
            return float(np.sum((x - 1.0) ** 2))

        def gradient(self, x):
            return 2 * (x - 1.0)

    value, grad = Shifted().evaluate_with_gradient(np.zeros(2))
    assert value == 2.0
    assert np.array_equal(grad, np.array([-2.0, -2.0]))


def test_as_objective_accepts_tuples_and_rejects_others():
    objective = as_objective((sphere, sphere_grad))
    assert isinstance(objective, Problem)
    assert as_objective(objective) is objective
    with pytest.raises(TypeError):
        as_objective(sphere)


def test_consistency_check_flags_mismatched_fdf():
    good = Problem(fun=sphere, grad=sphere_grad)
    check_objective_consistency(good, np.array([0.5, 0.5]))

    bad = Problem(
        fun=sphere,
        grad=sphere_grad,
        fdf=lambda x: (sphere(x) + 1.0, sphere_grad(x)),
    )
    with pytest.raises(ValueError):
        check_objective_consistency(bad, np.array([0.5, 0.5]))

    bad_grad = Problem(
        fun=sphere,
        grad=sphere_grad,
        fdf=lambda x: (sphere(x), -sphere_grad(x)),
    )
    with pytest.raises(ValueError):
        check_objective_consistency(bad_grad, np.array([0.5, 0.5]))
