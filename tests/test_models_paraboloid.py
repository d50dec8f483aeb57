import numpy as np
import pytest

from conjmin.models import Paraboloid
from conjmin.optimize.objective import check_objective_consistency


def test_from_params_matches_closed_form():
    bowl = Paraboloid.from_params([1.0, 2.0, 3.0, 4.0, 5.0])
    x = np.array([0.0, 0.0])
    assert bowl.dim == 2
    assert bowl.evaluate(x) == 3.0 * 1.0 + 4.0 * 4.0 + 5.0
    assert np.array_equal(bowl.gradient(x), np.array([-6.0, -16.0]))
    assert bowl.evaluate(np.array([1.0, 2.0])) == 5.0


def test_combined_call_is_exactly_consistent(rng: np.random.Generator):
    bowl = Paraboloid(center=rng.normal(size=4), scale=rng.uniform(0.1, 5, 4), minimum=-2.0)
    for _ in range(10):
        x = rng.normal(size=4) * 10
        value, grad = bowl.evaluate_with_gradient(x)
        assert value == bowl.evaluate(x)
        assert np.array_equal(grad, bowl.gradient(x))
    check_objective_consistency(bowl, np.zeros(4), rtol=0.0, atol=0.0)


def test_parameters_are_read_only():
    center = np.array([1.0, 2.0])
    bowl = Paraboloid(center=center, scale=[1.0, 1.0])
    center[0] = 100.0
    assert bowl.center[0] == 1.0
    with pytest.raises(ValueError):
        bowl.center[0] = 5.0
    with pytest.raises(AttributeError):
        bowl.minimum = 1.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"center": [], "scale": []},
        {"center": [1.0, 2.0], "scale": [1.0]},
        {"center": [np.nan], "scale": [1.0]},
    ],
)
def test_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        Paraboloid(**kwargs)


def test_from_params_requires_five_values():
    with pytest.raises(ValueError):
        Paraboloid.from_params([1.0, 2.0, 3.0])
