import pytest
import numpy as np

from rnnlayer import mathutil


def test_seed_makes_draws_repeatable():
    mathutil.seed(7)
    a = mathutil.uniform(-1.0, 1.0, (4, 3))
    mathutil.seed(7)
    b = mathutil.uniform(-1.0, 1.0, (4, 3))
    assert np.array_equal(a, b)


def test_rand_in_range():
    rng = np.random.default_rng(0)
    values = [mathutil.rand(2.0, 3.0, rng=rng) for _ in range(200)]
    assert all(2.0 <= v <= 3.0 for v in values)


@pytest.mark.parametrize("name, x, expected, expected_grad", [
    ("sigmoid", 0.0, 0.5, 0.25),
    ("tanh", 0.0, 0.0, 1.0),
    ("relu", -1.0, 0.0, 0.0),
    ("relu", 2.0, 2.0, 1.0),
    ("identity", 3.0, 3.0, 1.0),
])
def test_activations(name, x, expected, expected_grad):
    fn, grad = mathutil.get_activation(name)
    arr = np.array([x], dtype=np.float32)
    assert np.allclose(fn(arr), [expected])
    assert np.allclose(grad(arr), [expected_grad])


def test_unknown_activation():
    with pytest.raises(ValueError):
        mathutil.get_activation("swish")
