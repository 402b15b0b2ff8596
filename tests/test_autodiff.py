import logging

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dualgrad import function as dgf
from dualgrad.autodiff import (
    autodiff,
    check_grad,
    localcontext,
    make_active_dual,
)
from dualgrad.linalg import DimensionMismatch

finite = st.floats(min_value=-2.0, max_value=2.0, allow_nan=False, allow_infinity=False)


def _central_difference(f, x, h=1e-5):
    return (f(x + h) - f(x - h)) / (2 * h)


def test_diff():
    f = lambda x: dgf.sin(x) * dgf.cos(x)  # noqa: E731
    assert autodiff.diff_with_value(f)(0.0) == (0.0, 1.0)
    assert autodiff.diff(f)(0.0) == 1.0

    f = lambda x: dgf.exp(dgf.sin(x))  # noqa: E731
    assert autodiff.diff_with_value(f)(0.0) == (1.0, 1.0)

    deriv = autodiff.diff(lambda x: (x + dgf.sin(x**2)) / x)
    assert pytest.approx(deriv(1.4), 1e-5) == -1.23095


def test_grad():
    value, g = autodiff.grad_with_value(lambda x: x[0] ** 2 * x[1])([2.0, 3.0])
    assert value == 12.0
    assert g.tolist() == [12.0, 4.0]

    g = autodiff.grad(lambda x: dgf.pow(x[0], x[1]))([4.5, -2.2])
    assert pytest.approx(g.tolist(), 1e-5) == [-0.0178707, 0.0549797]

    g = autodiff.grad(lambda x: dgf.exp(x[1] / x[0]) + 2)(np.array([1.2, 3.5]))
    assert pytest.approx(g.tolist(), 1e-5) == [-44.9157, 15.3997]


def test_jacobian():
    f = lambda x: (x[0] + x[1], x[0] * x[1])  # noqa: E731
    values, j = autodiff.jacobian_with_value(f)([2.0, 3.0])
    assert values.tolist() == [5.0, 6.0]
    assert j.tolist() == [[1.0, 1.0], [3.0, 2.0]]

    j = autodiff.jacobian(lambda x: (dgf.sin(x[0] * x[1]), x[0] ** 2 - dgf.cos(x[1])))
    matrix = j([2, 3])
    assert pytest.approx(matrix[0].tolist(), 1e-5) == [2.88051, 1.92034]
    assert pytest.approx(matrix[1].tolist(), 1e-5) == [4.00000, 0.14112]


def test_jacobian_t():
    f = lambda x: (x[0] * x[1] * x[2], dgf.sin(x[0]) + x[2])  # noqa: E731
    x = [0.5, -1.5, 2.0]
    values, jt = autodiff.jacobian_t_with_value(f)(x)
    assert jt.shape == (3, 2)
    assert np.array_equal(values, autodiff.jacobian_with_value(f)(x)[0])
    assert np.array_equal(jt, autodiff.jacobian(f)(x).T)
    assert np.array_equal(autodiff.jacobian_t(f)(x), jt)


def test_array_expressions():
    a = np.array([[1.0, 2.0], [3.0, 4.0]])
    j = autodiff.jacobian(lambda x: a @ x)(np.ones(2))
    assert np.array_equal(j, a)

    g = autodiff.grad(lambda x: np.sum(x**2))([1.0, 2.0, 3.0])
    assert g.tolist() == [2.0, 4.0, 6.0]


def test_constant_functions():
    assert autodiff.diff_with_value(lambda x: 3.0)(1.0) == (3.0, 0.0)
    assert autodiff.grad(lambda x: 2)([1.0, 2.0]).tolist() == [0.0, 0.0]

    values, j = autodiff.jacobian_with_value(lambda x: (x[0], 1.0))([4.0, 5.0])
    assert values.tolist() == [4.0, 1.0]
    assert j.tolist() == [[1.0, 0.0], [0.0, 0.0]]

    values, j = autodiff.jacobian_with_value(lambda x: ())([4.0, 5.0])
    assert values.shape == (0,) and j.shape == (0, 2)


def test_dimension_mismatch():
    stray = make_active_dual(1.0, 3, 0)

    with pytest.raises(DimensionMismatch):
        autodiff.grad(lambda x: x[0] + stray)([1.0, 2.0])

    with pytest.raises(DimensionMismatch):
        autodiff.jacobian(lambda x: (x[0], stray))([1.0, 2.0])

    with pytest.raises(DimensionMismatch):
        autodiff.grad(lambda x: stray * 2.0)([1.0, 2.0])

    with pytest.raises(DimensionMismatch):
        autodiff.diff_with_value(lambda x: stray)(1.0)


def test_empty():
    with pytest.raises(ValueError):
        autodiff.grad(lambda x: 1.0)([])

    with localcontext(allow_empty=True):
        value, g = autodiff.grad_with_value(lambda x: 5.0)([])
        assert value == 5.0 and g.shape == (0,)

        values, j = autodiff.jacobian_with_value(lambda x: (1.0, 2.0))([])
        assert values.tolist() == [1.0, 2.0] and j.shape == (2, 0)


def test_floating_point_policy():
    value, deriv = autodiff.diff_with_value(lambda x: 1 / x)(0.0)
    assert value == np.inf and deriv == -np.inf

    value, deriv = autodiff.diff_with_value(dgf.log)(0.0)
    assert value == -np.inf and deriv == np.inf

    with localcontext(floating="raise"):
        with pytest.raises(FloatingPointError):
            autodiff.diff(lambda x: 1 / x)(0.0)

    with localcontext(floating="warn"):
        with pytest.warns(RuntimeWarning):
            assert autodiff.diff(lambda x: 1 / x)(0.0) == -np.inf


def test_wrapper_metadata():
    def energy(x):
        return x[0] * x[1]

    assert autodiff.grad(energy).__name__ == "energy"
    assert autodiff.jacobian_t_with_value(energy).__wrapped__ is energy


def test_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="dualgrad.autodiff.autodiff")
    autodiff.jacobian(lambda x: (x[0], x[1], x[0] * x[1]))([1.0, 2.0])
    assert "seeded 2 variables" in caplog.text
    assert "got 3 outputs" in caplog.text


def test_check_grad():
    assert check_grad(lambda x: dgf.exp(x[0]) * dgf.sin(x[1]), [0.3, 1.2])
    assert check_grad(lambda x: x[0] ** 3 / (1 + x[1] ** 2), np.array([1.5, -0.5]))
    assert not check_grad(lambda x: float(x[0]) ** 2 + x[1], [1.0, 2.0])


@given(finite)
@settings(max_examples=50)
def test_diff_matches_finite_differences(x):
    def f(x):
        return x * dgf.sin(x) + dgf.exp(x / 3) - 1 / (2 + x * x)

    expected = _central_difference(f, x)
    assert autodiff.diff(f)(x) == pytest.approx(expected, rel=1e-6, abs=1e-6)


@given(st.lists(finite, min_size=3, max_size=3))
@settings(max_examples=50)
def test_grad_matches_finite_differences(x):
    def f(x):
        return x[0] * x[1] + dgf.sin(x[2]) * dgf.exp(x[0]) - x[1] ** 2 / (1 + x[2] ** 2)

    g = autodiff.grad(f)(x)

    for i in range(3):

        def partial(t, i=i):
            y = np.array(x, dtype=np.float64)
            y[i] = t
            return f(y)

        expected = _central_difference(partial, x[i])
        assert g[i] == pytest.approx(expected, rel=1e-6, abs=1e-6)


@given(st.lists(finite, min_size=2, max_size=2))
@settings(max_examples=25)
def test_jacobian_t_is_transpose(x):
    def f(x):
        return (dgf.atan(x[0] * x[1]), dgf.cosh(x[0]) - x[1], dgf.sqrt(1 + x[1] ** 2))

    assert np.array_equal(autodiff.jacobian_t(f)(x), autodiff.jacobian(f)(x).T)


@given(finite, finite, finite)
@settings(max_examples=50)
def test_diff_is_linear(a, b, x):
    def f(x):
        return dgf.sin(x) * x

    def g(x):
        return dgf.exp(x) - x**3

    lhs = autodiff.diff(lambda x: a * f(x) + b * g(x))(x)
    rhs = a * autodiff.diff(f)(x) + b * autodiff.diff(g)(x)
    assert lhs == rhs
