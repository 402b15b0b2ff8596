import functools
import logging
from collections.abc import Callable, Iterable
from typing import Any

import numpy as np
import numpy.typing as npt

from dualgrad.autodiff.context import getcontext
from dualgrad.autodiff.dual import (
    Dual,
    as_scalar_tuple,
    as_vector_tuple,
    lift,
    make_active_dual,
    seed_all_active,
)
from dualgrad.linalg import DimensionMismatch

_logger = logging.getLogger(__name__)

type Array = npt.NDArray[np.float64]
type ScalarFunction = Callable[[Dual], Dual | float]
type FieldFunction = Callable[[npt.NDArray[np.object_]], Dual | float]
type VectorFunction = Callable[[npt.NDArray[np.object_]], Iterable[Dual | float]]


def _evaluate(fun: Callable, x: Any) -> Any:
    with np.errstate(all=getcontext().floating):
        return fun(x)


def _harvest(y: Dual | float, n: int) -> Dual:
    y = lift(y, n)

    if y.dim != n:
        raise DimensionMismatch(f"output has dimension {y.dim}, expected {n}")

    return y


def diff_with_value(fun: ScalarFunction) -> Callable[[float], tuple[float, float]]:
    """Return a function that evaluates the univariate scalar-valued function and its
    derivative.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It is called once with a :class:`Dual` and must
        return a :class:`Dual` (or a real number, which is treated as a constant).

    Returns
    -------
    Callable
        Function that maps `x` to ``(fun(x), fun'(x))``.

    Raises
    ------
    DimensionMismatch
        If `fun` returns a dual whose gradient is not of dimension 1.

    Warnings
    --------
    `fun` must be written in terms of the arithmetic operators and the functions in
    :mod:`dualgrad.function`. Converting a dual to :class:`float` inside `fun` drops
    its derivative.

    Examples
    --------
    >>> from dualgrad import function as dgf
    >>> df = diff_with_value(lambda x: dgf.sin(x) * dgf.cos(x))
    >>> df(0.0)
    (0.0, 1.0)
    """

    @functools.wraps(fun)
    def result(x):
        y = _evaluate(fun, make_active_dual(x, 1, 0))
        return as_scalar_tuple(_harvest(y, 1))

    return result


def diff(fun: ScalarFunction) -> Callable[[float], float]:
    """Return a function that evaluates the derivative of the univariate scalar-valued
    function.

    See :func:`diff_with_value` for the requirements on `fun`.

    Examples
    --------
    >>> from dualgrad import function as dgf
    >>> f = lambda x: x**2 + dgf.sqrt(x + 3)
    >>> df = diff(f)
    >>> print(format(df(1.2), ".6g"))
    2.64398
    """
    deriv = diff_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        return deriv(x)[1]

    return result


def grad_with_value(
    fun: FieldFunction,
) -> Callable[[npt.ArrayLike], tuple[float, Array]]:
    """Return a function that evaluates the multivariate scalar-valued function and its
    gradient.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It is called once with a one-dimensional array of
        :class:`Dual`, one per component of the input.

    Returns
    -------
    Callable
        Function that maps an array `x` of length `n` to ``(fun(x), g)``, where `g` is
        an array of length `n` with ``g[i]`` the partial derivative with respect to
        ``x[i]``.

    Raises
    ------
    DimensionMismatch
        If `fun` returns a dual whose gradient is not of length `n`.

    Examples
    --------
    >>> value, g = grad_with_value(lambda x: x[0] ** 2 * x[1])([2.0, 3.0])
    >>> value
    12.0
    >>> g
    array([12.,  4.])
    """

    @functools.wraps(fun)
    def result(x):
        args = seed_all_active(x)
        _logger.debug("seeded %d variables for %r", len(args), fun)
        y = _evaluate(fun, args)
        return as_vector_tuple(_harvest(y, len(args)))

    return result


def grad(fun: FieldFunction) -> Callable[[npt.ArrayLike], Array]:
    """Return a function that evaluates the gradient of the multivariate scalar-valued
    function.

    See :func:`grad_with_value` for the requirements on `fun`.

    Examples
    --------
    >>> from dualgrad import function as dgf
    >>> g = grad(lambda x: dgf.sqrt(x[0] * x[1] + 3))([0.5, 1.0])
    >>> print(format(g[0], ".6g"), format(g[1], ".6g"))
    0.267261 0.133631
    """
    gradient = grad_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        return gradient(x)[1]

    return result


def jacobian_with_value(
    fun: VectorFunction,
) -> Callable[[npt.ArrayLike], tuple[Array, Array]]:
    """Return a function that evaluates the multivariate vector-valued function and its
    Jacobian matrix.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It is called once with a one-dimensional array of
        :class:`Dual` and must return a sequence (a list, a tuple, or an array) whose
        elements are :class:`Dual` or real numbers.

    Returns
    -------
    Callable
        Function that maps an array `x` of length `n` to ``(values, J)``, where
        `values` has length `m`, the number of outputs, and `J` has shape ``(m, n)``.
        The `i`-th row of `J` is the gradient of the `i`-th output.

    Raises
    ------
    DimensionMismatch
        If an output of `fun` has a gradient of a different dimension.

    Notes
    -----
    The whole matrix is obtained from a single evaluation of `fun`, whose cost grows
    linearly with `n`.

    Examples
    --------
    >>> values, j = jacobian_with_value(lambda x: (x[0] + x[1], x[0] * x[1]))([2, 3])
    >>> values
    array([5., 6.])
    >>> j
    array([[1., 1.],
           [3., 2.]])
    """

    @functools.wraps(fun)
    def result(x):
        args = seed_all_active(x)
        n = len(args)
        with np.errstate(all=getcontext().floating):
            outputs = [_harvest(y, n) for y in fun(args)]

        m = len(outputs)
        _logger.debug("seeded %d variables for %r, got %d outputs", n, fun, m)

        values = np.array([float(y.primal) for y in outputs], np.float64)
        matrix = np.empty((len(outputs), n), np.float64)

        for i, y in enumerate(outputs):
            matrix[i] = np.asarray(y.gradient)

        return values, matrix

    return result


def jacobian(fun: VectorFunction) -> Callable[[npt.ArrayLike], Array]:
    """Return a function that evaluates the Jacobian matrix of the multivariate
    vector-valued function.

    See :func:`jacobian_with_value` for the requirements on `fun`.

    Examples
    --------
    >>> from dualgrad import function as dgf
    >>> j = jacobian(lambda x: (dgf.sin(x[0] * x[1]), x[0] ** 2 - dgf.cos(x[1])))
    >>> print(j([2.0, 3.0]).round(5))
    [[2.88051 1.92034]
     [4.      0.14112]]
    """
    matrix = jacobian_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        return matrix(x)[1]

    return result


def jacobian_t_with_value(
    fun: VectorFunction,
) -> Callable[[npt.ArrayLike], tuple[Array, Array]]:
    """Return a function that evaluates the multivariate vector-valued function and the
    transpose of its Jacobian matrix.

    This is the same as :func:`jacobian_with_value` except that the matrix is
    transposed, i.e., it has shape ``(n, m)``. No additional arithmetic is performed.
    """
    matrix = jacobian_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        values, j = matrix(x)
        return values, j.T

    return result


def jacobian_t(fun: VectorFunction) -> Callable[[npt.ArrayLike], Array]:
    """Return a function that evaluates the transposed Jacobian matrix of the
    multivariate vector-valued function.

    See :func:`jacobian_t_with_value`.
    """
    matrix = jacobian_t_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        return matrix(x)[1]

    return result


def check_grad(
    fun: FieldFunction,
    x: npt.ArrayLike,
    *,
    eps: float = 1e-6,
    rtol: float = 1e-5,
    atol: float = 1e-8,
) -> bool:
    """Compare the gradient computed by :func:`grad` with central differences.

    `fun` is called with duals once and with arrays of floats ``2 * len(x)`` times,
    so it must accept both.

    Parameters
    ----------
    fun : Callable
        Multivariate scalar-valued function.
    x : ArrayLike
        Point at which the gradient is checked.
    eps : float, default=1e-6
        Step size of the central differences.
    rtol, atol : float
        Tolerances passed to :func:`numpy.allclose`.

    Returns
    -------
    bool
        ``True`` if the gradients agree within the tolerances.

    Examples
    --------
    >>> from dualgrad import function as dgf
    >>> check_grad(lambda x: dgf.exp(x[0]) * dgf.sin(x[1]), [0.3, 1.2])
    True
    """
    x = np.asarray(x, dtype=np.float64)
    analytic = grad(fun)(x)
    numeric = np.empty_like(x)

    for i in range(len(x)):
        step = np.zeros_like(x)
        step[i] = eps
        numeric[i] = (fun(x + step) - fun(x - step)) / (2.0 * eps)

    _logger.debug("analytic gradient %s, central differences %s", analytic, numeric)
    return bool(np.allclose(analytic, numeric, rtol=rtol, atol=atol))
