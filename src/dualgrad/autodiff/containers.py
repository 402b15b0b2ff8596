"""Differential operators taking and returning :class:`~dualgrad.linalg.Vector` and
:class:`~dualgrad.linalg.Matrix` instead of NumPy arrays.

The functions of this module have the same names and numeric behavior as their
counterparts in :mod:`dualgrad.autodiff`; only the types of the inputs and outputs
differ.

Examples
--------
>>> from dualgrad.linalg import Vector
>>> from dualgrad.autodiff import containers
>>> containers.grad(lambda x: x[0] ** 2 * x[1])(Vector([2.0, 3.0]))
Vector([12.0, 4.0])
"""

import functools
from collections.abc import Callable, Sequence

import numpy as np

from dualgrad.autodiff import autodiff
from dualgrad.autodiff.autodiff import FieldFunction, VectorFunction
from dualgrad.linalg import Matrix, Vector

type Point = Vector | Sequence[float]

diff = autodiff.diff
diff_with_value = autodiff.diff_with_value


def _array(x: Point) -> np.ndarray:
    return np.asarray(x, dtype=np.float64)


def grad_with_value(fun: FieldFunction) -> Callable[[Point], tuple[float, Vector]]:
    """Original value and gradient of a vector-to-scalar function, as a
    :class:`Vector`."""
    inner = autodiff.grad_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        value, g = inner(_array(x))
        return value, Vector(g)

    return result


def grad(fun: FieldFunction) -> Callable[[Point], Vector]:
    """Gradient of a vector-to-scalar function, as a :class:`Vector`."""
    inner = grad_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        return inner(x)[1]

    return result


def jacobian_with_value(
    fun: VectorFunction,
) -> Callable[[Point], tuple[Vector, Matrix]]:
    """Original value and Jacobian of a vector-to-vector function, as a
    :class:`Vector` and a :class:`Matrix`."""
    inner = autodiff.jacobian_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        values, j = inner(_array(x))
        return Vector(values), Matrix(j)

    return result


def jacobian(fun: VectorFunction) -> Callable[[Point], Matrix]:
    """Jacobian of a vector-to-vector function, as a :class:`Matrix`."""
    inner = jacobian_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        return inner(x)[1]

    return result


def jacobian_t_with_value(
    fun: VectorFunction,
) -> Callable[[Point], tuple[Vector, Matrix]]:
    """Original value and transposed Jacobian of a vector-to-vector function."""
    inner = jacobian_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        values, j = inner(x)
        return values, j.transpose()

    return result


def jacobian_t(fun: VectorFunction) -> Callable[[Point], Matrix]:
    """Transposed Jacobian of a vector-to-vector function, as a :class:`Matrix`."""
    inner = jacobian_t_with_value(fun)

    @functools.wraps(fun)
    def result(x):
        return inner(x)[1]

    return result
