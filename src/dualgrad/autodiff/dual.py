from collections.abc import Iterable
from typing import Self

import numpy as np
import numpy.typing as npt

from dualgrad import function as dgf
from dualgrad.autodiff.context import getcontext
from dualgrad.linalg import Vector
from dualgrad.typing import REAL_TYPES, Real, Scalar


class Dual(Scalar):
    r"""Dual number carrying a whole gradient.

    Parameters
    ----------
    primal : float
        Ordinary value.
    gradient : Vector | Iterable[float]
        Partial derivatives of `primal` with respect to each independent variable.

    Attributes
    ----------
    primal : numpy.float64
    gradient : Vector
    dim : int

    See Also
    --------
    make_dual, make_active_dual, seed_all_active

    Notes
    -----
    Instances of this class behave like elements of the ring

    .. math::

        \mathbb{R}[\varepsilon_1,\dotsc,\varepsilon_m]/(\varepsilon_i\varepsilon_j
        \mid i,j\in\{1,\dotsc,m\}),

    where :math:`m` is the length of `gradient`. They are immutable: every operation
    returns a new dual with a new gradient. Combining duals whose gradients have
    different lengths raises :exc:`dualgrad.linalg.DimensionMismatch`.

    Out-of-domain arguments follow IEEE 754, i.e., they produce infinities or NaNs
    in both the primal value and the gradient.

    Examples
    --------
    >>> x = Dual(2.0, [1.0, 0.0])
    >>> y = Dual(3.0, [0.0, 1.0])
    >>> x * y + 1
    Dual(primal=7.0, gradient=[3.0, 2.0])
    """

    __slots__ = ("_primal", "_gradient")
    __array_ufunc__ = None
    _primal: np.float64
    _gradient: Vector

    def __init__(self, primal: Real, gradient: Vector | Iterable[Real]):
        if isinstance(primal, Dual):
            raise TypeError("nesting Dual is not supported")

        self._primal = np.float64(primal)
        self._gradient = gradient if isinstance(gradient, Vector) else Vector(gradient)

    @classmethod
    def zero(cls, m: int) -> Self:
        """Return the additive identity of dimension `m`."""
        return cls(0.0, Vector.zero(m))

    @classmethod
    def one(cls, m: int) -> Self:
        """Return the multiplicative identity of dimension `m`."""
        return cls(1.0, Vector.zero(m))

    @property
    def primal(self) -> np.float64:
        return self._primal

    @property
    def gradient(self) -> Vector:
        return self._gradient

    @property
    def dim(self) -> int:
        """Number of independent variables, i.e., the length of `gradient`."""
        return len(self._gradient)

    def _is_acceptable(self, value: object) -> bool:
        return isinstance(value, Dual) or isinstance(value, REAL_TYPES)

    def _dualgrad_overload_(self, fun, *args):
        cls, a, ag = type(self), self._primal, self._gradient

        match fun:
            case dgf.sqrt:
                s = np.sqrt(a)
                return cls(s, ag / (2.0 * s))

            case dgf.exp:
                e = np.exp(a)
                return cls(e, ag * e)

            case dgf.log:
                return cls(np.log(a), ag / a)

            case dgf.sin:
                return cls(np.sin(a), ag * np.cos(a))

            case dgf.cos:
                return cls(np.cos(a), -ag * np.sin(a))

            case dgf.tan:
                c = np.cos(a)
                return cls(np.tan(a), ag / (c * c))

            case dgf.sinh:
                return cls(np.sinh(a), ag * np.cosh(a))

            case dgf.cosh:
                return cls(np.cosh(a), ag * np.sinh(a))

            case dgf.tanh:
                c = np.cosh(a)
                return cls(np.tanh(a), ag / (c * c))

            case dgf.asin:
                return cls(np.arcsin(a), ag / np.sqrt(1.0 - a * a))

            case dgf.acos:
                return cls(np.arccos(a), -ag / np.sqrt(1.0 - a * a))

            case dgf.atan:
                return cls(np.arctan(a), ag / (1.0 + a * a))

            case dgf.pow:
                return args[0] ** args[1]

        return NotImplemented

    def __repr__(self) -> str:
        primal, gradient = float(self._primal), self._gradient.tolist()
        return f"{type(self).__name__}(primal={primal!r}, gradient={gradient!r})"

    def __str__(self) -> str:
        gradient = (", ").join(str(x) for x in self._gradient)
        return f"{type(self).__name__}({self._primal}, [{gradient}])"

    def __float__(self) -> float:
        return float(self._primal)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        if other._primal != self._primal:  # type: ignore
            return False

        return other._gradient == self._gradient  # type: ignore

    def __add__(self, rhs: Self | Real) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        if not isinstance(rhs, Dual):
            return self.__class__(self._primal + np.float64(rhs), +self._gradient)

        primal = self._primal + rhs._primal
        return self.__class__(primal, self._gradient + rhs._gradient)

    def __sub__(self, rhs: Self | Real) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        if not isinstance(rhs, Dual):
            return self.__class__(self._primal - np.float64(rhs), +self._gradient)

        primal = self._primal - rhs._primal
        return self.__class__(primal, self._gradient - rhs._gradient)

    def __mul__(self, rhs: Self | Real) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        a, ag = self._primal, self._gradient

        if not isinstance(rhs, Dual):
            b = np.float64(rhs)
            return self.__class__(a * b, ag * b)

        b, bg = rhs._primal, rhs._gradient
        return self.__class__(a * b, ag * b + bg * a)

    def __truediv__(self, rhs: Self | Real) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        a, ag = self._primal, self._gradient

        if not isinstance(rhs, Dual):
            b = np.float64(rhs)
            return self.__class__(a / b, ag / b)

        b, bg = rhs._primal, rhs._gradient
        return self.__class__(a / b, (ag * b - bg * a) / (b * b))

    def __pow__(self, rhs: Self | Real) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        a, ag = self._primal, self._gradient

        if not isinstance(rhs, Dual):
            b = np.float64(rhs)
            return self.__class__(a**b, ag * (b * a ** (b - 1.0)))

        b, bg = rhs._primal, rhs._gradient
        p = a**b
        return self.__class__(p, (ag * b / a + bg * np.log(a)) * p)

    def __neg__(self) -> Self:
        return self.__class__(-self._primal, -self._gradient)

    def __pos__(self) -> Self:
        return self.__class__(self._primal, +self._gradient)

    def __radd__(self, lhs: Real) -> Self:
        if not isinstance(lhs, REAL_TYPES):
            return NotImplemented

        return self.__class__(np.float64(lhs) + self._primal, +self._gradient)

    def __rsub__(self, lhs: Real) -> Self:
        if not isinstance(lhs, REAL_TYPES):
            return NotImplemented

        return self.__class__(np.float64(lhs) - self._primal, -self._gradient)

    def __rmul__(self, lhs: Real) -> Self:
        if not isinstance(lhs, REAL_TYPES):
            return NotImplemented

        a = np.float64(lhs)
        return self.__class__(a * self._primal, self._gradient * a)

    def __rtruediv__(self, lhs: Real) -> Self:
        if not isinstance(lhs, REAL_TYPES):
            return NotImplemented

        a, b = np.float64(lhs), self._primal
        return self.__class__(a / b, self._gradient * -a / (b * b))

    def __rpow__(self, lhs: Real) -> Self:
        if not isinstance(lhs, REAL_TYPES):
            return NotImplemented

        a, b = np.float64(lhs), self._primal
        p = a**b
        return self.__class__(p, self._gradient * (p * np.log(a)))


def _check_dimension(m: int) -> None:
    if m < 0:
        raise ValueError("dimension must be non-negative")

    if m == 0 and not getcontext().allow_empty:
        raise ValueError("differentiation with respect to no variables is not allowed")


def make_dual(p: Real, m: int) -> Dual:
    """Return a constant dual, i.e., one whose `m` gradient components are all zero.

    Raises
    ------
    ValueError
        If `m` is negative, or `m` is zero and the current context does not allow
        empty gradients.
    """
    _check_dimension(m)
    return Dual(p, Vector.zero(m))


def make_dual_with_gradient(p: Real, g: Vector | Iterable[Real]) -> Dual:
    """Return a dual with primal value `p` and gradient `g`."""
    g = g if isinstance(g, Vector) else Vector(g)
    _check_dimension(len(g))
    return Dual(p, g)


def make_active_dual(p: Real, m: int, i: int) -> Dual:
    """Return the `i`-th of `m` independent variables, evaluated at `p`.

    The gradient of the result is the unit vector with 1 in the `i`-th place.

    Raises
    ------
    IndexError
        If `i` is not in ``range(m)``.

    Examples
    --------
    >>> make_active_dual(5.0, 3, 1)
    Dual(primal=5.0, gradient=[0.0, 1.0, 0.0])
    """
    _check_dimension(m)
    return Dual(p, Vector.unit(m, i))


def seed_all_active(x: npt.ArrayLike) -> npt.NDArray[np.object_]:
    """Return an array of independent variables evaluated at `x`.

    The `i`-th element of the result is ``make_active_dual(x[i], len(x), i)``. The
    result is a one-dimensional NumPy array of objects, so that it can be indexed or
    used in array expressions.

    Raises
    ------
    ValueError
        If `x` is not one-dimensional.
    """
    x = np.asarray(x, dtype=np.float64)

    if x.ndim != 1:
        raise ValueError("variables must be given as a one-dimensional array")

    n = len(x)
    _check_dimension(n)
    result = np.empty(n, np.object_)

    for i in range(n):
        result[i] = Dual(x[i], Vector.unit(n, i))

    return result


def lift(value: Dual | Real, m: int) -> Dual:
    """Return `value` as a dual of dimension `m`.

    Duals are returned as they are, and real numbers are made constant.
    """
    if isinstance(value, Dual):
        return value

    if not isinstance(value, REAL_TYPES):
        raise TypeError(f"expected Dual or real number, got {type(value).__name__!r}")

    return Dual(value, Vector.zero(m))


def primal(d: Dual) -> float:
    """Return the primal value of `d`."""
    return float(d.primal)


def gradient(d: Dual) -> npt.NDArray[np.float64]:
    """Return the gradient of `d` as an array."""
    return np.array(d.gradient)


def as_scalar_tuple(d: Dual) -> tuple[float, float]:
    """Return the primal value and the first gradient component of `d`."""
    return float(d.primal), d.gradient[0]


def as_vector_tuple(d: Dual) -> tuple[float, npt.NDArray[np.float64]]:
    """Return the primal value and the gradient of `d`."""
    return float(d.primal), np.array(d.gradient)
