"""
################################################
Mathematical functions (:mod:`dualgrad.function`)
################################################

.. currentmodule:: dualgrad.function

This module provides mathematical functions. Each function accepts plain real
numbers, :mod:`mpmath` numbers, and any type that overloads it through the
``_dualgrad_overload_`` protocol, such as :class:`dualgrad.autodiff.Dual`.

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    exp
    log
    pow
    sqrt

Trigonometric functions
=======================

.. autosummary::
    :toctree: generated/

    sin
    cos
    tan
    asin
    acos
    atan

Hyperbolic functions
====================

.. autosummary::
    :toctree: generated/

    sinh
    cosh
    tanh

Notes
-----
A type overloads these functions by defining a method
``_dualgrad_overload_(self, fun, *args)``, where `fun` is the function being called
and `args` are its arguments. The method returns ``NotImplemented`` for functions
it does not support.
"""

import math
from collections.abc import Callable
from typing import Any, overload

import mpmath
import mpmath.ctx_mp_python
import numpy as np

from dualgrad.typing import REAL_TYPES


def _apply(fun: Callable, x: Any, real: Callable, mp: Callable) -> Any:
    if hook := getattr(type(x), "_dualgrad_overload_", None):
        if (res := hook(x, fun, x)) is not NotImplemented:
            return res

        raise TypeError(f"{fun.__name__}() is not supported for {type(x).__name__!r}")

    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mp(x)

        case float() | int() | np.floating() | np.integer():
            return real(x)

        case _:
            raise TypeError(f"unsupported operand type: {type(x).__name__!r}")


@overload
def exp(x: float | int, /) -> float: ...


@overload
def exp(x: Any, /) -> Any: ...


def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    """
    return _apply(exp, x, math.exp, mpmath.exp)


@overload
def log(x: float | int, /) -> float: ...


@overload
def log(x: Any, /) -> Any: ...


def log(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(log(5), ".6f"))
    1.609438
    """
    return _apply(log, x, math.log, mpmath.log)


@overload
def pow(x: float | int, y: float | int, /) -> float: ...


@overload
def pow(x: Any, y: Any, /) -> Any: ...


def pow(x, y, /):
    """`x` raised to the power `y`.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693

    Either argument may be a dual number.

    >>> from dualgrad.autodiff import make_active_dual
    >>> z = pow(2.0, make_active_dual(3.0, 1, 0))
    >>> print(format(z.primal, ".1f"), format(z.gradient[0], ".6f"))
    8.0 5.545177
    """
    for z in (x, y):
        if hook := getattr(type(z), "_dualgrad_overload_", None):
            if (res := hook(z, pow, x, y)) is not NotImplemented:
                return res

    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match x, y:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpmath.power(x, y)

        case _ if isinstance(x, REAL_TYPES) and isinstance(y, REAL_TYPES):
            return math.pow(x, y)

        case _:
            raise TypeError


@overload
def sqrt(x: float | int, /) -> float: ...


@overload
def sqrt(x: Any, /) -> Any: ...


def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    """
    return _apply(sqrt, x, math.sqrt, mpmath.sqrt)


def sin(x, /):
    """Sine.

    Examples
    --------
    >>> print(format(sin(1.0), ".6f"))
    0.841471
    """
    return _apply(sin, x, math.sin, mpmath.sin)


def cos(x, /):
    """Cosine.

    Examples
    --------
    >>> print(format(cos(1.0), ".6f"))
    0.540302
    """
    return _apply(cos, x, math.cos, mpmath.cos)


def tan(x, /):
    """Tangent.

    Examples
    --------
    >>> print(format(tan(1.0), ".6f"))
    1.557408
    """
    return _apply(tan, x, math.tan, mpmath.tan)


def asin(x, /):
    """Inverse sine."""
    return _apply(asin, x, math.asin, mpmath.asin)


def acos(x, /):
    """Inverse cosine."""
    return _apply(acos, x, math.acos, mpmath.acos)


def atan(x, /):
    """Inverse tangent.

    Examples
    --------
    >>> print(format(atan(1.0), ".6f"))
    0.785398
    """
    return _apply(atan, x, math.atan, mpmath.atan)


def sinh(x, /):
    """Hyperbolic sine."""
    return _apply(sinh, x, math.sinh, mpmath.sinh)


def cosh(x, /):
    """Hyperbolic cosine."""
    return _apply(cosh, x, math.cosh, mpmath.cosh)


def tanh(x, /):
    """Hyperbolic tangent.

    Examples
    --------
    >>> print(format(tanh(1.0), ".6f"))
    0.761594
    """
    return _apply(tanh, x, math.tanh, mpmath.tanh)
