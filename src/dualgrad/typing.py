"""
###############################
Typing (:mod:`dualgrad.typing`)
###############################

This module provides type definitions commonly used between modules.

.. autoclass:: Scalar
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Protocol, Self

import numpy as np

type Real = int | float | np.integer | np.floating
"""Plain real numbers that may be mixed with duals."""

REAL_TYPES = (int, float, np.integer, np.floating)


class Scalar(Protocol):
    """Protocol that ensures scalar-like behavior.

    Objects implementing this protocol must have four arithmetic operations and
    power defined, and the arithmetic operations must be compatible with real
    numbers.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | Real) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | Real) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | Real) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | Real) -> Self: ...

    @abstractmethod
    def __pow__(self, rhs: Self | Real) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: Real) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: Real) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: Real) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: Real) -> Self: ...

    @abstractmethod
    def __rpow__(self, lhs: Real) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...

    @abstractmethod
    def __pos__(self) -> Self: ...
