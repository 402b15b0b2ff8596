from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Self, overload

import numpy as np
import numpy.typing as npt

from dualgrad.typing import REAL_TYPES, Real


class DimensionMismatch(ValueError):
    """Error raised when the lengths of two vectors (or rows of a matrix) disagree."""


def _readonly(a: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    a.flags.writeable = False
    return a


class Vector:
    """Fixed-length immutable vector of double-precision floats.

    Parameters
    ----------
    coeffs : Vector | ndarray | Iterable[float]
        Components of the vector. They are copied.

    Examples
    --------
    >>> x = Vector([1.0, 2.0])
    >>> y = Vector.unit(2, 1)
    >>> x + 3 * y
    Vector([1.0, 5.0])
    >>> x.dot(y)
    2.0
    """

    __slots__ = ("_coeffs",)
    __array_ufunc__ = None
    _coeffs: npt.NDArray[np.float64]

    def __init__(self, coeffs: Self | npt.ArrayLike | Iterable[Real], **kwargs):
        if kwargs.get("_skipcheck"):
            self._coeffs = _readonly(coeffs)  # type: ignore
            return

        if not isinstance(coeffs, Vector | np.ndarray | Sequence):
            coeffs = list(coeffs)  # type: ignore

        tmp = np.array(coeffs, dtype=np.float64)

        if tmp.ndim != 1:
            raise ValueError("vector must be one-dimensional")

        self._coeffs = _readonly(tmp)

    @classmethod
    def zero(cls, n: int) -> Self:
        """Return the zero vector of dimension `n`."""
        if n < 0:
            raise ValueError("dimension must be non-negative")

        return cls(np.zeros(n, np.float64), _skipcheck=True)

    @classmethod
    def unit(cls, n: int, i: int) -> Self:
        """Return the vector of dimension `n` whose `i`-th component is 1 and the rest
        are 0.

        Raises
        ------
        IndexError
            If `i` is not in ``range(n)``.
        """
        if n < 0:
            raise ValueError("dimension must be non-negative")

        if not 0 <= i < n:
            raise IndexError(f"index {i} is out of range for dimension {n}")

        coeffs = np.zeros(n, np.float64)
        coeffs[i] = 1.0
        return cls(coeffs, _skipcheck=True)

    def dot(self, rhs: Self) -> float:
        """Return the inner product of two vectors.

        Raises
        ------
        DimensionMismatch
            If the vectors have different lengths.
        """
        self._check(rhs)
        return float(self._coeffs @ rhs._coeffs)

    def tolist(self) -> list[float]:
        return self._coeffs.tolist()

    def _check(self, other: "Vector") -> None:
        if len(self._coeffs) != len(other._coeffs):
            msg = f"dimensions {len(self._coeffs)} and {len(other._coeffs)} differ"
            raise DimensionMismatch(msg)

    def __array__(self, dtype=None, copy=None) -> npt.NDArray:
        if copy is False:
            if dtype is None:
                return self._coeffs

            return self._coeffs.astype(dtype, copy=False)

        return np.array(self._coeffs, dtype=dtype)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._coeffs.tolist()!r})"

    def __len__(self) -> int:
        return len(self._coeffs)

    def __iter__(self) -> Iterator[float]:
        return iter(self._coeffs.tolist())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return bool(np.array_equal(self._coeffs, other._coeffs))  # type: ignore

    @overload
    def __getitem__(self, key: int) -> float: ...

    @overload
    def __getitem__(self, key: slice) -> Self: ...

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self.__class__(self._coeffs[key].copy(), _skipcheck=True)

        return float(self._coeffs[key])

    def __add__(self, rhs: Self) -> Self:
        if not isinstance(rhs, Vector):
            return NotImplemented

        self._check(rhs)
        return self.__class__(self._coeffs + rhs._coeffs, _skipcheck=True)

    def __sub__(self, rhs: Self) -> Self:
        if not isinstance(rhs, Vector):
            return NotImplemented

        self._check(rhs)
        return self.__class__(self._coeffs - rhs._coeffs, _skipcheck=True)

    def __mul__(self, rhs: Self | Real) -> Self:
        if isinstance(rhs, Vector):
            self._check(rhs)
            return self.__class__(self._coeffs * rhs._coeffs, _skipcheck=True)

        if not isinstance(rhs, REAL_TYPES):
            return NotImplemented

        return self.__class__(self._coeffs * rhs, _skipcheck=True)

    def __truediv__(self, rhs: Self | Real) -> Self:
        if isinstance(rhs, Vector):
            self._check(rhs)
            return self.__class__(self._coeffs / rhs._coeffs, _skipcheck=True)

        if not isinstance(rhs, REAL_TYPES):
            return NotImplemented

        return self.__class__(self._coeffs / rhs, _skipcheck=True)

    def __matmul__(self, rhs: Self) -> float:
        if not isinstance(rhs, Vector):
            return NotImplemented

        return self.dot(rhs)

    def __neg__(self) -> Self:
        return self.__class__(-self._coeffs, _skipcheck=True)

    def __pos__(self) -> Self:
        return self.__class__(self._coeffs.copy(), _skipcheck=True)

    def __rmul__(self, lhs: Real) -> Self:
        if not isinstance(lhs, REAL_TYPES):
            return NotImplemented

        return self.__class__(lhs * self._coeffs, _skipcheck=True)


class Matrix:
    """Row-major immutable matrix of double-precision floats.

    Parameters
    ----------
    rows : Matrix | ndarray | Sequence[Vector | Sequence[float]]
        Either a two-dimensional array or an ordered sequence of rows. The data are
        copied.

    Examples
    --------
    >>> a = Matrix([Vector([1.0, 2.0]), Vector([3.0, 4.0])])
    >>> a.shape
    (2, 2)
    >>> a.T[0]
    Vector([1.0, 3.0])
    """

    __slots__ = ("_coeffs",)
    __array_ufunc__ = None
    _coeffs: npt.NDArray[np.float64]

    def __init__(self, rows: Self | npt.NDArray | Sequence[Any], **kwargs):
        if kwargs.get("_skipcheck"):
            self._coeffs = _readonly(rows)  # type: ignore
            return

        if isinstance(rows, Matrix | np.ndarray):
            tmp = np.array(rows, dtype=np.float64)
        else:
            tmp_rows = [np.array(row, dtype=np.float64) for row in rows]

            if any(row.ndim != 1 for row in tmp_rows):
                raise ValueError("rows must be one-dimensional")

            if len({len(row) for row in tmp_rows}) > 1:
                raise DimensionMismatch("rows have different lengths")

            tmp = np.array(tmp_rows, dtype=np.float64) if tmp_rows else np.empty((0, 0))

        if tmp.ndim != 2:
            raise ValueError("matrix must be two-dimensional")

        self._coeffs = _readonly(tmp)

    @property
    def shape(self) -> tuple[int, int]:
        """Tuple of matrix dimensions, ``(rows, columns)``."""
        return self._coeffs.shape  # type: ignore

    @property
    def T(self) -> Self:
        """Shorthand for :meth:`transpose`."""
        return self.transpose()

    def transpose(self) -> Self:
        """Return the transposed matrix."""
        return self.__class__(self._coeffs.T, _skipcheck=True)

    def tolist(self) -> list[list[float]]:
        return self._coeffs.tolist()

    def __array__(self, dtype=None, copy=None) -> npt.NDArray:
        if copy is False:
            if dtype is None:
                return self._coeffs

            return self._coeffs.astype(dtype, copy=False)

        return np.array(self._coeffs, dtype=dtype)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._coeffs.tolist()!r})"

    def __len__(self) -> int:
        return len(self._coeffs)

    def __iter__(self) -> Iterator[Vector]:
        return (Vector(row) for row in self._coeffs)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return bool(np.array_equal(self._coeffs, other._coeffs))  # type: ignore

    @overload
    def __getitem__(self, key: int) -> Vector: ...

    @overload
    def __getitem__(self, key: tuple[int, int]) -> float: ...

    @overload
    def __getitem__(self, key: slice) -> Self: ...

    def __getitem__(self, key):
        if isinstance(key, tuple):
            return float(self._coeffs[key])

        if isinstance(key, slice):
            return self.__class__(self._coeffs[key].copy(), _skipcheck=True)

        return Vector(self._coeffs[key])
