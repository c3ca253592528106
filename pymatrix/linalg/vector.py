"""
Vector: one-dimensional sequence of real numbers.

The Vector is the boundary type between the matrix engine and its callers.
It supplies right-hand sides to solve(), receives solutions, and converts
to and from single-row and single-column matrices. It deliberately carries
no algebra of its own.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.compute.precision import DEFAULT_RTOL, DEFAULT_ATOL
from pymatrix.core.validation import (
    check_array,
    check_1d,
    check_index,
    check_nonnegative_dims,
)
from pymatrix.core.exceptions import ConstructionError

if TYPE_CHECKING:
    from pymatrix.linalg.matrix import Matrix


class Vector:
    """
    Ordered sequence of float64 values with owned storage.

    Construction:
        Vector([1.0, 2.0, 3.0])
        Vector.generate(3, lambda i: i * i)
        Vector.zeros(3)
    """

    __slots__ = ('_data',)
    __hash__ = None  # mutable
    # numpy scalars and arrays defer to Vector's reflected operators
    __array_ufunc__ = None

    def __init__(self, values: ArrayLike = ()):
        data = check_array(values, 'values')
        if data.ndim == 0:
            raise ConstructionError("values: expected a sequence, got a scalar")
        check_1d(data, 'values')
        self._data = data

    @classmethod
    def _wrap(cls, data: NDArray[np.floating[Any]]) -> Vector:
        """Adopt an already-validated 1D float64 array without copying."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def generate(cls, n: int, f: Callable[[int], float]) -> Vector:
        """Vector of length n with entry i equal to f(i)."""
        check_nonnegative_dims(n, 0, 'Vector.generate')
        return cls._wrap(np.array([float(f(i)) for i in range(n)], dtype=np.float64))

    @classmethod
    def zeros(cls, n: int) -> Vector:
        check_nonnegative_dims(n, 0, 'Vector.zeros')
        return cls._wrap(np.zeros(n, dtype=np.float64))

    def __len__(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, i: int) -> float:
        i = check_index(i, len(self), 'element', 'Vector')
        return float(self._data[i])

    def __setitem__(self, i: int, value: float) -> None:
        i = check_index(i, len(self), 'element', 'Vector')
        self._data[i] = value

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._data)

    def copy(self) -> Vector:
        return Vector._wrap(self._data.copy())

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Independent float64 copy of the values."""
        return self._data.copy()

    def row_matrix(self) -> 'Matrix':
        """1 x n matrix holding this vector's values."""
        from pymatrix.linalg.matrix import Matrix
        return Matrix._wrap(self._data.reshape(1, -1).copy())

    def column_matrix(self) -> 'Matrix':
        """n x 1 matrix holding this vector's values."""
        from pymatrix.linalg.matrix import Matrix
        return Matrix._wrap(self._data.reshape(-1, 1).copy())

    def equals(self, other: Vector) -> bool:
        """Exact elementwise equality; vectors of different length are unequal."""
        return len(self) == len(other) and bool(np.array_equal(self._data, other._data))

    def approx(
        self,
        other: Vector,
        rtol: float = DEFAULT_RTOL,
        atol: float = DEFAULT_ATOL,
    ) -> bool:
        """Elementwise closeness; vectors of different length are not close."""
        if len(self) != len(other):
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    def __repr__(self) -> str:
        return f"Vector({[float(x) for x in self._data]!r})"

    def __str__(self) -> str:
        return '[' + ' '.join(format_entry(x) for x in self._data) + ']'


def format_entry(x: float) -> str:
    """Shortest round-tripping text for a float; integral values drop '.0'."""
    x = float(x)
    if x.is_integer():
        return str(int(x))
    return repr(x)
