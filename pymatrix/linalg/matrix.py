"""
Matrix: dense rectangular grid of float64 values.

The Matrix owns its storage (a 2D float64 ndarray) exclusively. Every
constructor and every operation documented as returning a new matrix
allocates fresh storage, so mutating a result never changes an input.
In-place operations mutate the receiver and are not safe for concurrent
use without external synchronization.

Construction:
    Matrix([[1, 2], [3, 4]])
    Matrix.generate(m, n, lambda i, j: ...)
    Matrix.from_values(2, 2, 1, 2, 3, 4)
    Matrix.from_array(ndarray)
    Matrix.zeros(m, n)
    Matrix.identity(n)
    Matrix.row_matrix(vector) / Matrix.column_matrix(vector)
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.compute.precision import DEFAULT_RTOL, DEFAULT_ATOL, is_close
from pymatrix.core.exceptions import (
    ConstructionError,
    DimensionError,
    DivisionByZeroError,
    ShapeError,
    ValidationError,
)
from pymatrix.core.validation import (
    check_array,
    check_2d,
    check_conformable,
    check_index,
    check_nonnegative_dims,
    check_same_shape,
    check_square,
)
from pymatrix.linalg.vector import Vector, format_entry


Generator = Callable[[int, int], float]


def delta(i: int, j: int) -> float:
    """Kronecker delta: the generator of the identity matrix."""
    return 1.0 if i == j else 0.0


def _rows_to_array(rows: Iterable[Any]) -> NDArray[np.floating[Any]]:
    """Convert a sequence of rows to a 2D array, rejecting ragged input."""
    rows = [r.to_numpy() if isinstance(r, Vector) else r for r in rows]
    if not rows:
        return np.zeros((0, 0), dtype=np.float64)

    lengths = []
    for i, r in enumerate(rows):
        try:
            lengths.append(len(r))
        except TypeError as e:
            raise ValidationError(
                f"rows: row {i} is not a sequence ({type(r).__name__})"
            ) from e

    n = lengths[0]
    for i, length in enumerate(lengths):
        if length != n:
            raise ShapeError(
                f"rows: row {i} has {length} entries, expected {n}",
                actual=(i, length),
                expected=f"{n} entries per row",
            )

    data = check_array(rows, 'rows')
    if n == 0:
        data = data.reshape(len(rows), 0)
    check_2d(data, 'rows')
    return data


class Matrix:
    """
    Dense m x n matrix of float64 values.

    Supports Python operators: ``+``, ``-``, ``@`` (matrix product),
    ``*`` and ``/`` by a scalar, unary ``-``, ``==`` and the ordering
    comparisons (lexicographic in row-major order). Matrices are mutable
    and therefore unhashable.
    """

    __slots__ = ('_data',)
    __hash__ = None  # mutable
    # numpy scalars and arrays defer to Matrix's reflected operators
    __array_ufunc__ = None

    def __init__(self, rows: Iterable[Sequence[float]] | ArrayLike = ()):
        if isinstance(rows, Matrix):
            data = rows._data.copy()
        elif isinstance(rows, np.ndarray):
            data = check_array(rows, 'rows')
            check_2d(data, 'rows')
        else:
            data = _rows_to_array(rows)
        self._data = data

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def _wrap(cls, data: NDArray[np.floating[Any]]) -> Matrix:
        """Adopt an already-validated 2D float64 array without copying."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def generate(cls, m: int, n: int, f: Generator) -> Matrix:
        """
        Build an m x n matrix with entry (i, j) = f(i, j).

        f is called in row-major order, once per entry.

        Raises:
            ConstructionError: If m or n is negative
        """
        check_nonnegative_dims(m, n, 'Matrix.generate')
        data = np.empty((m, n), dtype=np.float64)
        for i in range(m):
            for j in range(n):
                data[i, j] = f(i, j)
        return cls._wrap(data)

    @classmethod
    def zeros(cls, m: int, n: int) -> Matrix:
        check_nonnegative_dims(m, n, 'Matrix.zeros')
        return cls._wrap(np.zeros((m, n), dtype=np.float64))

    @classmethod
    def identity(cls, m: int, n: int | None = None) -> Matrix:
        """m x n matrix generated by the Kronecker delta (square when n is None)."""
        if n is None:
            n = m
        check_nonnegative_dims(m, n, 'Matrix.identity')
        return cls._wrap(np.eye(m, n, dtype=np.float64))

    @classmethod
    def from_values(cls, m: int, n: int, *values: float) -> Matrix:
        """
        Build an m x n matrix from m*n values in row-major order.

        Raises:
            ConstructionError: If dimensions are negative or the value
                count is not m*n
        """
        check_nonnegative_dims(m, n, 'Matrix.from_values')
        if len(values) != m * n:
            raise ConstructionError(
                f"Matrix.from_values: {m}x{n} needs {m * n} values, got {len(values)}"
            )
        data = check_array(values, 'values').reshape(m, n)
        return cls._wrap(data)

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix:
        """Copy a 2D array-like into a new matrix."""
        data = check_array(array, 'array')
        check_2d(data, 'array')
        return cls._wrap(data)

    @classmethod
    def row_matrix(cls, v: Vector) -> Matrix:
        return v.row_matrix()

    @classmethod
    def column_matrix(cls, v: Vector) -> Matrix:
        return v.column_matrix()

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------

    def dims(self) -> tuple[int, int]:
        """
        Return (rows, columns).

        Raises:
            ShapeError: If storage is not a rectangular 2D grid
        """
        if self._data.ndim != 2:
            raise ShapeError(
                f"Matrix storage is {self._data.ndim}D, expected a 2D grid",
                actual=self._data.shape,
                expected='2D',
            )
        m, n = self._data.shape
        return int(m), int(n)

    @property
    def shape(self) -> tuple[int, int]:
        return self.dims()

    @property
    def n_rows(self) -> int:
        return self.dims()[0]

    @property
    def n_cols(self) -> int:
        return self.dims()[1]

    def is_square(self) -> bool:
        m, n = self.dims()
        return m == n

    def __len__(self) -> int:
        return self.n_rows

    def get(self, i: int, j: int) -> float:
        m, n = self.dims()
        i = check_index(i, m, 'row', 'Matrix.get')
        j = check_index(j, n, 'column', 'Matrix.get')
        return float(self._data[i, j])

    def set(self, i: int, j: int, value: float) -> None:
        m, n = self.dims()
        i = check_index(i, m, 'row', 'Matrix.set')
        j = check_index(j, n, 'column', 'Matrix.set')
        self._data[i, j] = value

    def __getitem__(self, key: tuple[int, int]) -> float:
        i, j = self._unpack_key(key)
        return self.get(i, j)

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        i, j = self._unpack_key(key)
        self.set(i, j, value)

    @staticmethod
    def _unpack_key(key: Any) -> tuple[int, int]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise ValidationError(
                f"Matrix index must be a (row, column) pair, got {key!r}"
            )
        return key

    def row(self, i: int) -> Vector:
        """Copy of row i as a Vector."""
        i = check_index(i, self.n_rows, 'row', 'Matrix.row')
        return Vector._wrap(self._data[i].copy())

    def column(self, j: int) -> Vector:
        """Copy of column j as a Vector."""
        j = check_index(j, self.n_cols, 'column', 'Matrix.column')
        return Vector._wrap(self._data[:, j].copy())

    def get_row_matrix(self, i: int) -> Matrix:
        return self.row(i).row_matrix()

    def get_column_matrix(self, j: int) -> Matrix:
        return self.column(j).column_matrix()

    def __iter__(self) -> Iterator[Vector]:
        for r in self._data:
            yield Vector._wrap(r.copy())

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Independent float64 copy of the entries."""
        return self._data.copy()

    def to_vector(self) -> Vector:
        """
        Convert a 1 x n or n x 1 matrix to a Vector.

        Raises:
            ShapeError: If neither dimension is 1
        """
        m, n = self.dims()
        if m != 1 and n != 1:
            raise ShapeError(
                f"Only a row or column matrix converts to a vector, got {m}x{n}",
                actual=(m, n),
                expected='1xn or nx1',
            )
        return Vector._wrap(self._data.ravel().copy())

    def copy(self) -> Matrix:
        """Deep copy with independent storage."""
        return Matrix._wrap(self._data.copy())

    # ------------------------------------------------------------------
    # Elementwise arithmetic (in place)
    # ------------------------------------------------------------------

    def add(self, other: Matrix) -> None:
        """Add other to this matrix in place."""
        check_same_shape(self.dims(), other.dims(), ('self', 'other'))
        self._data += other._data

    def subtract(self, other: Matrix) -> None:
        """Subtract other from this matrix in place."""
        check_same_shape(self.dims(), other.dims(), ('self', 'other'))
        self._data -= other._data

    def scalar_multiply(self, a: float) -> None:
        self._data *= a

    def scalar_divide(self, a: float) -> None:
        """
        Divide every entry by a in place.

        Raises:
            DivisionByZeroError: If a == 0
        """
        if a == 0:
            raise DivisionByZeroError("Matrix.scalar_divide: division by zero")
        self._data /= a

    # ------------------------------------------------------------------
    # Row and column operations (in place)
    # ------------------------------------------------------------------

    def scale_row(self, i: int, a: float) -> None:
        i = check_index(i, self.n_rows, 'row', 'Matrix.scale_row')
        self._data[i] *= a

    def scale_column(self, j: int, a: float) -> None:
        j = check_index(j, self.n_cols, 'column', 'Matrix.scale_column')
        self._data[:, j] *= a

    def divide_row(self, i: int, a: float) -> None:
        i = check_index(i, self.n_rows, 'row', 'Matrix.divide_row')
        if a == 0:
            raise DivisionByZeroError(f"Matrix.divide_row: row {i} divided by zero")
        self._data[i] /= a

    def swap_rows(self, i: int, j: int) -> None:
        m = self.n_rows
        i = check_index(i, m, 'row', 'Matrix.swap_rows')
        j = check_index(j, m, 'row', 'Matrix.swap_rows')
        if i != j:
            self._data[[i, j]] = self._data[[j, i]]

    def swap_columns(self, i: int, j: int) -> None:
        n = self.n_cols
        i = check_index(i, n, 'column', 'Matrix.swap_columns')
        j = check_index(j, n, 'column', 'Matrix.swap_columns')
        if i != j:
            self._data[:, [i, j]] = self._data[:, [j, i]]

    def add_row_to_row(self, i: int, j: int, scale: float = 1.0) -> None:
        """Row i <- row i + scale * row j. Row j is unchanged."""
        m = self.n_rows
        i = check_index(i, m, 'row', 'Matrix.add_row_to_row')
        j = check_index(j, m, 'row', 'Matrix.add_row_to_row')
        self._data[i] += scale * self._data[j]

    def subtract_row_from_row(self, i: int, j: int) -> None:
        """Row i <- row i - row j."""
        self.add_row_to_row(i, j, -1.0)

    def add_column_to_column(self, i: int, j: int, scale: float = 1.0) -> None:
        """Column i <- column i + scale * column j."""
        n = self.n_cols
        i = check_index(i, n, 'column', 'Matrix.add_column_to_column')
        j = check_index(j, n, 'column', 'Matrix.add_column_to_column')
        self._data[:, i] += scale * self._data[:, j]

    def transpose(self) -> Matrix:
        """New n x m matrix with (i, j) -> (j, i)."""
        return Matrix._wrap(self._data.T.copy())

    def transpose_in_place(self) -> None:
        self._data = self._data.T.copy()

    @property
    def T(self) -> Matrix:
        return self.transpose()

    # ------------------------------------------------------------------
    # Structural operations (new matrices)
    # ------------------------------------------------------------------

    def join(self, other: Matrix) -> Matrix:
        """
        Horizontal concatenation [self | other].

        Raises:
            DimensionError: If row counts differ
        """
        ma, na = self.dims()
        mb, nb = other.dims()
        if ma != mb:
            raise DimensionError(
                f"Cannot join {ma}x{na} with {mb}x{nb}: row counts differ",
                actual=mb,
                expected=ma,
            )
        return Matrix._wrap(np.hstack([self._data, other._data]))

    def append_column(self, v: Vector) -> Matrix:
        return self.join(v.column_matrix())

    def append_row(self, v: Vector) -> Matrix:
        """
        New matrix with v added as the last row.

        Raises:
            DimensionError: If len(v) differs from the column count
        """
        m, n = self.dims()
        if len(v) != n:
            raise DimensionError(
                f"Cannot append a row of length {len(v)} to a {m}x{n} matrix",
                actual=len(v),
                expected=n,
            )
        return Matrix._wrap(np.vstack([self._data, v.to_numpy().reshape(1, n)]))

    def remove_row(self, i: int) -> Matrix:
        i = check_index(i, self.n_rows, 'row', 'Matrix.remove_row')
        return Matrix._wrap(np.delete(self._data, i, axis=0))

    def remove_column(self, j: int) -> Matrix:
        j = check_index(j, self.n_cols, 'column', 'Matrix.remove_column')
        return Matrix._wrap(np.delete(self._data, j, axis=1))

    def remove_duplicate_rows(self) -> Matrix:
        """
        Copy keeping only the first row of each group of scalar multiples.

        Two rows are multiples when they are zero in the same columns and
        the ratio of their nonzero entries is constant. A zero row is a
        multiple only of another zero row.
        """
        m, n = self.dims()
        keep: list[int] = []
        for i in range(m):
            if not any(_rows_are_multiples(self._data[k], self._data[i]) for k in keep):
                keep.append(i)
        return Matrix._wrap(self._data[keep].reshape(len(keep), n))

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, other: Matrix) -> int:
        """
        Lexicographic comparison of entries in row-major order.

        Returns:
            -1, 0 or 1 as self precedes, equals or follows other

        Raises:
            DimensionError: If shapes differ
            ValidationError: If either matrix holds a NaN
        """
        check_same_shape(self.dims(), other.dims(), ('self', 'other'))
        return _compare_arrays(self._data.ravel(), other._data.ravel())

    def equals(self, other: Matrix) -> bool:
        """Exact elementwise equality; raises DimensionError on shape mismatch.

        NaN entries are never equal, so a matrix holding one does not equal
        anything, itself included.
        """
        check_same_shape(self.dims(), other.dims(), ('self', 'other'))
        return bool(np.array_equal(self._data, other._data))

    def compare_rows(self, i: int, j: int) -> int:
        m = self.n_rows
        i = check_index(i, m, 'row', 'Matrix.compare_rows')
        j = check_index(j, m, 'row', 'Matrix.compare_rows')
        return _compare_arrays(self._data[i], self._data[j])

    def compare_columns(self, i: int, j: int) -> int:
        n = self.n_cols
        i = check_index(i, n, 'column', 'Matrix.compare_columns')
        j = check_index(j, n, 'column', 'Matrix.compare_columns')
        return _compare_arrays(self._data[:, i], self._data[:, j])

    def sort_rows(self) -> None:
        """
        Stable in-place sort putting the largest leading entries on top.

        Raises:
            ValidationError: If the matrix holds a NaN
        """
        _check_orderable(self._data, 'Matrix.sort_rows')
        order = sorted(
            range(self.n_rows),
            key=lambda i: tuple(self._data[i].tolist()),
            reverse=True,
        )
        self._data = self._data[order].reshape(self._data.shape)

    def approx(
        self,
        other: Matrix,
        rtol: float = DEFAULT_RTOL,
        atol: float = DEFAULT_ATOL,
    ) -> bool:
        """Elementwise closeness; matrices of different shape are not close."""
        if self.dims() != other.dims():
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.dims() != other.dims():
            return False
        return bool(np.array_equal(self._data, other._data))

    def __lt__(self, other: Matrix) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Matrix) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Matrix) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Matrix) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.compare(other) >= 0

    # ------------------------------------------------------------------
    # Scalar summaries
    # ------------------------------------------------------------------

    def trace(self, main_diagonal: bool = True) -> float:
        """
        Sum of the main diagonal, or of the anti-diagonal.

        Raises:
            ShapeError: If not square
        """
        check_square(self.dims(), 'Matrix.trace')
        if main_diagonal:
            return float(np.trace(self._data))
        return float(np.trace(np.fliplr(self._data)))

    def cost(self, other: Matrix) -> int:
        """Scalar multiplications needed to compute self @ other."""
        ma, na = self.dims()
        mb, nb = other.dims()
        check_conformable((ma, na), (mb, nb), ('self', 'other'))
        return ma * na * nb

    # ------------------------------------------------------------------
    # Algebra (delegates to the kernels)
    # ------------------------------------------------------------------

    def multiply(self, other: Matrix) -> Matrix:
        from pymatrix.linalg._multiply import multiply
        return multiply(self, other)

    def determinant(self, method: str = 'cofactor') -> float:
        from pymatrix.linalg._determinant import determinant
        return determinant(self, method=method)

    def inverse(self, tol: float | None = None) -> Matrix:
        from pymatrix.linalg._elimination import inverse
        return inverse(self, tol=tol)

    def solve(self, b: Vector, tol: float | None = None) -> Vector:
        from pymatrix.linalg._elimination import solve
        return solve(self, b, tol=tol)

    def power(self, p: int) -> Matrix:
        from pymatrix.linalg._power import matrix_power
        return matrix_power(self, p)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        result = self.copy()
        result.add(other)
        return result

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        result = self.copy()
        result.subtract(other)
        return result

    def __iadd__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self.add(other)
        return self

    def __isub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self.subtract(other)
        return self

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def __mul__(self, a: float) -> Matrix:
        if not isinstance(a, (int, float, np.number)) or isinstance(a, bool):
            return NotImplemented
        result = self.copy()
        result.scalar_multiply(a)
        return result

    __rmul__ = __mul__

    def __truediv__(self, a: float) -> Matrix:
        if not isinstance(a, (int, float, np.number)) or isinstance(a, bool):
            return NotImplemented
        result = self.copy()
        result.scalar_divide(a)
        return result

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._data)

    def __pow__(self, p: int) -> Matrix:
        return self.power(p)

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    def __str__(self) -> str:
        rows = (
            '[' + ' '.join(format_entry(x) for x in r) + ']'
            for r in self._data
        )
        return '[' + ''.join(rows) + ']'


def _check_orderable(data: NDArray[np.floating[Any]], where: str) -> None:
    if np.isnan(data).any():
        raise ValidationError(f"{where}: NaN entries have no order")


def _compare_arrays(a: NDArray[np.floating[Any]], b: NDArray[np.floating[Any]]) -> int:
    """First strict difference decides."""
    _check_orderable(a, 'compare')
    _check_orderable(b, 'compare')
    differs = np.flatnonzero((a < b) | (a > b))
    if differs.size == 0:
        return 0
    k = differs[0]
    return -1 if a[k] < b[k] else 1


def _rows_are_multiples(a: NDArray[np.floating[Any]], b: NDArray[np.floating[Any]]) -> bool:
    nonzero = a != 0
    if not np.array_equal(nonzero, b != 0):
        return False
    if not np.any(nonzero):
        return True
    ratios = a[nonzero] / b[nonzero]
    return bool(np.all(is_close(ratios, ratios[0])))


# ----------------------------------------------------------------------
# Pure functional forms
# ----------------------------------------------------------------------

def add(A: Matrix, B: Matrix) -> Matrix:
    """A + B as a new matrix."""
    return A + B


def subtract(A: Matrix, B: Matrix) -> Matrix:
    """A - B as a new matrix."""
    return A - B


def transpose(A: Matrix) -> Matrix:
    return A.transpose()
