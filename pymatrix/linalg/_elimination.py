"""
Gaussian elimination with partial pivoting.

Shared engine for solve() and inverse(). The input is an m x n working
matrix with m <= n whose left m x m block holds the coefficients and
whose remaining columns hold the right-hand side (a column for solve, an
identity block for inverse).

Each row carries a zero tolerance taken from the original coefficient
block (see pivot_tolerance); it travels with the row through swaps.

Forward pass, for each pivot column i:
    1. A candidate M[r, i], r in i..m-1, is usable if |M[r, i]| exceeds
       the tolerance of row r
    2. If no candidate is usable, raise SingularMatrixError
    3. Swap the usable candidate with the largest magnitude into row i
    4. Eliminate every entry below the pivot with add_row_to_row

Backward pass, for i = m-1 .. 0: divide row i by its pivot and eliminate
every entry above it, reaching reduced row-echelon form.

A zero pivot never passes silently: callers get SingularMatrixError, not
a partially reduced matrix.
"""

from __future__ import annotations

from dataclasses import dataclass
import warnings

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.precision import NEAR_SINGULAR_FACTOR, pivot_tolerance
from pymatrix.core.exceptions import DimensionError, ShapeError, SingularMatrixError
from pymatrix.core.validation import check_square
from pymatrix.linalg.matrix import Matrix
from pymatrix.linalg.vector import Vector


@dataclass(frozen=True)
class EliminationResult:
    """
    Outcome of elimination on a working matrix.

    Attributes:
        reduced: The working matrix after elimination (row-echelon form if
            reduce=False, reduced row-echelon form otherwise)
        pivots: Pivot values in column order, before normalization
        row_swaps: Number of row interchanges performed
        permutation: permutation[k] is the original index of the row that
            ended up in position k
        tolerances: Zero tolerance of each input row, in input order
        near_singular_columns: Pivot columns whose accepted pivot was
            within NEAR_SINGULAR_FACTOR of its row's tolerance
    """
    reduced: Matrix
    pivots: tuple[float, ...]
    row_swaps: int
    permutation: tuple[int, ...]
    tolerances: tuple[float, ...]
    near_singular_columns: tuple[int, ...] = ()

    @property
    def determinant_sign(self) -> int:
        return -1 if self.row_swaps % 2 else 1


def _forward_eliminate(
    M: Matrix,
    n_pivots: int,
    row_tol: NDArray[np.floating],
    matrix_name: str,
) -> tuple[list[float], int, list[int], list[int]]:
    """Row-reduce M in place to upper-triangular form in its left block."""
    data = M._data
    m = M.n_rows
    row_tol = row_tol.copy()
    pivots: list[float] = []
    permutation = list(range(m))
    near_singular: list[int] = []
    swaps = 0

    for i in range(n_pivots):
        candidates = np.abs(data[i:, i])
        usable = candidates > row_tol[i:]
        if not np.any(usable):
            largest = float(candidates.max())
            raise SingularMatrixError(
                f"{matrix_name} is singular: no pivot in column {i} "
                f"(largest candidate {largest:.3g} is within its row tolerance)",
                matrix_name=matrix_name,
                pivot_column=i,
                pivot_value=largest,
                rank=i,
                expected_rank=n_pivots,
            )
        p = i + int(np.argmax(np.where(usable, candidates, -1.0)))
        magnitude = float(candidates[p - i])
        tol = float(row_tol[p])

        if tol > 0 and magnitude <= NEAR_SINGULAR_FACTOR * tol:
            near_singular.append(i)
            warnings.warn(
                f"{matrix_name} is nearly singular: pivot {magnitude:.3g} in "
                f"column {i} is within {NEAR_SINGULAR_FACTOR:g}x of its row "
                f"tolerance {tol:.3g}",
                RuntimeWarning,
                stacklevel=3,
            )

        if p != i:
            M.swap_rows(i, p)
            row_tol[[i, p]] = row_tol[[p, i]]
            permutation[i], permutation[p] = permutation[p], permutation[i]
            swaps += 1

        pivot = float(data[i, i])
        for j in range(i + 1, m):
            factor = data[j, i] / pivot
            if factor != 0:
                M.add_row_to_row(j, i, -factor)
            data[j, i] = 0.0
        pivots.append(pivot)

    return pivots, swaps, permutation, near_singular


def _back_substitute(M: Matrix, n_pivots: int) -> None:
    """Normalize each pivot to 1 and clear the entries above it, in place."""
    data = M._data
    for i in range(n_pivots - 1, -1, -1):
        M.divide_row(i, data[i, i])
        data[i, i] = 1.0
        for r in range(i):
            factor = data[r, i]
            if factor != 0:
                M.add_row_to_row(r, i, -factor)
            data[r, i] = 0.0


def eliminate(
    M: Matrix,
    *,
    tol: float | None = None,
    reduce: bool = True,
    matrix_name: str = 'A',
) -> EliminationResult:
    """
    Gaussian elimination with partial pivoting on a copy of M.

    Args:
        M: Working matrix (m x n, m <= n); the left m x m block is the
            coefficient block
        tol: Absolute pivot tolerance applied to every row. Defaults to a
            per-row tolerance m * eps * max|row of the coefficient block|;
            pass 0.0 to reject only exact zeros.
        reduce: If True, continue to reduced row-echelon form
        matrix_name: Name used in error messages

    Returns:
        EliminationResult; M itself is not modified

    Raises:
        ShapeError: If M has more rows than columns
        SingularMatrixError: If a pivot column has no usable entry
    """
    m, n = M.dims()
    if m > n:
        raise ShapeError(
            f"{matrix_name}: elimination needs rows <= columns, got {m}x{n}",
            actual=(m, n),
            expected='rows <= columns',
        )
    if tol is None:
        row_tol = pivot_tolerance(M._data[:, :m])
    else:
        row_tol = np.full(m, float(tol), dtype=np.float64)

    work = M.copy()
    pivots, swaps, permutation, near_singular = _forward_eliminate(
        work, m, row_tol, matrix_name
    )
    if reduce:
        _back_substitute(work, m)

    return EliminationResult(
        reduced=work,
        pivots=tuple(pivots),
        row_swaps=swaps,
        permutation=tuple(permutation),
        tolerances=tuple(float(t) for t in row_tol),
        near_singular_columns=tuple(near_singular),
    )


def solve_with_details(
    A: Matrix,
    b: Vector,
    *,
    tol: float | None = None,
) -> tuple[Vector, EliminationResult]:
    """
    Solve A x = b, also returning the elimination record.

    See solve() for the contract.
    """
    m, n = A.dims()
    if m > n:
        raise ShapeError(
            f"A: solve needs rows <= columns, got {m}x{n}",
            actual=(m, n),
            expected='rows <= columns',
        )
    if len(b) != m:
        raise DimensionError(
            f"b: right-hand side has length {len(b)}, A has {m} rows",
            actual=len(b),
            expected=m,
        )

    # Columns m..n-1 of A become free variables fixed at zero
    augmented = Matrix._wrap(A._data[:, :m]).join(b.column_matrix())
    result = eliminate(augmented, tol=tol, reduce=True)

    x = np.zeros(n, dtype=np.float64)
    x[:m] = result.reduced._data[:, -1]
    return Vector._wrap(x), result


def solve(A: Matrix, b: Vector, *, tol: float | None = None) -> Vector:
    """
    Solve the linear system A x = b.

    For square A this is the unique solution. For m < n the left m x m
    block of A must be nonsingular; the remaining n - m variables are set
    to zero (the basic solution).

    Args:
        A: Coefficient matrix (m x n, m <= n)
        b: Right-hand side of length m
        tol: Pivot tolerance, see eliminate()

    Returns:
        Solution vector of length n

    Raises:
        ShapeError: If A has more rows than columns
        DimensionError: If len(b) != m
        SingularMatrixError: If no unique solution exists
    """
    x, _ = solve_with_details(A, b, tol=tol)
    return x


def inverse_with_details(
    A: Matrix,
    *,
    tol: float | None = None,
) -> tuple[Matrix, EliminationResult]:
    """Inverse of A together with the elimination record."""
    check_square(A.dims(), 'A')
    m = A.n_rows
    augmented = A.join(Matrix.identity(m))
    result = eliminate(augmented, tol=tol, reduce=True)
    return Matrix._wrap(result.reduced._data[:, m:].copy()), result


def inverse(A: Matrix, *, tol: float | None = None) -> Matrix:
    """
    Inverse of a square matrix by Gauss-Jordan elimination on [A | I].

    Raises:
        ShapeError: If A is not square
        SingularMatrixError: If A has no inverse
    """
    inv, _ = inverse_with_details(A, tol=tol)
    return inv


def elimination_determinant(A: Matrix) -> float:
    """
    Determinant as the signed product of the elimination pivots.

    O(k^3). Only exact zero pivots are treated as singular, in which
    case the determinant is 0.0.
    """
    try:
        result = eliminate(A, tol=0.0, reduce=False)
    except SingularMatrixError:
        return 0.0
    return result.determinant_sign * float(np.prod(result.pivots))


def row_echelon(M: Matrix, *, tol: float | None = None) -> Matrix:
    """Row-echelon form of an m x n working matrix (m <= n)."""
    return eliminate(M, tol=tol, reduce=False).reduced


def reduced_row_echelon(M: Matrix, *, tol: float | None = None) -> Matrix:
    """Reduced row-echelon form of an m x n working matrix (m <= n)."""
    return eliminate(M, tol=tol, reduce=True).reduced
