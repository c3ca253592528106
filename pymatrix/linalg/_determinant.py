"""
Determinants of square matrices.

Two methods:
    'cofactor'    closed forms for 1x1..3x3, then recursive Laplace
                  expansion along row 0 over minors. O(k!), exact for
                  small integer matrices.
    'elimination' signed product of Gaussian-elimination pivots. O(k^3).

Both agree up to floating-point rounding.
"""

from __future__ import annotations

from typing import Literal
import warnings

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import check_index, check_nonempty, check_square
from pymatrix.linalg.matrix import Matrix
from pymatrix.linalg._elimination import elimination_determinant


DeterminantMethod = Literal['cofactor', 'elimination']

# Cofactor expansion beyond this size warns: 11! terms is already ~4e7
COFACTOR_WARN_SIZE = 10


def minor(A: Matrix, i: int, j: int) -> Matrix:
    """Submatrix of A with row i and column j removed."""
    return A.remove_row(i).remove_column(j)


def cofactor(A: Matrix, i: int, j: int) -> float:
    """(-1)^(i+j) * det(minor(A, i, j))."""
    check_square(A.dims(), 'A')
    i = check_index(i, A.n_rows, 'row', 'cofactor')
    j = check_index(j, A.n_cols, 'column', 'cofactor')
    sign = -1.0 if (i + j) % 2 else 1.0
    return sign * _cofactor_determinant(minor(A, i, j))


def _cofactor_determinant(A: Matrix) -> float:
    a = A._data
    k = a.shape[0]
    if k == 1:
        return float(a[0, 0])
    if k == 2:
        return float(a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0])
    if k == 3:
        return float(
            a[0, 0] * (a[1, 1] * a[2, 2] - a[1, 2] * a[2, 1])
            - a[0, 1] * (a[1, 0] * a[2, 2] - a[1, 2] * a[2, 0])
            + a[0, 2] * (a[1, 0] * a[2, 1] - a[1, 1] * a[2, 0])
        )

    rest = A.remove_row(0)
    total = 0.0
    sign = 1.0
    for j in range(k):
        if a[0, j] != 0:
            total += sign * float(a[0, j]) * _cofactor_determinant(rest.remove_column(j))
        sign = -sign
    return total


def determinant(A: Matrix, method: DeterminantMethod = 'cofactor') -> float:
    """
    Determinant of a square, non-empty matrix.

    Parameters
    ----------
    A : Matrix
        Square matrix (k x k, k >= 1).
    method : str
        'cofactor' (default) or 'elimination'.

    Returns
    -------
    float

    Raises
    ------
    ShapeError
        If A is not square or is empty.
    ValidationError
        If method is unknown.
    """
    check_square(A.dims(), 'A')
    check_nonempty(A.dims(), 'A')

    if method == 'elimination':
        return elimination_determinant(A)
    if method != 'cofactor':
        raise ValidationError(
            f"Unknown determinant method: {method!r}. "
            f"Must be 'cofactor' or 'elimination'."
        )

    k = A.n_rows
    if k > COFACTOR_WARN_SIZE:
        warnings.warn(
            f"Cofactor expansion of a {k}x{k} matrix takes O({k}!) work; "
            f"use method='elimination' for O(k^3)",
            RuntimeWarning,
            stacklevel=2,
        )
    return _cofactor_determinant(A)
