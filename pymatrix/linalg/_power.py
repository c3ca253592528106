"""
Integer powers of square matrices by binary exponentiation.
"""

from __future__ import annotations

import numpy as np

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import check_square
from pymatrix.linalg.matrix import Matrix
from pymatrix.linalg._multiply import multiply
from pymatrix.linalg._elimination import inverse


def matrix_power(A: Matrix, p: int) -> Matrix:
    """
    A raised to an integer power.

    p == 0 gives the identity, p == 1 a copy, p > 1 is computed by
    repeated squaring in O(log p) products, and negative powers invert
    A^|p|.

    Args:
        A: Square matrix
        p: Integer exponent

    Returns:
        New matrix A^p

    Raises:
        ShapeError: If A is not square
        ValidationError: If p is not an integer
        SingularMatrixError: If p < 0 and A is singular
    """
    if isinstance(p, bool) or not isinstance(p, (int, np.integer)):
        raise ValidationError(f"p: exponent must be an integer, got {type(p).__name__}")
    check_square(A.dims(), 'A')
    p = int(p)

    if p == 0:
        return Matrix.identity(A.n_rows)
    if p == 1:
        return A.copy()
    if p == -1:
        return inverse(A)
    if p < -1:
        return inverse(matrix_power(A, -p))

    result = Matrix.identity(A.n_rows)
    base = A.copy()
    while p > 0:
        if p & 1:
            result = multiply(result, base)
        p >>= 1
        if p:
            base = multiply(base, base)
    return result
