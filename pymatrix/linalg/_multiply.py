"""
Pairwise matrix product.

The O(m*p*n) product of two matrices, the primitive the chain planner
composes. NumPy's matmul computes exactly sum_k A(i, k) * B(k, j) per
entry, so it stands in for the triple loop.
"""

from __future__ import annotations

import numpy as np

from pymatrix.core.validation import check_conformable
from pymatrix.linalg.matrix import Matrix


def multiply(A: Matrix, B: Matrix) -> Matrix:
    """
    Product A @ B of an m x p and a p x n matrix.

    Args:
        A: Left operand (m x p)
        B: Right operand (p x n)

    Returns:
        New m x n matrix with entry (i, j) = sum_k A(i, k) * B(k, j)

    Raises:
        DimensionError: If A's column count != B's row count
    """
    check_conformable(A.dims(), B.dims(), ('A', 'B'))
    # matmul of (m, 0) @ (0, n) yields zeros, matching the empty sum
    return Matrix._wrap(np.matmul(A._data, B._data))


def multiplication_cost(m: int, p: int, n: int) -> int:
    """Scalar multiplications in the product of an m x p and a p x n matrix."""
    return m * p * n
