"""
Numerical precision constants and utilities.

Provides machine epsilon, the pivot tolerance used by the elimination
engine, and closeness checks used by Matrix.approx and Vector.approx.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Default tolerance for numerical comparisons (relative)
DEFAULT_RTOL: float = 1e-12

# Default tolerance for considering values as zero (absolute)
DEFAULT_ATOL: float = 1e-14

# Accepted pivots below this multiple of the tolerance trigger a warning
NEAR_SINGULAR_FACTOR: float = 100.0


def pivot_tolerance(A: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Per-row magnitudes below which an elimination pivot counts as zero.

    Row r gets max(m, n) * eps * max|A[r, :]|, so the test is relative to
    the scale of the equation the pivot comes from. Rescaling a row
    rescales its tolerance with it, and a badly scaled but nonsingular
    matrix is not mistaken for a singular one. An all-zero row gets 0.0,
    so only an exact zero is rejected there.

    Args:
        A: Coefficient matrix (m x n), as given to the elimination

    Returns:
        Array of m absolute tolerances, one per row of A
    """
    m = A.shape[0]
    if A.size == 0:
        return np.zeros(m, dtype=np.float64)
    return max(A.shape) * EPSILON_64 * np.max(np.abs(A), axis=1)


def is_close(
    a: float | NDArray[np.floating[Any]],
    b: float | NDArray[np.floating[Any]],
    rtol: float = DEFAULT_RTOL,
    atol: float = DEFAULT_ATOL
) -> bool | NDArray[np.bool_]:
    """
    Check if values are numerically close.

    Uses the formula: |a - b| <= atol + rtol * |b|

    Args:
        a: First value(s)
        b: Second value(s)
        rtol: Relative tolerance
        atol: Absolute tolerance

    Returns:
        Boolean or boolean array indicating closeness
    """
    return np.abs(a - b) <= atol + rtol * np.abs(b)


def condition_number(A: NDArray[np.floating[Any]]) -> float:
    """
    Compute condition number of a matrix using SVD.

    Args:
        A: Input matrix

    Returns:
        Condition number (ratio of largest to smallest singular value)
        Returns inf if matrix is singular.
    """
    s = np.linalg.svd(A, compute_uv=False)
    if s[-1] == 0:
        return np.inf
    return float(s[0] / s[-1])
