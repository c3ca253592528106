"""
Input validation utilities for pymatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pymatrix.core.exceptions import (
    ValidationError,
    DimensionError,
    ShapeError,
    ConstructionError,
    IndexOutOfRangeError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating ragged rows, mixed types or
    non-numeric data) and non-numeric dtypes.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype (always a fresh copy)

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.array(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows, "
            f"mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype}, expected real data"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        ShapeError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise ShapeError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            actual=array.shape,
            expected=f"{ndim}D",
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_nonnegative_dims(m: int, n: int, name: str) -> None:
    """
    Verify requested dimensions are non-negative integers.

    Args:
        m: Requested row count
        n: Requested column count
        name: Parameter name for error messages

    Raises:
        ConstructionError: If either dimension is negative or not an integer
    """
    for label, value in (('rows', m), ('columns', n)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ConstructionError(
                f"{name}: {label} must be an integer, got {type(value).__name__}"
            )
        if value < 0:
            raise ConstructionError(
                f"{name}: {label} must be non-negative, got {value}"
            )


def check_index(index: int, bound: int, axis: str, name: str) -> int:
    """
    Verify an index lies in [0, bound).

    Negative indices are rejected rather than wrapped: a row or column
    index is a position, not a Python slice offset.

    Args:
        index: Index to check
        bound: Exclusive upper bound
        axis: 'row' or 'column', used in the message
        name: Parameter name for error messages

    Returns:
        The index as a plain int

    Raises:
        IndexOutOfRangeError: If index is outside [0, bound)
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise IndexOutOfRangeError(
            f"{name}: {axis} index must be an integer, got {type(index).__name__}",
            index=None,
            bound=bound,
            axis=axis,
        )
    if not 0 <= index < bound:
        raise IndexOutOfRangeError(
            f"{name}: {axis} index {index} out of range [0, {bound})",
            index=int(index),
            bound=bound,
            axis=axis,
        )
    return int(index)


def check_square(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix shape is square.

    Args:
        shape: (rows, columns)
        name: Parameter name for error messages

    Raises:
        ShapeError: If rows != columns
    """
    m, n = shape
    if m != n:
        raise ShapeError(
            f"{name}: must be square, got {m}x{n}",
            actual=shape,
            expected='square',
        )


def check_nonempty(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix shape has at least one entry.

    Raises:
        ShapeError: If either dimension is zero
    """
    m, n = shape
    if m == 0 or n == 0:
        raise ShapeError(
            f"{name}: must be non-empty, got {m}x{n}",
            actual=shape,
            expected='non-empty',
        )


def check_same_shape(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
    names: tuple[str, str],
) -> None:
    """
    Verify two matrix shapes are identical.

    Args:
        shape_a: Shape of first operand
        shape_b: Shape of second operand
        names: Parameter names for error messages

    Raises:
        DimensionError: If shapes differ
    """
    if shape_a != shape_b:
        raise DimensionError(
            f"Dimension mismatch: {names[0]} is {shape_a[0]}x{shape_a[1]}, "
            f"{names[1]} is {shape_b[0]}x{shape_b[1]}",
            actual=shape_b,
            expected=shape_a,
        )


def check_conformable(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
    names: tuple[str, str],
) -> None:
    """
    Verify two matrices can be multiplied (columns of a == rows of b).

    Args:
        shape_a: Shape of left operand
        shape_b: Shape of right operand
        names: Parameter names for error messages

    Raises:
        DimensionError: If the inner dimensions differ
    """
    if shape_a[1] != shape_b[0]:
        raise DimensionError(
            f"Cannot multiply {names[0]} ({shape_a[0]}x{shape_a[1]}) by "
            f"{names[1]} ({shape_b[0]}x{shape_b[1]}): "
            f"{shape_a[1]} columns != {shape_b[0]} rows",
            actual=shape_b[0],
            expected=shape_a[1],
        )
