"""
Tests for input validation utilities.

Validates every function in core/validation.py.
"""

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    ConstructionError,
    DimensionError,
    IndexOutOfRangeError,
    ShapeError,
    ValidationError,
)
from pymatrix.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_conformable,
    check_finite,
    check_index,
    check_nonempty,
    check_nonnegative_dims,
    check_same_shape,
    check_square,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "X")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_returns_copy(self):
        arr = np.array([1.0, 2.0])
        result = check_array(arr, "X")
        result[0] = 99.0
        assert arr[0] == 1.0

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "X")

    def test_rejects_object_dtype(self):
        with pytest.raises(ValidationError, match="X"):
            check_array([None, 1], "X")

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array([1 + 2j], "X")


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "X")

    def test_nan_reported(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan]), "X")

    def test_inf_reported(self):
        with pytest.raises(ValidationError, match="1 Inf"):
            check_finite(np.array([np.inf, 2.0]), "X")


class TestCheckNdim:

    def test_2d_passes(self):
        check_2d(np.zeros((2, 3)), "X")

    def test_1d_rejected_as_2d(self):
        with pytest.raises(ShapeError, match="expected 2D"):
            check_2d(np.zeros(3), "X")

    def test_2d_rejected_as_1d(self):
        with pytest.raises(ShapeError, match="expected 1D"):
            check_1d(np.zeros((2, 2)), "X")


# ═══════════════════════════════════════════════════════════════════════
# Dimensions and indices
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNonnegativeDims:

    def test_zero_allowed(self):
        check_nonnegative_dims(0, 0, "M")

    @pytest.mark.parametrize("m,n", [(-1, 2), (2, -1)])
    def test_negative_rejected(self, m, n):
        with pytest.raises(ConstructionError, match="non-negative"):
            check_nonnegative_dims(m, n, "M")

    def test_float_rejected(self):
        with pytest.raises(ConstructionError, match="integer"):
            check_nonnegative_dims(2.0, 2, "M")


class TestCheckIndex:

    def test_in_range(self):
        assert check_index(np.int64(1), 3, 'row', "M") == 1

    @pytest.mark.parametrize("i", [-1, 3, 10])
    def test_out_of_range(self, i):
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            check_index(i, 3, 'row', "M")
        assert exc_info.value.index == i
        assert exc_info.value.bound == 3
        assert exc_info.value.axis == 'row'

    def test_empty_axis_rejects_zero(self):
        with pytest.raises(IndexOutOfRangeError):
            check_index(0, 0, 'column', "M")

    def test_non_integer_rejected(self):
        with pytest.raises(IndexOutOfRangeError, match="integer"):
            check_index(1.5, 3, 'row', "M")


class TestShapeChecks:

    def test_square_passes(self):
        check_square((3, 3), "A")

    def test_non_square_rejected(self):
        with pytest.raises(ShapeError, match="3x4"):
            check_square((3, 4), "A")

    def test_nonempty(self):
        with pytest.raises(ShapeError, match="non-empty"):
            check_nonempty((0, 0), "A")

    def test_same_shape(self):
        check_same_shape((2, 3), (2, 3), ("A", "B"))
        with pytest.raises(DimensionError, match="A is 2x3, B is 3x2"):
            check_same_shape((2, 3), (3, 2), ("A", "B"))

    def test_conformable(self):
        check_conformable((2, 3), (3, 5), ("A", "B"))
        with pytest.raises(DimensionError, match="3 columns != 2 rows"):
            check_conformable((2, 3), (2, 3), ("A", "B"))
