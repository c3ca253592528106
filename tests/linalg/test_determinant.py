"""
Tests for determinants, minors and cofactors.
"""

import warnings

import numpy as np
import pytest
from scipy import linalg as sp_linalg

from pymatrix.core.exceptions import (
    IndexOutOfRangeError,
    ShapeError,
    ValidationError,
)
from pymatrix.linalg import Matrix, cofactor, determinant, minor
from pymatrix.linalg._determinant import COFACTOR_WARN_SIZE


class TestClosedForms:

    def test_one_by_one(self):
        assert determinant(Matrix([[-7.5]])) == -7.5

    def test_two_by_two(self, a22):
        assert determinant(a22) == -2.0

    def test_three_by_three(self):
        A = Matrix([[2, -3, 1], [2, 0, -1], [1, 4, 5]])
        assert determinant(A) == 49.0

    def test_identity(self):
        for k in range(1, 7):
            assert determinant(Matrix.identity(k)) == 1.0


class TestCofactorExpansion:

    def test_four_by_four(self):
        A = Matrix([
            [1, 0, 2, -1],
            [3, 0, 0, 5],
            [2, 1, 4, -3],
            [1, 0, 5, 0],
        ])
        assert determinant(A) == 30.0

    def test_singular_is_zero(self):
        A = Matrix.generate(5, 5, lambda i, j: i + j)
        assert determinant(A) == 0.0

    def test_matches_scipy(self, rng):
        for k in range(4, 8):
            a = rng.standard_normal((k, k))
            assert determinant(Matrix.from_array(a)) == pytest.approx(
                sp_linalg.det(a), rel=1e-10
            )

    def test_method_form(self, a22):
        assert a22.determinant() == determinant(a22)

    def test_input_unchanged(self, a22):
        determinant(a22)
        assert a22 == Matrix([[1, 2], [3, 4]])


class TestEliminationMethod:

    @pytest.mark.parametrize("k", [1, 2, 3, 5, 7])
    def test_agrees_with_cofactor(self, rng, k):
        A = Matrix.from_array(rng.standard_normal((k, k)))
        assert determinant(A, method='elimination') == pytest.approx(
            determinant(A, method='cofactor'), rel=1e-10
        )

    def test_row_swap_flips_sign(self):
        A = Matrix([[0, 1], [1, 0]])
        assert determinant(A, method='elimination') == -1.0

    def test_singular_is_zero(self):
        A = Matrix([[1, 2], [2, 4]])
        assert determinant(A, method='elimination') == 0.0

    def test_large_matrix_no_warning(self, rng):
        A = Matrix.from_array(rng.standard_normal((30, 30)))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            det = determinant(A, method='elimination')
        assert det == pytest.approx(sp_linalg.det(A.to_numpy()), rel=1e-8)

    def test_unknown_method(self, a22):
        with pytest.raises(ValidationError, match="Unknown determinant method"):
            determinant(a22, method='lu')


class TestShapeChecks:

    def test_not_square(self):
        A = Matrix([[7, 5, 0, 1], [0, 4, 3, 7], [3, 2, 0, 2]])
        with pytest.raises(ShapeError):
            determinant(A)
        with pytest.raises(ShapeError):
            determinant(A, method='elimination')

    def test_empty(self):
        with pytest.raises(ShapeError, match="non-empty"):
            determinant(Matrix())

    def test_cofactor_warns_above_threshold(self):
        k = COFACTOR_WARN_SIZE + 1
        # Diagonal: the expansion skips zero entries, so this stays fast
        A = Matrix.identity(k)
        with pytest.warns(RuntimeWarning, match="method='elimination'"):
            assert determinant(A) == 1.0


class TestMinorAndCofactor:

    def test_minor(self):
        A = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        assert minor(A, 1, 1) == Matrix([[1, 3], [7, 9]])

    def test_cofactor_signs(self, a22):
        assert cofactor(a22, 0, 0) == 4.0
        assert cofactor(a22, 0, 1) == -3.0
        assert cofactor(a22, 1, 0) == -2.0
        assert cofactor(a22, 1, 1) == 1.0

    def test_laplace_along_any_row(self, rng):
        A = Matrix.from_array(rng.integers(-5, 6, size=(4, 4)))
        det = determinant(A)
        for i in range(4):
            expansion = sum(A[i, j] * cofactor(A, i, j) for j in range(4))
            assert expansion == pytest.approx(det)

    def test_cofactor_out_of_range(self, a22):
        with pytest.raises(IndexOutOfRangeError):
            cofactor(a22, 2, 0)

    def test_adjugate_gives_inverse(self, well_conditioned):
        k = well_conditioned.n_rows
        adj = Matrix.generate(k, k, lambda i, j: cofactor(well_conditioned, j, i))
        inv = adj / determinant(well_conditioned)
        np.testing.assert_allclose(
            inv.to_numpy(), np.linalg.inv(well_conditioned.to_numpy()), rtol=1e-9
        )
