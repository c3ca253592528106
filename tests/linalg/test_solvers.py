"""
Tests for the Result-returning solver entry points.

Covers linsolve(), invert() and chain_product() end to end: designs,
backends, solution wrappers, diagnostics and timing.
"""

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    DimensionError,
    ShapeError,
    SingularMatrixError,
    ValidationError,
)
from pymatrix.core.protocols import Backend
from pymatrix.linalg import (
    ChainDesign,
    LinearSystemDesign,
    Matrix,
    Vector,
    chain_product,
    invert,
    linsolve,
)
from pymatrix.linalg.backends import CPUChainBackend, CPUEliminationBackend


# ═══════════════════════════════════════════════════════════════════════
# Designs
# ═══════════════════════════════════════════════════════════════════════


class TestLinearSystemDesign:

    def test_solve_design(self, a22):
        design = LinearSystemDesign.from_operands(a22, Vector([5, 6]))
        assert design.m == 2
        assert design.n == 2
        assert not design.is_inverse
        assert design.metadata == {'m': 2, 'n': 2, 'kind': 'solve'}

    def test_inverse_design(self, a22):
        design = LinearSystemDesign.from_operands(a22)
        assert design.is_inverse
        assert design.b is None

    def test_accepts_array_likes(self):
        design = LinearSystemDesign.from_operands([[1, 2], [3, 4]], [5, 6])
        assert design.A == Matrix([[1, 2], [3, 4]])
        assert design.b == Vector([5, 6])

    def test_operands_are_copied(self, a22):
        design = LinearSystemDesign.from_operands(a22)
        a22.set(0, 0, 100.0)
        assert design.A[0, 0] == 1.0

    def test_inverse_needs_square(self):
        with pytest.raises(ShapeError, match="square"):
            LinearSystemDesign.from_operands(Matrix.zeros(2, 3))

    def test_solve_needs_wide_or_square(self):
        with pytest.raises(ShapeError):
            LinearSystemDesign.from_operands(Matrix.zeros(3, 2), Vector([1, 2, 3]))

    def test_rhs_length(self, a22):
        with pytest.raises(DimensionError):
            LinearSystemDesign.from_operands(a22, Vector([1]))

    def test_rejects_nan(self):
        with pytest.raises(ValidationError, match="NaN"):
            LinearSystemDesign.from_operands([[1.0, np.nan], [0.0, 1.0]])

    def test_repr(self, a22):
        design = LinearSystemDesign.from_operands(a22)
        assert repr(design) == "LinearSystemDesign(m=2, n=2, kind=inverse)"


class TestChainDesign:

    def test_dims(self):
        design = ChainDesign.from_matrices(
            Matrix.zeros(2, 3), Matrix.zeros(3, 4), Matrix.zeros(4, 1)
        )
        assert design.dims == (2, 3, 4, 1)
        assert design.n_matrices == 3

    def test_empty(self):
        with pytest.raises(ValidationError):
            ChainDesign.from_matrices()

    def test_not_conformable(self):
        with pytest.raises(DimensionError):
            ChainDesign.from_matrices(Matrix.zeros(2, 3), Matrix.zeros(2, 3))


# ═══════════════════════════════════════════════════════════════════════
# Backends
# ═══════════════════════════════════════════════════════════════════════


class TestBackends:

    def test_protocol_conformance(self):
        assert isinstance(CPUEliminationBackend(), Backend)
        assert isinstance(CPUChainBackend(), Backend)

    def test_names(self):
        assert CPUEliminationBackend().name == 'cpu_gauss'
        assert CPUChainBackend().name == 'cpu_chain'

    def test_elimination_backend_result(self, a22):
        design = LinearSystemDesign.from_operands(a22, Vector([5, 6]))
        result = CPUEliminationBackend().solve(design)
        assert result.backend_name == 'cpu_gauss'
        assert result.params.inverse is None
        np.testing.assert_allclose(result.params.solution.to_numpy(), [-4.0, 4.5])
        assert set(result.timing) >= {'total_seconds', 'elimination', 'diagnostics'}


# ═══════════════════════════════════════════════════════════════════════
# linsolve()
# ═══════════════════════════════════════════════════════════════════════


class TestLinsolve:

    def test_basic(self, a22):
        sol = linsolve(a22, Vector([5, 6]))
        np.testing.assert_allclose(sol.solution.to_numpy(), [-4.0, 4.5], rtol=1e-12)
        assert sol.inverse is None
        assert sol.backend_name == 'cpu_gauss'
        assert sol.warnings == ()

    def test_info(self, a22):
        sol = linsolve(a22, [5, 6])
        assert sol.info['method'] == 'gauss_partial_pivot'
        assert sol.info['rank'] == 2
        assert sol.info['row_swaps'] == 1
        assert sol.info['tolerance_tier'] == 'cpu_fp64'
        assert sol.determinant == pytest.approx(-2.0)
        assert sol.info['condition_number'] == pytest.approx(
            np.linalg.cond(a22.to_numpy())
        )

    def test_pivots_and_permutation(self, a22):
        sol = linsolve(a22, [5, 6])
        assert sol.pivots[0] == 3.0
        assert sol.permutation == (1, 0)
        assert sol.row_swaps == 1

    def test_reduced_has_solution_column(self, a22):
        sol = linsolve(a22, [5, 6])
        R = sol.reduced.to_numpy()
        np.testing.assert_allclose(R[:, :2], np.eye(2), atol=1e-15)
        np.testing.assert_allclose(R[:, 2], sol.solution.to_numpy())

    def test_from_design(self, a22):
        design = LinearSystemDesign.from_operands(a22, [5, 6])
        sol = linsolve(design)
        assert sol.solution.approx(Vector([-4.0, 4.5]))

    def test_missing_rhs(self, a22):
        with pytest.raises(TypeError, match="'b'"):
            linsolve(a22)

    def test_underdetermined_has_no_determinant(self):
        sol = linsolve([[1, 0, 3], [0, 2, 4]], [1, 4])
        assert sol.determinant is None
        assert 'condition_number' not in sol.info
        np.testing.assert_allclose(sol.solution.to_numpy(), [1.0, 2.0, 0.0])

    def test_singular(self):
        with pytest.raises(SingularMatrixError):
            linsolve([[1, 2], [2, 4]], [1, 2])

    def test_ill_conditioned_warning(self):
        A = Matrix([[1.0, 1.0], [1.0, 1.0 + 1e-10]])
        sol = linsolve(A, [2.0, 2.0])
        assert sol.info['condition_number'] > 1e8
        assert sol.info['tolerance_tier'] == 'cpu_fp64_ill_conditioned'
        assert sol._result.has_warning("ill-conditioned")

    def test_near_singular_pivot_warning(self):
        eps = np.finfo(np.float64).eps
        A = Matrix([[1.0, 1.0], [1.0, 1.0 + 50 * eps]])
        with pytest.warns(RuntimeWarning, match="nearly singular"):
            sol = linsolve(A, [2.0, 2.0])
        assert sol._result.has_warning("nearly singular")

    def test_pivot_tolerances_reported_per_row(self):
        sol = linsolve(Matrix([[1e10, 0.0], [0.0, 1e-7]]), [1e10, 1e-7])
        tolerances = sol.info['pivot_tolerances']
        assert len(tolerances) == 2
        assert tolerances[0] > tolerances[1]
        np.testing.assert_allclose(sol.solution.to_numpy(), [1.0, 1.0])

    def test_timing(self, well_conditioned):
        sol = linsolve(well_conditioned, np.ones(5))
        assert sol.timing['total_seconds'] >= 0.0
        assert 'elimination' in sol.timing

    def test_summary(self, a22):
        text = linsolve(a22, [5, 6]).summary()
        assert "Linear system by Gaussian elimination" in text
        assert "A: 2x2" in text
        assert "row swaps: 1" in text
        assert "determinant: -2" in text
        assert "x: [" in text

    def test_repr(self, a22):
        assert repr(linsolve(a22, [5, 6])) == (
            "EliminationSolution(kind=solve, m=2, n=2, row_swaps=1)"
        )


# ═══════════════════════════════════════════════════════════════════════
# invert()
# ═══════════════════════════════════════════════════════════════════════


class TestInvert:

    def test_basic(self, a22):
        sol = invert(a22)
        assert sol.solution is None
        assert sol.inverse.approx(Matrix([[-2.0, 1.0], [1.5, -0.5]]))

    def test_product_is_identity(self, well_conditioned):
        inv = invert(well_conditioned).inverse
        assert (well_conditioned @ inv).approx(Matrix.identity(5), atol=1e-12)

    def test_not_square(self):
        with pytest.raises(ShapeError):
            invert(Matrix.zeros(2, 3))

    def test_singular(self):
        with pytest.raises(SingularMatrixError):
            invert(Matrix.zeros(3, 3))

    def test_summary(self, a22):
        text = invert(a22).summary()
        assert text.startswith("Inverse by Gaussian elimination")
        assert "inverse: [[" in text

    def test_empty(self):
        sol = invert(Matrix())
        assert sol.inverse.dims() == (0, 0)
        assert sol.determinant is None


# ═══════════════════════════════════════════════════════════════════════
# chain_product()
# ═══════════════════════════════════════════════════════════════════════


class TestChainProduct:

    def test_counting_fill_example(self, counter):
        A = Matrix.generate(2, 2, counter())
        B = Matrix.generate(2, 3, counter())
        C = Matrix.generate(3, 1, counter())
        sol = chain_product(A, B, C)
        assert sol.product == Matrix([[78], [170]])
        assert sol.backend_name == 'cpu_chain'
        assert sol.info['dims'] == (2, 2, 3, 1)

    def test_cost_versus_naive(self):
        sol = chain_product(np.ones((10, 100)), np.ones((100, 5)), np.ones((5, 50)))
        assert sol.cost == 7500
        assert sol.naive_cost == 7500
        assert sol.parenthesization == "((A0 A1) A2)"

    def test_right_association_saves_work(self):
        sol = chain_product(np.ones((50, 5)), np.ones((5, 100)), np.ones((100, 10)))
        assert sol.cost == 5 * 100 * 10 + 50 * 5 * 10
        assert sol.naive_cost == 50 * 5 * 100 + 50 * 100 * 10
        assert sol.cost < sol.naive_cost
        assert sol.parenthesization == "(A0 (A1 A2))"
        assert sol.product == Matrix(np.full((50, 10), 500.0))

    def test_single_matrix(self, a22):
        sol = chain_product(a22)
        assert sol.product == a22
        assert sol.order is None
        assert sol.cost == 0
        assert sol.parenthesization == "A0"

    def test_two_matrices(self, a22):
        sol = chain_product(a22, a22)
        assert sol.product == a22 @ a22
        assert sol.cost == 8
        assert sol.parenthesization == "(A0 A1)"

    def test_timing_sections(self, rng):
        mats = [rng.standard_normal((3, 3)) for _ in range(4)]
        sol = chain_product(*mats)
        assert {'plan', 'multiply'} <= set(sol.timing)

    def test_summary(self, a22):
        text = chain_product(a22, a22, a22).summary()
        assert "Matrix chain product" in text
        assert "dims: 2 x 2 x 2 x 2" in text
        assert "scalar multiplications: 16 (left-to-right: 16)" in text

    def test_repr(self, a22):
        assert repr(chain_product(a22, a22, a22)) == (
            "ChainSolution(n_matrices=3, product=2x2, cost=16)"
        )
