"""
Dense linear algebra.

Matrices of float64 with owned storage, elementary arithmetic, optimal
chain multiplication, elimination-based solve and inverse, determinants
and integer powers.

Public API:
    Matrix, Vector            - the data types
    multiply(A, B)            - pairwise product
    multiply_chain(*Ms)       - product of a chain in the cheapest order
    solve(A, b), inverse(A)   - Gaussian elimination with partial pivoting
    determinant(A)            - cofactor expansion or elimination
    matrix_power(A, p)        - binary exponentiation, negative p inverts
    linsolve, invert, chain_product - the same with timing and diagnostics
"""

from pymatrix.linalg.vector import Vector
from pymatrix.linalg.matrix import Matrix, add, subtract, transpose, delta
from pymatrix.linalg._multiply import multiply
from pymatrix.linalg._chain import (
    ChainOrder,
    chain_order,
    plan_chain,
    multiply_chain,
    naive_chain_cost,
)
from pymatrix.linalg._elimination import (
    EliminationResult,
    eliminate,
    solve,
    inverse,
    row_echelon,
    reduced_row_echelon,
)
from pymatrix.linalg._determinant import determinant, minor, cofactor
from pymatrix.linalg._power import matrix_power
from pymatrix.linalg.design import LinearSystemDesign, ChainDesign
from pymatrix.linalg.solution import (
    EliminationParams,
    EliminationSolution,
    ChainParams,
    ChainSolution,
)
from pymatrix.linalg.solvers import linsolve, invert, chain_product

__all__ = [
    "Vector",
    "Matrix",
    "add",
    "subtract",
    "transpose",
    "delta",
    "multiply",
    "ChainOrder",
    "chain_order",
    "plan_chain",
    "multiply_chain",
    "naive_chain_cost",
    "EliminationResult",
    "eliminate",
    "solve",
    "inverse",
    "row_echelon",
    "reduced_row_echelon",
    "determinant",
    "minor",
    "cofactor",
    "matrix_power",
    "LinearSystemDesign",
    "ChainDesign",
    "EliminationParams",
    "EliminationSolution",
    "ChainParams",
    "ChainSolution",
    "linsolve",
    "invert",
    "chain_product",
]
