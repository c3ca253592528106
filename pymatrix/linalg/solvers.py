"""
Solver dispatch for the linalg pipeline.

Result-returning entry points with timing and diagnostics:
    linsolve(A, b)        - solve A x = b by elimination
    invert(A)             - inverse by Gauss-Jordan elimination
    chain_product(*Ms)    - optimal-order product of a matrix chain

The plain kernels (solve, inverse, multiply_chain, determinant,
matrix_power) return bare matrices and vectors.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from pymatrix.linalg.design import LinearSystemDesign, ChainDesign
from pymatrix.linalg.solution import EliminationSolution, ChainSolution
from pymatrix.linalg.matrix import Matrix
from pymatrix.linalg.vector import Vector
from pymatrix.linalg.backends.cpu import CPUEliminationBackend, CPUChainBackend


def linsolve(
    A: Matrix | ArrayLike | LinearSystemDesign,
    b: Vector | ArrayLike | None = None,
    *,
    tol: float | None = None,
) -> EliminationSolution:
    """
    Solve the linear system A x = b by Gaussian elimination.

    Parameters
    ----------
    A : Matrix, array-like or LinearSystemDesign
        Coefficient matrix (m x n, m <= n), or a ready design.
    b : Vector or array-like
        Right-hand side of length m. Required unless A is a design.
    tol : float, optional
        Pivot tolerance applied to every row. Default scales each row
        by its largest entry and machine epsilon.

    Returns
    -------
    EliminationSolution with solution, pivots, row swaps, timing, and
    (for square A) determinant and condition number.

    Raises
    ------
    SingularMatrixError
        If A has no unique solution.
    """
    if isinstance(A, LinearSystemDesign):
        design = A
    else:
        if b is None:
            raise TypeError("linsolve() missing required right-hand side 'b'")
        design = LinearSystemDesign.from_operands(A, b)

    result = CPUEliminationBackend(tol=tol).solve(design)
    return EliminationSolution(_result=result, _design=design)


def invert(
    A: Matrix | ArrayLike,
    *,
    tol: float | None = None,
) -> EliminationSolution:
    """
    Invert a square matrix by Gauss-Jordan elimination on [A | I].

    Parameters
    ----------
    A : Matrix or array-like
        Square matrix.
    tol : float, optional
        Pivot tolerance.

    Returns
    -------
    EliminationSolution with inverse populated.

    Raises
    ------
    ShapeError
        If A is not square.
    SingularMatrixError
        If A is singular.
    """
    design = LinearSystemDesign.from_operands(A)
    result = CPUEliminationBackend(tol=tol).solve(design)
    return EliminationSolution(_result=result, _design=design)


def chain_product(*matrices: Matrix | ArrayLike) -> ChainSolution:
    """
    Multiply a chain of matrices in the association with the fewest
    scalar multiplications.

    Returns
    -------
    ChainSolution with the product, the planning table, and the cost of
    the chosen order versus a left-to-right product.
    """
    design = ChainDesign.from_matrices(*matrices)
    result = CPUChainBackend().solve(design)
    return ChainSolution(_result=result, _design=design)
