"""
Solution types for the linalg solvers.

Contains the parameter payloads and user-facing solution wrappers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from pymatrix.core.result import Result
from pymatrix.linalg.matrix import Matrix
from pymatrix.linalg.vector import Vector
from pymatrix.linalg._chain import ChainOrder

if TYPE_CHECKING:
    from pymatrix.linalg.design import LinearSystemDesign, ChainDesign


@dataclass(frozen=True)
class EliminationParams:
    """
    Parameter payload for solve/inverse by Gaussian elimination.

    Exactly one of solution and inverse is populated.
    """
    reduced: Matrix
    pivots: tuple[float, ...]
    row_swaps: int
    permutation: tuple[int, ...]
    solution: Vector | None = None
    inverse: Matrix | None = None


@dataclass(frozen=True)
class ChainParams:
    """
    Parameter payload for a chain product.

    order is None for chains of one or two matrices, which are evaluated
    without a planning table.
    """
    product: Matrix
    order: ChainOrder | None
    cost: int
    naive_cost: int


@dataclass
class EliminationSolution:
    """
    User-facing result of linsolve() or invert().

    Wraps Result[EliminationParams] and provides convenient accessors.
    """
    _result: Result[EliminationParams]
    _design: 'LinearSystemDesign'

    @property
    def solution(self) -> Vector | None:
        """x solving A x = b, or None for an inverse."""
        return self._result.params.solution

    @property
    def inverse(self) -> Matrix | None:
        """A^-1, or None for a solve."""
        return self._result.params.inverse

    @property
    def reduced(self) -> Matrix:
        """Augmented matrix in reduced row-echelon form."""
        return self._result.params.reduced

    @property
    def pivots(self) -> tuple[float, ...]:
        return self._result.params.pivots

    @property
    def row_swaps(self) -> int:
        return self._result.params.row_swaps

    @property
    def permutation(self) -> tuple[int, ...]:
        return self._result.params.permutation

    @property
    def determinant(self) -> float | None:
        """Signed product of pivots for square A, else None."""
        return self._result.info.get('determinant')

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        d = self._design
        kind = 'Inverse' if d.is_inverse else 'Linear system'
        lines = [
            f"{kind} by Gaussian elimination with partial pivoting",
            f"  A: {d.m}x{d.n}",
            f"  row swaps: {self.row_swaps}",
            f"  pivots: {' '.join(f'{p:.6g}' for p in self.pivots)}",
        ]
        if self.determinant is not None:
            lines.append(f"  determinant: {self.determinant:.6g}")
        cond = self.info.get('condition_number')
        if cond is not None:
            lines.append(f"  condition number: {cond:.6g}")
        if d.is_inverse:
            lines.append(f"  inverse: {self.inverse}")
        else:
            lines.append(f"  x: {self.solution}")
        for w in self.warnings:
            lines.append(f"  warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        d = self._design
        kind = 'inverse' if d.is_inverse else 'solve'
        return (
            f"EliminationSolution(kind={kind}, m={d.m}, n={d.n}, "
            f"row_swaps={self.row_swaps})"
        )


@dataclass
class ChainSolution:
    """
    User-facing result of chain_product().

    Wraps Result[ChainParams] and provides convenient accessors.
    """
    _result: Result[ChainParams]
    _design: 'ChainDesign'

    @property
    def product(self) -> Matrix:
        return self._result.params.product

    @property
    def order(self) -> ChainOrder | None:
        return self._result.params.order

    @property
    def cost(self) -> int:
        """Scalar multiplications spent on the chosen association."""
        return self._result.params.cost

    @property
    def naive_cost(self) -> int:
        """Scalar multiplications a left-to-right product would spend."""
        return self._result.params.naive_cost

    @property
    def parenthesization(self) -> str:
        n = self._design.n_matrices
        if self.order is not None:
            return self.order.parenthesize()
        if n == 1:
            return "A0"
        return "(A0 A1)"

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        d = self._design
        m, n = self.product.dims()
        lines = [
            "Matrix chain product",
            f"  matrices: {d.n_matrices}, dims: {' x '.join(str(x) for x in d.dims)}",
            f"  order: {self.parenthesization}",
            f"  scalar multiplications: {self.cost} (left-to-right: {self.naive_cost})",
            f"  product: {m}x{n}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        m, n = self.product.dims()
        return (
            f"ChainSolution(n_matrices={self._design.n_matrices}, "
            f"product={m}x{n}, cost={self.cost})"
        )
