"""
Matrix-chain multiplication planner.

For a product A0 A1 ... A(n-1) with Ai of shape dims[i] x dims[i+1], the
association of the products changes the number of scalar multiplications
but not the result. The planner fills the classic dynamic-programming
tables

    cost[i][i]  = 0
    cost[i][j]  = min over k in [i, j) of
                  cost[i][k] + cost[k+1][j] + dims[i] * dims[k+1] * dims[j+1]
    split[i][j] = the first k achieving that minimum

for increasing interval length, then evaluates the product recursively
through the recorded splits. O(n^3) time, O(n^2) space.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import check_conformable
from pymatrix.linalg.matrix import Matrix
from pymatrix.linalg._multiply import multiply, multiplication_cost


@dataclass(frozen=True)
class ChainOrder:
    """
    Optimal parenthesization of a matrix chain.

    Attributes:
        dims: Chain dimensions; matrix i is dims[i] x dims[i+1]
        cost: cost[i][j] is the minimum number of scalar multiplications
            for the sub-product i..j (upper triangle only)
        split: split[i][j] is the index k where the optimal association of
            i..j breaks into (i..k)(k+1..j) (upper triangle only)
    """
    dims: tuple[int, ...]
    cost: tuple[tuple[int, ...], ...]
    split: tuple[tuple[int, ...], ...]

    @property
    def n_matrices(self) -> int:
        return len(self.dims) - 1

    @property
    def total_cost(self) -> int:
        """Minimum scalar multiplications for the whole chain."""
        return self.cost[0][self.n_matrices - 1]

    def parenthesize(self, names: Sequence[str] | None = None) -> str:
        """
        Render the optimal association, e.g. '((A0 A1) A2)'.

        Args:
            names: One label per matrix; defaults to A0, A1, ...
        """
        n = self.n_matrices
        if names is None:
            names = [f"A{i}" for i in range(n)]
        if len(names) != n:
            raise ValidationError(
                f"names: expected {n} labels, got {len(names)}"
            )

        def render(i: int, j: int) -> str:
            if i == j:
                return names[i]
            k = self.split[i][j]
            return f"({render(i, k)} {render(k + 1, j)})"

        return render(0, n - 1)


def chain_dims(matrices: Sequence[Matrix]) -> tuple[int, ...]:
    """
    Dimension sequence of a chain, validating each adjacent pair.

    Raises:
        DimensionError: If matrix i's columns != matrix i+1's rows
    """
    for i in range(len(matrices) - 1):
        check_conformable(
            matrices[i].dims(),
            matrices[i + 1].dims(),
            (f"matrix {i}", f"matrix {i + 1}"),
        )
    dims = [A.n_rows for A in matrices]
    dims.append(matrices[-1].n_cols)
    return tuple(dims)


def plan_chain(dims: Sequence[int]) -> ChainOrder:
    """
    Compute the minimum-cost parenthesization for chain dimensions.

    Args:
        dims: n + 1 non-negative sizes for a chain of n >= 1 matrices

    Returns:
        ChainOrder holding the cost and split tables

    Raises:
        ValidationError: If fewer than two sizes or any negative size
    """
    dims = tuple(int(d) for d in dims)
    if len(dims) < 2:
        raise ValidationError(
            f"dims: a chain of n matrices needs n + 1 sizes, got {len(dims)}"
        )
    if any(d < 0 for d in dims):
        raise ValidationError(f"dims: sizes must be non-negative, got {dims}")

    n = len(dims) - 1
    cost = [[0] * n for _ in range(n)]
    split = [[0] * n for _ in range(n)]

    for h in range(1, n):
        for i in range(n - h):
            j = i + h
            best = None
            for k in range(i, j):
                c = cost[i][k] + cost[k + 1][j] + multiplication_cost(
                    dims[i], dims[k + 1], dims[j + 1]
                )
                if best is None or c < best:
                    best = c
                    split[i][j] = k
            cost[i][j] = best

    return ChainOrder(
        dims=dims,
        cost=tuple(tuple(row) for row in cost),
        split=tuple(tuple(row) for row in split),
    )


def chain_order(*matrices: Matrix) -> ChainOrder:
    """Plan the product of the given matrices without evaluating it."""
    if not matrices:
        raise ValidationError("chain_order: at least one matrix is required")
    return plan_chain(chain_dims(matrices))


def naive_chain_cost(dims: Sequence[int]) -> int:
    """Scalar multiplications of the left-to-right product ((A0 A1) A2) ..."""
    dims = tuple(dims)
    return sum(
        multiplication_cost(dims[0], dims[k], dims[k + 1])
        for k in range(1, len(dims) - 1)
    )


def evaluate_chain(matrices: Sequence[Matrix], order: ChainOrder) -> Matrix:
    """Multiply the matrices following the splits recorded in order."""
    if len(matrices) != order.n_matrices:
        raise ValidationError(
            f"order plans {order.n_matrices} matrices, got {len(matrices)}"
        )
    if len(matrices) == 1:
        return matrices[0].copy()

    def evaluate(i: int, j: int) -> Matrix:
        if i == j:
            return matrices[i]
        k = order.split[i][j]
        return multiply(evaluate(i, k), evaluate(k + 1, j))

    return evaluate(0, len(matrices) - 1)


def multiply_chain(*matrices: Matrix) -> Matrix:
    """
    Product of two or more matrices, evaluated in the cheapest order.

    One matrix returns a copy; two are multiplied directly without a table.

    Raises:
        ValidationError: If no matrices are given
        DimensionError: If adjacent matrices are not conformable
    """
    n = len(matrices)
    if n == 0:
        raise ValidationError("multiply_chain: at least one matrix is required")
    if n == 1:
        return matrices[0].copy()
    if n == 2:
        return multiply(matrices[0], matrices[1])

    order = plan_chain(chain_dims(matrices))
    return evaluate_chain(matrices, order)
