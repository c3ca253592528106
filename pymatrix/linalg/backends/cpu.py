"""
CPU backends for the linalg solvers.

CPUEliminationBackend: Gaussian elimination with partial pivoting for
    LinearSystemDesign -> EliminationParams (solve or inverse).
CPUChainBackend: optimal-order chain product for
    ChainDesign -> ChainParams.
"""

import numpy as np

from pymatrix.core.compute.precision import condition_number
from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import ILL_CONDITION_THRESHOLD, select_tolerance
from pymatrix.core.result import Result
from pymatrix.linalg.design import LinearSystemDesign, ChainDesign
from pymatrix.linalg.solution import EliminationParams, ChainParams
from pymatrix.linalg._chain import plan_chain, evaluate_chain, naive_chain_cost
from pymatrix.linalg._elimination import inverse_with_details, solve_with_details
from pymatrix.linalg._multiply import multiply, multiplication_cost


class CPUEliminationBackend:
    """
    CPU backend using Gauss-Jordan elimination.

    Implements the Backend protocol for LinearSystemDesign -> EliminationParams.
    """

    def __init__(self, tol: float | None = None):
        self._tol = tol

    @property
    def name(self) -> str:
        return 'cpu_gauss'

    def solve(self, design: LinearSystemDesign) -> Result[EliminationParams]:
        """
        Solve A x = b or invert A.

        Algorithm:
            1. Join A with b (or with I) into an augmented matrix
            2. Forward elimination with partial pivoting
            3. Back-substitution to reduced row-echelon form
            4. Read x from the last column (or A^-1 from the right block)

        Raises:
            SingularMatrixError: If A has no unique solution / no inverse
        """
        timer = Timer()
        timer.start()
        warnings_list: list[str] = []

        with timer.section('elimination'):
            if design.is_inverse:
                inv, record = inverse_with_details(design.A, tol=self._tol)
                x = None
            else:
                x, record = solve_with_details(design.A, design.b, tol=self._tol)
                inv = None

        info = {
            'method': 'gauss_partial_pivot',
            'row_swaps': record.row_swaps,
            'rank': len(record.pivots),
            'pivot_tolerances': record.tolerances,
        }

        for col in record.near_singular_columns:
            warnings_list.append(
                f"nearly singular: pivot in column {col} is close to its row tolerance"
            )

        if design.m == design.n and design.m > 0:
            with timer.section('diagnostics'):
                cond = condition_number(design.A._data)
                info['determinant'] = record.determinant_sign * float(np.prod(record.pivots))
            info['condition_number'] = cond
            ill = cond > ILL_CONDITION_THRESHOLD
            info['tolerance_tier'] = select_tolerance(ill).name
            if ill:
                warnings_list.append(
                    f"ill-conditioned: condition number {cond:.3g} exceeds "
                    f"{ILL_CONDITION_THRESHOLD:.0e}"
                )

        timer.stop()

        params = EliminationParams(
            reduced=record.reduced,
            pivots=record.pivots,
            row_swaps=record.row_swaps,
            permutation=record.permutation,
            solution=x,
            inverse=inv,
        )
        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


class CPUChainBackend:
    """
    CPU backend multiplying a chain in its minimum-cost association.

    Implements the Backend protocol for ChainDesign -> ChainParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_chain'

    def solve(self, design: ChainDesign) -> Result[ChainParams]:
        timer = Timer()
        timer.start()

        matrices = design.matrices
        dims = design.dims
        n = design.n_matrices

        if n == 1:
            product = matrices[0].copy()
            order = None
            cost = 0
        elif n == 2:
            with timer.section('multiply'):
                product = multiply(matrices[0], matrices[1])
            order = None
            cost = multiplication_cost(dims[0], dims[1], dims[2])
        else:
            with timer.section('plan'):
                order = plan_chain(dims)
            with timer.section('multiply'):
                product = evaluate_chain(matrices, order)
            cost = order.total_cost

        timer.stop()

        params = ChainParams(
            product=product,
            order=order,
            cost=cost,
            naive_cost=naive_chain_cost(dims),
        )
        return Result(
            params=params,
            info={'method': 'dynamic_programming', 'n_matrices': n, 'dims': dims},
            timing=timer.result(),
            backend_name=self.name,
        )
