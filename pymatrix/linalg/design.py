"""
Designs: validated operand containers for the linalg solvers.

A design wraps the operands of one computation, checks their shapes up
front and freezes private copies, so the backend can assume valid input
and later mutation of the caller's matrices cannot change a result.

Construction:
    LinearSystemDesign.from_operands(A, b)    # solve A x = b
    LinearSystemDesign.from_operands(A)       # invert A
    ChainDesign.from_matrices(A, B, C, ...)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from numpy.typing import ArrayLike

from pymatrix.core.exceptions import DimensionError, ShapeError, ValidationError
from pymatrix.core.validation import check_finite
from pymatrix.linalg.matrix import Matrix
from pymatrix.linalg.vector import Vector
from pymatrix.linalg._chain import chain_dims


def _as_matrix(value: Matrix | ArrayLike, name: str) -> Matrix:
    if isinstance(value, Matrix):
        M = value.copy()
    else:
        M = Matrix.from_array(value)
    check_finite(M._data, name)
    return M


def _as_vector(value: Vector | ArrayLike, name: str) -> Vector:
    if isinstance(value, Vector):
        v = value.copy()
    else:
        v = Vector(value)
    check_finite(v._data, name)
    return v


@dataclass(frozen=True)
class LinearSystemDesign:
    """
    Coefficient matrix and optional right-hand side.

    With a right-hand side the design describes A x = b (rows <= columns);
    without one it describes the inverse of a square A.
    """
    _A: Matrix
    _b: Vector | None

    @classmethod
    def from_operands(
        cls,
        A: Matrix | ArrayLike,
        b: Vector | ArrayLike | None = None,
    ) -> LinearSystemDesign:
        """
        Build a design from a matrix and an optional right-hand side.

        Parameters
        ----------
        A : Matrix or array-like
            Coefficient matrix (m x n).
        b : Vector or array-like, optional
            Right-hand side of length m. Omit to request the inverse.
        """
        A = _as_matrix(A, 'A')
        m, n = A.dims()

        if b is None:
            if m != n:
                raise ShapeError(
                    f"A: inverse needs a square matrix, got {m}x{n}",
                    actual=(m, n),
                    expected='square',
                )
            return cls(_A=A, _b=None)

        b = _as_vector(b, 'b')
        if m > n:
            raise ShapeError(
                f"A: solve needs rows <= columns, got {m}x{n}",
                actual=(m, n),
                expected='rows <= columns',
            )
        if len(b) != m:
            raise DimensionError(
                f"b: right-hand side has length {len(b)}, A has {m} rows",
                actual=len(b),
                expected=m,
            )
        return cls(_A=A, _b=b)

    @property
    def A(self) -> Matrix:
        return self._A

    @property
    def b(self) -> Vector | None:
        return self._b

    @property
    def m(self) -> int:
        """Number of equations."""
        return self._A.n_rows

    @property
    def n(self) -> int:
        """Number of unknowns."""
        return self._A.n_cols

    @property
    def is_inverse(self) -> bool:
        return self._b is None

    @property
    def metadata(self) -> dict[str, Any]:
        return {
            'm': self.m,
            'n': self.n,
            'kind': 'inverse' if self.is_inverse else 'solve',
        }

    def __repr__(self) -> str:
        kind = 'inverse' if self.is_inverse else 'solve'
        return f"LinearSystemDesign(m={self.m}, n={self.n}, kind={kind})"


@dataclass(frozen=True)
class ChainDesign:
    """Sequence of pairwise-conformable matrices to multiply."""
    _matrices: tuple[Matrix, ...]
    _dims: tuple[int, ...]

    @classmethod
    def from_matrices(cls, *matrices: Matrix | ArrayLike) -> ChainDesign:
        """
        Build a chain design.

        Raises
        ------
        ValidationError
            If no matrices are given.
        DimensionError
            If adjacent matrices are not conformable.
        """
        if not matrices:
            raise ValidationError("ChainDesign: at least one matrix is required")
        copies = tuple(_as_matrix(M, f"matrix {i}") for i, M in enumerate(matrices))
        return cls(_matrices=copies, _dims=chain_dims(copies))

    @property
    def matrices(self) -> tuple[Matrix, ...]:
        return self._matrices

    @property
    def dims(self) -> tuple[int, ...]:
        return self._dims

    @property
    def n_matrices(self) -> int:
        return len(self._matrices)

    @property
    def metadata(self) -> dict[str, Any]:
        return {'n_matrices': self.n_matrices, 'dims': self._dims}

    def __repr__(self) -> str:
        return f"ChainDesign(n_matrices={self.n_matrices}, dims={self._dims})"
