"""
Generic result container for pymatrix computations.

The Result class provides a standardized envelope that the result-returning
entry points (linsolve, invert, chain_product) use. This enables shared
tooling for timing and diagnostics while allowing each operation to define
its own parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (row swaps, pivots, cost)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for matrix computations.

    Type Parameters:
        P: The operation-specific parameter payload type

    Attributes:
        params: Operation-specific payload (solution vector, inverse, product)
        info: Structured metadata (method, row swaps, multiplication cost)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=EliminationParams(...),
        ...     info={'method': 'gauss_partial_pivot', 'row_swaps': 1},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_gauss'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
