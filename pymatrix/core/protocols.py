"""
Core protocols for pymatrix.

These define structural interfaces that backends must satisfy. We use
Protocol (structural typing) rather than ABC (nominal typing) to allow
flexibility while maintaining type safety.
"""

from typing import Protocol, TypeVar, runtime_checkable

# Type variables for generic payloads
P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend knows how to take a validated design and produce a
    parameter payload wrapped in a Result.

    Backends are stateless: all configuration is passed via the design
    or at construction time. This makes them easy to test and swap.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_gauss', 'cpu_chain'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Args:
            design: Validated design

        Returns:
            Result envelope containing parameter payload and metadata

        Raises:
            NumericalError: If numerical issues prevent solution (singularity, etc.)
        """
        ...
