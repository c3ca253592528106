"""
Backends for the linalg solvers.
"""

from pymatrix.linalg.backends.cpu import CPUEliminationBackend, CPUChainBackend

__all__ = [
    "CPUEliminationBackend",
    "CPUChainBackend",
]
