"""
Core infrastructure for pymatrix.

This module provides shared abstractions and utilities used by the
linear algebra domain package.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, precision constants, tolerance tiers
"""

from pymatrix.core.result import Result
from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionError,
    ShapeError,
    ConstructionError,
    IndexOutOfRangeError,
    NumericalError,
    DivisionByZeroError,
    SingularMatrixError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "ShapeError",
    "ConstructionError",
    "IndexOutOfRangeError",
    "NumericalError",
    "DivisionByZeroError",
    "SingularMatrixError",
]
