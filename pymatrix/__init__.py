"""
pymatrix: dense-matrix algebra for Python.

Submodules:
    linalg: Matrix and Vector types, products, elimination, determinants, powers
    core: Exceptions, validation, result envelope, timing and precision
"""

__version__ = "0.1.0"

from pymatrix import linalg
from pymatrix.linalg import Matrix, Vector
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
    "__version__",
    "linalg",
    "Matrix",
    "Vector",
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
