"""
Exception hierarchy for pymatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Misuse of the API (wrong shapes, bad indices,
negative dimensions) raises a ValidationError subclass; failures that
arise from the numbers themselves raise a NumericalError subclass.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyMatrixError(Exception):
    """Base exception for all pymatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Operand dimensions are inconsistent.

    Raised when two matrices (or a matrix and a vector) are combined by an
    operation whose shape contract they do not satisfy: elementwise
    arithmetic, comparison, joining, or multiplication.

    Attributes:
        actual: The offending shape or length, if known
        expected: The shape or length that was required, if known
    """

    def __init__(
        self,
        message: str,
        actual: tuple[int, ...] | int | None = None,
        expected: tuple[int, ...] | int | None = None
    ):
        super().__init__(message)
        self.actual = actual
        self.expected = expected


class ShapeError(ValidationError):
    """
    A single matrix has a shape the operation cannot accept.

    Raised when an operation requires a square matrix (determinant,
    inverse, power, trace), a non-empty matrix, or rows <= columns
    (elimination), and when storage violates the rectangular-grid invariant.

    Attributes:
        actual: The offending shape, if known
        expected: Description of the required shape, if known
    """

    def __init__(
        self,
        message: str,
        actual: tuple[int, ...] | None = None,
        expected: str | None = None
    ):
        super().__init__(message)
        self.actual = actual
        self.expected = expected


class ConstructionError(ValidationError):
    """
    A matrix or vector could not be constructed.

    Raised for negative dimensions or a value count that does not match
    the requested dimensions.
    """
    pass


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    A row or column index is out of bounds.

    Also an IndexError, so code written against plain sequences keeps
    working.

    Attributes:
        index: The offending index
        bound: The exclusive upper bound for the axis
        axis: 'row' or 'column'
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        bound: int | None = None,
        axis: str | None = None
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound
        self.axis = axis


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DivisionByZeroError(NumericalError, ZeroDivisionError):
    """Division of a matrix, row, or column by zero."""
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when elimination finds no usable pivot in a column, so the
    system has no unique solution or the matrix has no inverse. This is
    an expected, recoverable outcome: not every matrix is invertible.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_column: Column in which no pivot was found
        pivot_value: Largest candidate magnitude found in that column
        rank: Number of pivots found before failure
        expected_rank: Number of pivots required
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_column: int | None = None,
        pivot_value: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_column = pivot_column
        self.pivot_value = pivot_value
        self.rank = rank
        self.expected_rank = expected_rank
