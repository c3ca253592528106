"""
Shared compute infrastructure for pymatrix.

This module provides timing utilities, precision constants and tolerance
tiers that are shared by the linear algebra kernels.

Submodules:
    timing: Execution timing utilities
    precision: Numerical precision constants and utilities
    tolerances: Tolerance tiers for comparing numerical results
"""

from pymatrix.core.compute.timing import Timer, timed
from pymatrix.core.compute.precision import (
    EPSILON_64,
    DEFAULT_RTOL,
    DEFAULT_ATOL,
    pivot_tolerance,
    is_close,
    condition_number,
)
from pymatrix.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Precision
    "EPSILON_64",
    "DEFAULT_RTOL",
    "DEFAULT_ATOL",
    "pivot_tolerance",
    "is_close",
    "condition_number",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
