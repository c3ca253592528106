"""
Tolerance tiers for numerical validation.

Defines precision expectations for results of the elimination engine:
- FP64 (reference): well-conditioned problems, near machine precision
- FP64 ill-conditioned: relaxed for condition numbers above the threshold

Used by the test suite and by the solvers' conditioning check.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Exact-arithmetic paths (integer-valued products, powers, closed-form determinants)
EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Bitwise equality for integer-valued inputs and results',
)

# Elimination on well-conditioned input
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='Double precision elimination, well conditioned',
)

# Elimination on ill-conditioned input (cond > ILL_CONDITION_THRESHOLD)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='Double precision elimination, ill-conditioned',
)

# Condition number above which elimination results lose about half of
# the available float64 digits.
ILL_CONDITION_THRESHOLD = 1e8


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select appropriate tolerance tier for an elimination result."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
