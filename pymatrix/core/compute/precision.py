"""
Numerical precision constants and utilities.

Provides machine epsilon, tolerance defaults and the conditioning checks
used by the LU kernels and the Matrix comparison helpers.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = np.finfo(np.float64).eps  # ~2.22e-16

# Default tolerance for numerical comparisons (relative)
DEFAULT_RTOL: float = 1e-12

# Default tolerance for considering values as zero (absolute)
DEFAULT_ATOL: float = 1e-14

# Reciprocal condition number below which an inverse is reported as
# ill-conditioned. At rcond = 1e-12 roughly four significant digits survive.
ILL_CONDITIONED_RCOND: float = 1e-12


def pivot_tolerance(A: NDArray[np.floating[Any]]) -> float:
    """
    Threshold at or below which an LU pivot counts as zero.

    tol = max(shape) * eps * ||A||_inf, the same size-and-scale rule used
    for numerical rank. Rounding error in an exactly singular matrix
    leaves pivots of order eps * ||A||, which this catches.

    Args:
        A: Matrix being factored

    Returns:
        Non-negative tolerance; 0.0 for a zero matrix
    """
    if A.size == 0:
        return 0.0
    return float(max(A.shape) * EPSILON_64 * np.linalg.norm(A, np.inf))


def reciprocal_condition(
    norm_a: float,
    A_inv: NDArray[np.floating[Any]],
) -> float:
    """
    Reciprocal 1-norm condition number from ||A||_1 and the inverse.

    rcond = 1 / (||A||_1 * ||A^-1||_1). Cheap once the inverse is known.

    Returns:
        rcond in [0, 1]; 0.0 if either norm is zero or non-finite
    """
    norm_inv = np.linalg.norm(A_inv, 1)
    denom = norm_a * norm_inv
    if not np.isfinite(denom) or denom == 0:
        return 0.0
    return float(1.0 / denom)
