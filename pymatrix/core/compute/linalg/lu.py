"""
LU factorization and LU-based inversion.

Wraps LAPACK getrf (LU with partial pivoting) and getri (inverse from the
LU factors) via SciPy. Inversion is the classic two-step algorithm:
factor, then invert the factored form. Inputs are never overwritten.
"""

from dataclasses import dataclass
from typing import Any
import warnings

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import lapack

from pymatrix.core.exceptions import (
    IllConditionedWarning,
    NotSquareError,
    SingularMatrixError,
)
from pymatrix.core.compute.precision import (
    ILL_CONDITIONED_RCOND,
    pivot_tolerance,
    reciprocal_condition,
)


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU factorization.

    Attributes:
        lu: Packed factors; strict lower triangle is L (unit diagonal),
            upper triangle is U
        piv: Zero-based pivot indices; row i was swapped with row piv[i]
        zero_pivot: Zero-based index of the first pivot of U whose
            magnitude is at or below pivot_tol, or None
        pivot_tol: Tolerance the pivots were tested against
        norm_1: 1-norm of the factored matrix, for the condition estimate
    """
    lu: NDArray[np.floating[Any]]
    piv: NDArray[np.integer[Any]]
    zero_pivot: int | None
    pivot_tol: float
    norm_1: float

    @property
    def is_singular(self) -> bool:
        """True if U has a numerically zero pivot."""
        return self.zero_pivot is not None


def _check_square(A: NDArray[np.floating[Any]], operation: str) -> None:
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise NotSquareError(
            f"{operation} requires a square matrix, got "
            f"{A.shape[0]}x{A.shape[1] if A.ndim > 1 else 1}",
            shape=tuple(A.shape),
            operation=operation,
        )


def lu_factor_cpu(
    A: NDArray[np.floating[Any]],
    matrix_name: str = 'A',
) -> LUResult:
    """
    LU factorization with partial pivoting using LAPACK getrf.

    Computes P A = L U. A singular matrix is not an error here; it is
    reported through LUResult.zero_pivot. A pivot counts as zero when
    |U[k, k]| <= max(n) * eps * ||A||_inf, so exactly singular matrices
    whose pivots were only perturbed by rounding are still caught.

    Args:
        A: Square matrix (n x n). Not modified.
        matrix_name: Name used in error messages

    Returns:
        LUResult with packed factors, pivots and the singularity verdict

    Raises:
        NotSquareError: If A is not square
        SingularMatrixError: If A contains NaN or Inf
    """
    _check_square(A, "LU factorization")

    if not np.all(np.isfinite(A)):
        raise SingularMatrixError(
            f"{matrix_name} contains non-finite values and cannot be inverted",
            matrix_name=matrix_name,
        )

    lu, piv, info = lapack.dgetrf(A, overwrite_a=False)
    if info < 0:
        raise ValueError(f"dgetrf: illegal value in argument {-info}")

    tol = pivot_tolerance(A)
    small = np.flatnonzero(np.abs(np.diag(lu)) <= tol)
    zero_pivot = int(small[0]) if len(small) else None

    return LUResult(
        lu=lu,
        piv=piv,
        zero_pivot=zero_pivot,
        pivot_tol=tol,
        norm_1=float(np.linalg.norm(A, 1)),
    )


def lu_inverse_cpu(
    factors: LUResult,
    matrix_name: str = 'A',
) -> NDArray[np.floating[Any]]:
    """
    Invert a matrix from its LU factors using LAPACK getri.

    Emits IllConditionedWarning when the reciprocal condition number of
    the result falls below ILL_CONDITIONED_RCOND.

    Args:
        factors: Output of lu_factor_cpu
        matrix_name: Name used in error and warning messages

    Returns:
        The inverse (n x n) as a freshly allocated C-contiguous array

    Raises:
        SingularMatrixError: If U has a numerically zero pivot or the
            inverse overflows
    """
    if factors.is_singular:
        k = factors.zero_pivot
        raise SingularMatrixError(
            f"{matrix_name} is singular: pivot U[{k}, {k}] = "
            f"{factors.lu[k, k]:.3e} is within tolerance {factors.pivot_tol:.3e} of zero",
            matrix_name=matrix_name,
            pivot_index=k,
            condition_number=np.inf,
        )

    inv, info = lapack.dgetri(factors.lu, factors.piv, overwrite_lu=False)
    if info < 0:
        raise ValueError(f"dgetri: illegal value in argument {-info}")
    if info > 0:
        raise SingularMatrixError(
            f"{matrix_name} is singular: U[{info - 1}, {info - 1}] is exactly zero",
            matrix_name=matrix_name,
            pivot_index=int(info) - 1,
            condition_number=np.inf,
        )

    if not np.all(np.isfinite(inv)):
        raise SingularMatrixError(
            f"{matrix_name} is numerically singular: inverse overflowed",
            matrix_name=matrix_name,
            condition_number=np.inf,
        )

    rcond = reciprocal_condition(factors.norm_1, inv)
    if rcond < ILL_CONDITIONED_RCOND:
        warnings.warn(
            f"{matrix_name} is ill-conditioned (rcond={rcond:.3e}); "
            f"inverse may be inaccurate",
            IllConditionedWarning,
            stacklevel=2,
        )

    return np.ascontiguousarray(inv)
