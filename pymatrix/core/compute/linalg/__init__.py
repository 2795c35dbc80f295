"""
Linear algebra kernels for PyMatrix.

All functions follow these conventions:
    - CPU functions use NumPy/SciPy (LAPACK under the hood)
    - Inputs are never overwritten
    - Each factorization returns a structured result dataclass
    - Errors are raised immediately with clear messages

Submodules:
    lu: LU factorization and LU-based inversion
"""

from pymatrix.core.compute.linalg.lu import (
    LUResult,
    lu_factor_cpu,
    lu_inverse_cpu,
)

__all__ = [
    "LUResult",
    "lu_factor_cpu",
    "lu_inverse_cpu",
]
