"""
Shared compute infrastructure for PyMatrix.

IMPORTANT: This is NOT where Matrix semantics live. Shape rules, bounds
checks and value semantics belong to pymatrix.matrix. This module
contains shared NUMERIC infrastructure only.

Submodules:
    kernels: Numeric backend (CPU reference via NumPy/SciPy)
    precision: Numerical precision constants and utilities
    random: Seedable uniform random source
    linalg: Linear algebra kernels (LU)
"""

from pymatrix.core.compute.kernels import CPUKernels, select_backend
from pymatrix.core.compute.random import UniformSource

__all__ = [
    "CPUKernels",
    "select_backend",
    "UniformSource",
]
