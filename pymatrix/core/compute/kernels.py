"""
CPU reference kernels.

NumPy for elementwise math and BLAS calls, SciPy LAPACK for LU.
"""

from __future__ import annotations

from typing import Any, Literal

import numpy as np

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.protocols import Array, Kernels
from pymatrix.core.compute.linalg.lu import LUResult, lu_factor_cpu, lu_inverse_cpu


BackendChoice = Literal['auto', 'cpu']


class CPUKernels:
    """CPU reference backend built on NumPy and SciPy."""

    @property
    def name(self) -> str:
        return 'cpu_numpy'

    def copy(self, x: Array) -> Array:
        return np.array(x, dtype=np.float64, order='C', copy=True)

    def fill(self, shape: tuple[int, int], value: float) -> Array:
        return np.full(shape, value, dtype=np.float64)

    def axpy(self, alpha: float, x: Array, y: Array, out: Array | None = None) -> Array:
        if out is None:
            out = np.empty(np.broadcast_shapes(np.shape(x), np.shape(y)), dtype=np.float64)
        np.multiply(x, alpha, out=out)
        np.add(out, y, out=out)
        return out

    def scale(self, alpha: float, x: Array) -> Array:
        return np.multiply(x, alpha, dtype=np.float64)

    def add(self, a: Array, b: Array | float) -> Array:
        return np.add(a, b, dtype=np.float64)

    def subtract(self, a: Array | float, b: Array | float) -> Array:
        return np.subtract(a, b, dtype=np.float64)

    def multiply(self, a: Array, b: Array | float) -> Array:
        return np.multiply(a, b, dtype=np.float64)

    def divide(self, a: Array | float, b: Array | float) -> Array:
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.true_divide(a, b, dtype=np.float64)

    def gemm(self, a: Array, b: Array) -> Array:
        return np.ascontiguousarray(np.matmul(a, b))

    def transpose(self, a: Array) -> Array:
        return np.ascontiguousarray(a.T)

    def lu_factor(self, a: Array, matrix_name: str = 'A') -> LUResult:
        return lu_factor_cpu(a, matrix_name=matrix_name)

    def lu_inverse(self, factors: LUResult, matrix_name: str = 'A') -> Array:
        return lu_inverse_cpu(factors, matrix_name=matrix_name)

    def exp(self, x: Array) -> Array:
        with np.errstate(over='ignore'):
            return np.exp(x)

    def log(self, x: Array) -> Array:
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.log(x)

    def pow(self, x: Array, alpha: float) -> Array:
        if alpha == 2:
            return np.multiply(x, x)
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            return np.power(x, alpha)

    def sqrt(self, x: Array) -> Array:
        with np.errstate(invalid='ignore'):
            return np.sqrt(x)

    def sum(self, x: Array, axis: int | None = None) -> Any:
        return np.sum(x, axis=axis)

    def argmin(self, x: Array, axis: int | None = None) -> Any:
        return np.argmin(x, axis=axis)

    def argmax(self, x: Array, axis: int | None = None) -> Any:
        return np.argmax(x, axis=axis)

    def mean(self, x: Array, axis: int | None = None) -> Any:
        return np.mean(x, axis=axis)


_CPU = CPUKernels()


def select_backend(backend: BackendChoice | Kernels = 'auto') -> Kernels:
    """
    Resolve a backend choice to a Kernels instance.

    Args:
        backend: 'cpu', 'auto' (currently always CPU), or an object
            already satisfying the Kernels protocol

    Returns:
        Kernels instance

    Raises:
        ValidationError: If the choice is unknown or the object does not
            satisfy the Kernels protocol
    """
    if isinstance(backend, str):
        if backend in ('auto', 'cpu'):
            return _CPU
        raise ValidationError(f"Unknown backend: {backend!r}")

    if not isinstance(backend, Kernels):
        raise ValidationError(
            f"backend: {type(backend).__name__} does not implement the Kernels protocol"
        )
    return backend
