"""
Core protocols for PyMatrix.

The Matrix layer never touches raw buffers arithmetic directly; it calls
a Kernels backend. Any object satisfying this protocol (NumPy, a scalar
loop fallback, ...) can be substituted without changing Matrix semantics.

Design Principles:
    - Kernels are stateless pure functions over float64 ndarrays
    - Inputs are never modified; results are freshly allocated unless
      an explicit ``out`` buffer is passed
    - Shape resolution (broadcasting rules, compatibility errors) lives
      in the Matrix layer, not in the kernels
"""

from typing import Protocol, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray

Array = NDArray[np.float64]


@runtime_checkable
class Kernels(Protocol):
    """
    Protocol for numeric backends.

    Backends are stateless; all configuration is passed at construction
    time. This makes them easy to test and swap.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{library}'
        Examples: 'cpu_numpy'
        """
        ...

    # --- Buffer management ---

    def copy(self, x: Array) -> Array:
        """Contiguous copy of x."""
        ...

    def fill(self, shape: tuple[int, int], value: float) -> Array:
        """New buffer of the given shape with every cell set to value."""
        ...

    # --- BLAS level 1 ---

    def axpy(self, alpha: float, x: Array, y: Array, out: Array | None = None) -> Array:
        """alpha * x + y. Writes into out when given, which must not alias an input."""
        ...

    def scale(self, alpha: float, x: Array) -> Array:
        """alpha * x."""
        ...

    # --- Elementwise binary (operands already broadcast-compatible) ---

    def add(self, a: Array, b: Array | float) -> Array:
        ...

    def subtract(self, a: Array | float, b: Array | float) -> Array:
        ...

    def multiply(self, a: Array, b: Array | float) -> Array:
        ...

    def divide(self, a: Array | float, b: Array | float) -> Array:
        """IEEE-754 division: x/0 -> +-inf, 0/0 -> nan, no warnings."""
        ...

    # --- BLAS level 3 / LAPACK ---

    def gemm(self, a: Array, b: Array) -> Array:
        """Dense matrix product a @ b."""
        ...

    def transpose(self, a: Array) -> Array:
        """Contiguous transpose."""
        ...

    def lu_factor(self, a: Array, matrix_name: str = 'A') -> Any:
        """
        LU factorization with partial pivoting.

        Reports, without raising, the first pivot that is numerically zero.
        Raises SingularMatrixError for non-finite input.
        """
        ...

    def lu_inverse(self, factors: Any, matrix_name: str = 'A') -> Array:
        """Inverse from LU factors; raises SingularMatrixError on a zero pivot."""
        ...

    # --- Elementwise transcendental ---

    def exp(self, x: Array) -> Array:
        ...

    def log(self, x: Array) -> Array:
        ...

    def pow(self, x: Array, alpha: float) -> Array:
        ...

    def sqrt(self, x: Array) -> Array:
        ...

    # --- Reductions ---

    def sum(self, x: Array, axis: int | None = None) -> Any:
        ...

    def argmin(self, x: Array, axis: int | None = None) -> Any:
        """Index of the first minimum (flat index when axis is None)."""
        ...

    def argmax(self, x: Array, axis: int | None = None) -> Any:
        """Index of the first maximum (flat index when axis is None)."""
        ...

    def mean(self, x: Array, axis: int | None = None) -> Any:
        ...
