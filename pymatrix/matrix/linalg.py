"""
Linear algebra on matrices: transpose, product, right division, inverse.

The *_array helpers work on raw float64 buffers through a Kernels
backend and own the shape rules; Matrix methods wrap their results. The
free functions mirror Octave spelling (inv, mrdivide) for callers who
prefer function style.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pymatrix.core.exceptions import NotSquareError, ShapeMismatchError
from pymatrix.core.protocols import Array, Kernels

if TYPE_CHECKING:
    from pymatrix.matrix.matrix import Matrix


def transpose_array(kernels: Kernels, a: Array) -> Array:
    return kernels.transpose(a)


def matmul_array(kernels: Kernels, a: Array, b: Array) -> Array:
    """
    Standard product of an (m x k) and a (k x n) buffer.

    Raises:
        ShapeMismatchError: If a.columns != b.rows
    """
    if a.shape[1] != b.shape[0]:
        raise ShapeMismatchError(
            f"Cannot multiply {a.shape[0]}x{a.shape[1]} matrix and "
            f"{b.shape[0]}x{b.shape[1]} matrix",
            lhs_shape=a.shape,
            rhs_shape=b.shape,
            operation='matmul',
        )
    return kernels.gemm(a, b)


def _lu_invert(kernels: Kernels, a: Array, matrix_name: str) -> Array:
    factors = kernels.lu_factor(a, matrix_name=matrix_name)
    return kernels.lu_inverse(factors, matrix_name=matrix_name)


def inverse_array(kernels: Kernels, a: Array, matrix_name: str = 'matrix') -> Array:
    """
    Inverse via LU with partial pivoting: factor, then invert the factors.

    Raises:
        NotSquareError: If a is not square
        SingularMatrixError: If a is singular
    """
    if a.shape[0] != a.shape[1]:
        raise NotSquareError(
            f"Cannot invert {a.shape[0]}x{a.shape[1]} matrix: not square",
            shape=a.shape,
            operation='inverse',
        )
    return _lu_invert(kernels, a, matrix_name)


def mrdivide_array(kernels: Kernels, a: Array, b: Array) -> Array:
    """
    a times the inverse of b.

    Both shape checks run before any factorization.

    Raises:
        NotSquareError: If b is not square
        ShapeMismatchError: If a.columns != b.rows
        SingularMatrixError: If b is singular
    """
    if b.shape[0] != b.shape[1]:
        raise NotSquareError(
            f"Cannot divide by {b.shape[0]}x{b.shape[1]} matrix: not square",
            shape=b.shape,
            operation='mrdivide',
        )
    if a.shape[1] != b.shape[0]:
        raise ShapeMismatchError(
            f"Cannot divide {a.shape[0]}x{a.shape[1]} matrix by "
            f"{b.shape[0]}x{b.shape[1]} matrix",
            lhs_shape=a.shape,
            rhs_shape=b.shape,
            operation='mrdivide',
        )
    return kernels.gemm(a, _lu_invert(kernels, b, 'divisor'))


def transpose(m: Matrix) -> Matrix:
    return m.transpose()


def matmul(lhs: Matrix, rhs: Matrix) -> Matrix:
    """Linear-algebra product, same as ``lhs @ rhs``."""
    return lhs @ rhs


def mrdivide(lhs: Matrix, rhs: Matrix) -> Matrix:
    """Linear-algebra right division, ``lhs @ inv(rhs)``."""
    return lhs.mdiv(rhs)


def inv(m: Matrix) -> Matrix:
    return m.inverse()
