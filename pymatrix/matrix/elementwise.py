"""
Elementwise transcendental functions.

Each applies the scalar function to every element independently and
returns a new Matrix. Out-of-domain inputs follow IEEE-754 (log(-1) is
nan, log(0) is -inf) without raising.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pymatrix.matrix.matrix import Matrix


def exp(m: Matrix) -> Matrix:
    return m.exp()


def log(m: Matrix) -> Matrix:
    """Natural logarithm."""
    return m.log()


def power(m: Matrix, alpha: float) -> Matrix:
    """Raise every element to alpha. Not a matrix power."""
    return m.pow(alpha)


def sqrt(m: Matrix) -> Matrix:
    return m.sqrt()
