"""
Reductions and column statistics.

All extrema use first-occurrence tie-breaking in scan order (row-major
for whole-matrix extrema). A NaN wins wherever it first appears.
"""

from __future__ import annotations

from typing import Literal, NamedTuple

import numpy as np

from pymatrix.core.protocols import Array, Kernels

Kind = Literal['min', 'max']


class Extremum(NamedTuple):
    """Extreme value of a row or column and its position along it."""
    value: float
    index: int


class Extremum2D(NamedTuple):
    """Extreme value of a whole matrix and its (row, column)."""
    value: float
    row: int
    column: int


def _arg(kernels: Kernels, kind: Kind):
    return kernels.argmin if kind == 'min' else kernels.argmax


def vector_extremum(kernels: Kernels, vector: Array, kind: Kind) -> Extremum:
    """Extremum of a 1-D buffer."""
    index = int(_arg(kernels, kind)(vector))
    return Extremum(float(vector[index]), index)


def axis_extrema(kernels: Kernels, a: Array, axis: int, kind: Kind) -> Array:
    """
    Per-row (axis=1) or per-column (axis=0) extreme values.

    Returns a column vector for axis=1 and a row vector for axis=0.
    """
    indices = np.expand_dims(_arg(kernels, kind)(a, axis=axis), axis)
    return np.take_along_axis(a, indices, axis=axis)


def matrix_extremum(kernels: Kernels, a: Array, kind: Kind) -> Extremum2D:
    """Global extremum with its row-major-first position."""
    flat = int(_arg(kernels, kind)(a))
    row, column = divmod(flat, a.shape[1])
    return Extremum2D(float(a[row, column]), row, column)


def sum_all(kernels: Kernels, a: Array) -> float:
    return float(kernels.sum(a))


def sum_axis(kernels: Kernels, a: Array, axis: int) -> Array:
    """Sums along axis, kept 2-D (axis=1 -> column vector, axis=0 -> row vector)."""
    return np.expand_dims(kernels.sum(a, axis=axis), axis)


def column_mean(kernels: Kernels, block: Array) -> Array:
    """Mean of each column of block, as a 1 x columns row vector."""
    return np.expand_dims(kernels.mean(block, axis=0), 0)


def column_std(kernels: Kernels, block: Array) -> Array:
    """
    Sample standard deviation (divisor rows - 1) of each column.

    A single-row block has no spread estimate; its result is NaN.
    """
    mu = column_mean(kernels, block)
    deviations = kernels.axpy(-1.0, mu, block)
    squares = kernels.pow(deviations, 2)
    total = np.expand_dims(kernels.sum(squares, axis=0), 0)
    return kernels.sqrt(kernels.divide(total, float(block.shape[0] - 1)))


def widen(kernels: Kernels, stats: Array, lo: int, columns: int) -> Array:
    """Place a 1 x k statistic row at column lo of a zero 1 x columns row."""
    full = kernels.fill((1, columns), 0.0)
    full[:, lo:lo + stats.shape[1]] = stats
    return full
