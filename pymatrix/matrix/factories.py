"""
Matrix factories.

Fill patterns, nested-row and flat-vector construction, integer ranges
and uniform random matrices. All dimensions must be >= 1.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.compute.random import UniformSource, as_uniform_source
from pymatrix.core.validation import (
    check_1d,
    check_array,
    check_not_empty,
    check_positive_int,
)
from pymatrix.matrix.matrix import Matrix, get_backend, rows_to_array


def full(rows: int, columns: int, value: float) -> Matrix:
    """rows x columns matrix with every cell set to value."""
    rows = check_positive_int(rows, 'rows')
    columns = check_positive_int(columns, 'columns')
    return Matrix._wrap(get_backend().fill((rows, columns), float(value)))


def zeros(rows: int, columns: int) -> Matrix:
    return full(rows, columns, 0.0)


def ones(rows: int, columns: int) -> Matrix:
    return full(rows, columns, 1.0)


def identity(size: int) -> Matrix:
    """Square matrix with ones on the diagonal."""
    size = check_positive_int(size, 'size')
    data = get_backend().fill((size, size), 0.0)
    np.fill_diagonal(data, 1.0)
    return Matrix._wrap(data)


def random(
    rows: int,
    columns: int,
    rng: UniformSource | np.random.Generator | int | None = None,
) -> Matrix:
    """
    Matrix of independent draws, uniform on [0, 1] inclusive.

    Args:
        rows: Number of rows
        columns: Number of columns
        rng: UniformSource, numpy Generator, int seed, or None for a
            fresh OS-seeded source. Pass a seed for reproducible output.
    """
    rows = check_positive_int(rows, 'rows')
    columns = check_positive_int(columns, 'columns')
    return Matrix._wrap(as_uniform_source(rng).uniform((rows, columns)))


def from_rows(
    data: Sequence[Sequence[float]] | NDArray[Any],
    column_range: range | tuple[int, int] | None = None,
) -> Matrix:
    """
    Matrix from nested rows.

    Args:
        data: Sequence of rows, each a sequence of numbers
        column_range: Optional half-open range of columns to keep,
            as range(lo, hi) or (lo, hi)

    Raises:
        ShapeError: If rows differ in length (no range) or a row is
            shorter than the range requires
    """
    return Matrix._wrap(rows_to_array(data, column_range, name='data'))


def _flat(values: ArrayLike, name: str) -> NDArray[np.float64]:
    array = check_array(values, name)
    check_1d(array, name)
    check_not_empty(array, name)
    return array


def from_vector(values: ArrayLike, column: bool = False) -> Matrix:
    """1 x N row vector, or N x 1 column vector when column is True."""
    array = _flat(values, 'values')
    shape = (len(array), 1) if column else (1, len(array))
    return Matrix._wrap(array.reshape(shape).copy())


def row_vector(values: ArrayLike) -> Matrix:
    return from_vector(values, column=False)


def column_vector(values: ArrayLike) -> Matrix:
    return from_vector(values, column=True)


def arange(start: int, stop: int | None = None, column: bool = False) -> Matrix:
    """
    Consecutive integers of range(start, stop) as doubles.

    With one argument, counts from 0 like range(). The range must be
    non-empty.
    """
    if stop is None:
        start, stop = 0, start
    for name, bound in (('start', start), ('stop', stop)):
        if isinstance(bound, bool) or not isinstance(bound, (int, np.integer)):
            raise ValidationError(
                f"{name}: expected integer, got {type(bound).__name__}"
            )
    if stop <= start:
        raise ValidationError(f"range [{start}, {stop}) is empty")
    return from_vector(np.arange(start, stop, dtype=np.float64), column=column)
