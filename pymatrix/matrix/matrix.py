"""
Dense row-major float64 matrix with value semantics.

Operator map:
    a + b, a - b, -a     elementwise, with row/column broadcasting
    a * b, a / b         elementwise (Hadamard), with row/column broadcasting
    a @ b                linear-algebra product
    a.mdiv(b)            linear-algebra right division, a @ inv(b)
    a.T, a.transpose()   transpose

Every operation returns a new Matrix. Copies made with copy(),
copy.copy(), copy.deepcopy() or Matrix(other) share their buffer until
one side is written (copy-on-write); no mutation is ever visible through
another Matrix.
"""

from __future__ import annotations

import numbers
import sys
from typing import Any, Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ShapeMismatchError,
    ValidationError,
)
from pymatrix.core.protocols import Kernels
from pymatrix.core.compute.kernels import BackendChoice, select_backend
from pymatrix.core.compute.precision import DEFAULT_ATOL, DEFAULT_RTOL
from pymatrix.core.validation import (
    check_2d,
    check_array,
    check_index,
    check_not_empty,
    check_positive_int,
    check_range,
    check_replacement_shape,
)
from pymatrix.matrix._broadcast import resolve_broadcast
from pymatrix.matrix._storage import Storage
from pymatrix.matrix.formatting import render
from pymatrix.matrix import linalg as _linalg
from pymatrix.matrix import reductions as _red
from pymatrix.matrix.reductions import Extremum, Extremum2D


_kernels: Kernels = select_backend('auto')


def get_backend() -> Kernels:
    """Kernels used by every Matrix operation."""
    return _kernels


def set_backend(backend: BackendChoice | Kernels) -> Kernels:
    """
    Swap the numeric backend used by Matrix operations.

    Returns:
        The previously active backend, so callers can restore it
    """
    global _kernels
    previous = _kernels
    _kernels = select_backend(backend)
    return previous


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _unpack_range(column_range: Any, name: str) -> tuple[Any, Any]:
    if isinstance(column_range, range):
        if column_range.step != 1:
            raise ValidationError(f"{name}: range step must be 1, got {column_range.step}")
        return column_range.start, column_range.stop
    try:
        lo, hi = column_range
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"{name}: expected range or (lo, hi) pair, got {column_range!r}"
        ) from e
    return lo, hi


def as_column_range(column_range: Any, bound: int, name: str) -> tuple[int, int]:
    """Accept a step-1 ``range`` or a (lo, hi) pair as a half-open column range."""
    lo, hi = _unpack_range(column_range, name)
    return check_range(lo, hi, bound, name)


def _as_matrix(value: Any, name: str) -> Matrix:
    if isinstance(value, Matrix):
        return value
    try:
        return Matrix(value)
    except ValidationError as e:
        raise ValidationError(f"{name}: {e}") from e


def rows_to_array(
    data: Sequence[Sequence[float]] | NDArray[Any],
    column_range: Any = None,
    name: str = 'data',
) -> NDArray[np.float64]:
    """
    Build a 2-D buffer from nested rows, optionally keeping columns [lo, hi).

    Without a range every row must have the length of the first row.
    With a range every row must be at least hi long.

    Raises:
        DimensionError: On empty input or rows of the wrong length
    """
    rows = [check_array(row, f"{name}[{i}]") for i, row in enumerate(data)]
    if not rows:
        raise DimensionError(f"{name}: at least one row is required")
    for i, row in enumerate(rows):
        if row.ndim != 1:
            raise DimensionError(
                f"{name}[{i}]: expected a flat row, got {row.ndim}D with shape {row.shape}"
            )

    width = len(rows[0])
    if column_range is None:
        if width == 0:
            raise DimensionError(f"{name}: rows must not be empty")
        for i, row in enumerate(rows):
            if len(row) != width:
                raise DimensionError(
                    f"{name}[{i}]: expected {width} columns, got {len(row)}"
                )
        return np.array(rows, dtype=np.float64)

    lo, hi = _unpack_range(column_range, 'column_range')
    # Upper bound is checked per row below; short rows are a shape problem.
    lo, hi = check_range(lo, hi, sys.maxsize, 'column_range')
    for i, row in enumerate(rows):
        if len(row) < hi:
            raise DimensionError(
                f"{name}[{i}]: has {len(row)} columns, range [{lo}, {hi}) needs {hi}"
            )
    return np.array([row[lo:hi] for row in rows], dtype=np.float64)


class Matrix:
    """
    Dense row-major matrix of doubles.

    Args:
        data: Nested rows, a flat sequence (becomes a 1 x N row vector),
            a 1-D or 2-D numpy array, or another Matrix (logical copy)

    Raises:
        ValidationError: If data is not numeric
        DimensionError: If data is empty, ragged or more than 2-D
    """

    __slots__ = ('_storage',)

    # Keep numpy from treating Matrix as an array operand: numpy scalars
    # on the left defer to our reflected operators.
    __array_ufunc__ = None

    def __init__(self, data: Matrix | ArrayLike):
        if isinstance(data, Matrix):
            self._storage = data._storage.share()
            return

        array = check_array(data, 'data')
        if array.ndim == 1:
            array = array.reshape(1, -1)
        check_2d(array, 'data')
        check_not_empty(array, 'data')
        self._storage = Storage(_kernels.copy(array))

    @classmethod
    def _wrap(cls, array: NDArray[np.float64]) -> Matrix:
        """Adopt a freshly allocated 2-D buffer without copying."""
        m = cls.__new__(cls)
        m._storage = Storage(np.ascontiguousarray(array, dtype=np.float64))
        return m

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def _data(self) -> NDArray[np.float64]:
        return self._storage.data

    def _writable(self) -> NDArray[np.float64]:
        self._storage = self._storage.detach()
        return self._storage.data

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def columns(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    size = shape

    @property
    def length(self) -> int:
        """Larger of rows and columns; the element count of a vector."""
        return max(self.rows, self.columns)

    @property
    def is_row_vector(self) -> bool:
        return self.rows == 1

    @property
    def is_column_vector(self) -> bool:
        return self.columns == 1

    @property
    def is_scalar(self) -> bool:
        return self.rows == 1 and self.columns == 1

    @property
    def is_square(self) -> bool:
        return self.rows == self.columns

    # ------------------------------------------------------------------
    # Copies and conversion
    # ------------------------------------------------------------------

    def copy(self) -> Matrix:
        return Matrix(self)

    def __copy__(self) -> Matrix:
        return Matrix(self)

    def __deepcopy__(self, memo: dict) -> Matrix:
        return Matrix(self)

    def tolist(self) -> list[list[float]]:
        return self._data.tolist()

    def to_numpy(self) -> NDArray[np.float64]:
        """Fresh 2-D array; writing to it never affects the matrix."""
        return _kernels.copy(self._data)

    def __array__(self, dtype=None, copy=None) -> NDArray[Any]:
        return self._data.astype(dtype or np.float64, copy=True)

    @property
    def value(self) -> float:
        """Element (0, 0); the value of a 1 x 1 matrix."""
        return float(self._data[0, 0])

    scalar = value

    # ------------------------------------------------------------------
    # Element and vector access
    # ------------------------------------------------------------------

    def _vector_axis(self) -> int:
        if self.rows == 1:
            return 1
        if self.columns == 1:
            return 0
        raise IndexOutOfRangeError(
            f"Single-index access needs a row or column vector, "
            f"got {self.rows}x{self.columns} matrix"
        )

    def _locate(self, key: Any) -> tuple[int, int]:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexOutOfRangeError(f"Expected (row, column), got {len(key)} indices")
            r = check_index(key[0], self.rows, 'row')
            c = check_index(key[1], self.columns, 'column')
            return r, c
        axis = self._vector_axis()
        i = check_index(key, self.length, 'index')
        return (0, i) if axis == 1 else (i, 0)

    def __getitem__(self, key: Any) -> float:
        return float(self._data[self._locate(key)])

    def __setitem__(self, key: Any, value: float) -> None:
        if not _is_scalar(value):
            raise ValidationError(
                f"value: expected a real number, got {type(value).__name__}"
            )
        location = self._locate(key)
        self._writable()[location] = float(value)

    def row(self, r: int) -> Matrix:
        """Row r as a 1 x columns matrix."""
        r = check_index(r, self.rows, 'row')
        return Matrix._wrap(self._data[r:r + 1, :].copy())

    def set_row(self, r: int, replacement: Matrix) -> None:
        replacement = _as_matrix(replacement, 'replacement')
        r = check_index(r, self.rows, 'row')
        check_replacement_shape(replacement.shape, (1, self.columns), 'row')
        self._writable()[r, :] = replacement._data[0, :]

    def column(self, c: int) -> Matrix:
        """Column c as a rows x 1 matrix."""
        c = check_index(c, self.columns, 'column')
        return Matrix._wrap(self._data[:, c:c + 1].copy())

    def set_column(self, c: int, replacement: Matrix) -> None:
        replacement = _as_matrix(replacement, 'replacement')
        c = check_index(c, self.columns, 'column')
        check_replacement_shape(replacement.shape, (self.rows, 1), 'column')
        self._writable()[:, c] = replacement._data[:, 0]

    def row_range(self, lo: int, hi: int) -> Matrix:
        """Rows [lo, hi) as a (hi - lo) x columns matrix."""
        lo, hi = check_range(lo, hi, self.rows, 'rows')
        return Matrix._wrap(self._data[lo:hi, :].copy())

    def set_row_range(self, lo: int, hi: int, replacement: Matrix) -> None:
        replacement = _as_matrix(replacement, 'replacement')
        lo, hi = check_range(lo, hi, self.rows, 'rows')
        check_replacement_shape(replacement.shape, (hi - lo, self.columns), 'rows')
        self._writable()[lo:hi, :] = replacement._data

    def column_range(self, lo: int, hi: int) -> Matrix:
        """Columns [lo, hi) as a rows x (hi - lo) matrix."""
        lo, hi = check_range(lo, hi, self.columns, 'columns')
        return Matrix._wrap(self._data[:, lo:hi].copy())

    def set_column_range(self, lo: int, hi: int, replacement: Matrix) -> None:
        replacement = _as_matrix(replacement, 'replacement')
        lo, hi = check_range(lo, hi, self.columns, 'columns')
        check_replacement_shape(replacement.shape, (self.rows, hi - lo), 'columns')
        self._writable()[:, lo:hi] = replacement._data

    def copy_rows(self, indices: Sequence[int]) -> Matrix:
        """
        New matrix made of the given rows, in the given order.

        Duplicates are allowed; an empty index list is rejected.
        """
        picked = [check_index(i, self.rows, 'row') for i in indices]
        if not picked:
            raise DimensionError("indices: at least one row index is required")
        return Matrix._wrap(self._data[picked, :])

    def load(
        self,
        source: Sequence[Sequence[float]] | Matrix,
        column_range: Any,
        start_column: int,
    ) -> None:
        """
        Copy columns [lo, hi) of each source row into this matrix.

        Source row i lands in row i, columns
        [start_column, start_column + hi - lo). Rows past the end of the
        source are left untouched.

        Raises:
            DimensionError: If a source row is too short for the range
            IndexOutOfRangeError: If the destination block does not fit
        """
        if isinstance(source, Matrix):
            source = source._data
        block = rows_to_array(source, column_range, name='source')
        n_rows, width = block.shape
        if n_rows > self.rows:
            raise IndexOutOfRangeError(
                f"source: {n_rows} rows do not fit in {self.rows}-row matrix",
                index=n_rows,
                bound=self.rows,
            )
        start = check_index(start_column, self.columns, 'start_column')
        if start + width > self.columns:
            raise IndexOutOfRangeError(
                f"start_column: columns [{start}, {start + width}) outside "
                f"[0, {self.columns})",
                index=start + width,
                bound=self.columns,
            )
        self._writable()[:n_rows, start:start + width] = block

    def tile(self, d: int) -> Matrix:
        """Repeat a row vector d times, giving a d x columns matrix."""
        if self.rows != 1:
            raise ShapeMismatchError(
                f"tile requires a row vector, got {self.rows}x{self.columns} matrix",
                lhs_shape=self.shape,
                operation='tile',
            )
        d = check_positive_int(d, 'd')
        return Matrix._wrap(np.repeat(self._data, d, axis=0))

    # ------------------------------------------------------------------
    # Sequence protocol: rows
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.rows

    def __iter__(self) -> Iterator[NDArray[np.float64]]:
        # Snapshot now, not on first next(): later writes must not leak in
        snapshot = _kernels.copy(self._data)
        snapshot.flags.writeable = False
        return iter(snapshot)

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def allclose(
        self,
        other: Matrix,
        rtol: float = DEFAULT_RTOL,
        atol: float = DEFAULT_ATOL,
    ) -> bool:
        """Same shape and every element within atol + rtol * |other|."""
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def __str__(self) -> str:
        return render(self._data)

    def __repr__(self) -> str:
        return f"Matrix({self.tolist()!r})"

    # ------------------------------------------------------------------
    # Broadcasting arithmetic
    # ------------------------------------------------------------------

    def _elementwise(self, other: Any, operation: str, reflected: bool = False) -> Matrix:
        if isinstance(other, Matrix):
            resolve_broadcast(self.shape, other.shape, operation)
            a, b = self._data, other._data
            if operation == 'add':
                return Matrix._wrap(_kernels.axpy(1.0, b, a))
            if operation == 'subtract':
                return Matrix._wrap(_kernels.axpy(-1.0, b, a))
        elif _is_scalar(other):
            a, b = self._data, float(other)
            if reflected:
                a, b = b, a
        else:
            return NotImplemented

        kernel = {
            'add': _kernels.add,
            'subtract': _kernels.subtract,
            'multiply': _kernels.multiply,
            'divide': _kernels.divide,
        }[operation]
        return Matrix._wrap(kernel(a, b))

    def __add__(self, other: Any) -> Matrix:
        return self._elementwise(other, 'add')

    def __radd__(self, other: Any) -> Matrix:
        return self._elementwise(other, 'add', reflected=True)

    def __sub__(self, other: Any) -> Matrix:
        return self._elementwise(other, 'subtract')

    def __rsub__(self, other: Any) -> Matrix:
        return self._elementwise(other, 'subtract', reflected=True)

    def __mul__(self, other: Any) -> Matrix:
        return self._elementwise(other, 'multiply')

    def __rmul__(self, other: Any) -> Matrix:
        return self._elementwise(other, 'multiply', reflected=True)

    def __truediv__(self, other: Any) -> Matrix:
        return self._elementwise(other, 'divide')

    def __rtruediv__(self, other: Any) -> Matrix:
        return self._elementwise(other, 'divide', reflected=True)

    def __neg__(self) -> Matrix:
        return Matrix._wrap(_kernels.scale(-1.0, self._data))

    def __pos__(self) -> Matrix:
        return Matrix(self)

    # ------------------------------------------------------------------
    # Linear algebra
    # ------------------------------------------------------------------

    def transpose(self) -> Matrix:
        return Matrix._wrap(_linalg.transpose_array(_kernels, self._data))

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def __matmul__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix._wrap(_linalg.matmul_array(_kernels, self._data, other._data))

    def mdiv(self, other: Matrix) -> Matrix:
        """Right division: self @ inverse(other)."""
        other = _as_matrix(other, 'divisor')
        return Matrix._wrap(_linalg.mrdivide_array(_kernels, self._data, other._data))

    def inverse(self) -> Matrix:
        """
        Inverse by LU factorization with partial pivoting.

        Raises:
            NotSquareError: If the matrix is not square
            SingularMatrixError: If the matrix is singular

        Warns:
            IllConditionedWarning: If the matrix is nearly singular
        """
        return Matrix._wrap(_linalg.inverse_array(_kernels, self._data))

    # ------------------------------------------------------------------
    # Elementwise functions
    # ------------------------------------------------------------------

    def exp(self) -> Matrix:
        return Matrix._wrap(_kernels.exp(self._data))

    def log(self) -> Matrix:
        return Matrix._wrap(_kernels.log(self._data))

    def pow(self, alpha: float) -> Matrix:
        if not _is_scalar(alpha):
            raise ValidationError(f"alpha: expected a real number, got {type(alpha).__name__}")
        return Matrix._wrap(_kernels.pow(self._data, float(alpha)))

    def sqrt(self) -> Matrix:
        return Matrix._wrap(_kernels.sqrt(self._data))

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------

    def sum(self) -> float:
        return _red.sum_all(_kernels, self._data)

    def sum_rows(self) -> Matrix:
        """Sum of each row, as a column vector."""
        return Matrix._wrap(_red.sum_axis(_kernels, self._data, axis=1))

    def sum_columns(self) -> Matrix:
        """Sum of each column, as a row vector."""
        return Matrix._wrap(_red.sum_axis(_kernels, self._data, axis=0))

    def min_row(self, r: int) -> Extremum:
        r = check_index(r, self.rows, 'row')
        return _red.vector_extremum(_kernels, self._data[r, :], 'min')

    def max_row(self, r: int) -> Extremum:
        r = check_index(r, self.rows, 'row')
        return _red.vector_extremum(_kernels, self._data[r, :], 'max')

    def minmax_row(self, r: int) -> tuple[Extremum, Extremum]:
        return self.min_row(r), self.max_row(r)

    def min_column(self, c: int) -> Extremum:
        c = check_index(c, self.columns, 'column')
        return _red.vector_extremum(_kernels, self._data[:, c], 'min')

    def max_column(self, c: int) -> Extremum:
        c = check_index(c, self.columns, 'column')
        return _red.vector_extremum(_kernels, self._data[:, c], 'max')

    def minmax_column(self, c: int) -> tuple[Extremum, Extremum]:
        return self.min_column(c), self.max_column(c)

    def min_rows(self) -> Matrix:
        """Minimum of each row, as a column vector."""
        return Matrix._wrap(_red.axis_extrema(_kernels, self._data, axis=1, kind='min'))

    def max_rows(self) -> Matrix:
        """Maximum of each row, as a column vector."""
        return Matrix._wrap(_red.axis_extrema(_kernels, self._data, axis=1, kind='max'))

    def min_columns(self) -> Matrix:
        """Minimum of each column, as a row vector."""
        return Matrix._wrap(_red.axis_extrema(_kernels, self._data, axis=0, kind='min'))

    def max_columns(self) -> Matrix:
        """Maximum of each column, as a row vector."""
        return Matrix._wrap(_red.axis_extrema(_kernels, self._data, axis=0, kind='max'))

    def minmax_columns(self) -> tuple[Matrix, Matrix]:
        return self.min_columns(), self.max_columns()

    def min(self) -> Extremum2D:
        return _red.matrix_extremum(_kernels, self._data, 'min')

    def max(self) -> Extremum2D:
        return _red.matrix_extremum(_kernels, self._data, 'max')

    def _column_statistic(self, column_range: Any, full_width: bool, statistic) -> Matrix:
        if column_range is None:
            lo, hi = 0, self.columns
        else:
            lo, hi = as_column_range(column_range, self.columns, 'column_range')
        stats = statistic(_kernels, self._data[:, lo:hi])
        if full_width:
            stats = _red.widen(_kernels, stats, lo, self.columns)
        return Matrix._wrap(stats)

    def mean(self, column_range: Any = None, *, full_width: bool = False) -> Matrix:
        """
        Mean of each column in column_range.

        Args:
            column_range: range(lo, hi) or (lo, hi); None for all columns
            full_width: Return a 1 x columns row with columns outside the
                range set to zero, instead of a 1 x (hi - lo) row

        Returns:
            Row vector of column means
        """
        return self._column_statistic(column_range, full_width, _red.column_mean)

    def std(self, column_range: Any = None, *, full_width: bool = False) -> Matrix:
        """
        Sample standard deviation (divisor rows - 1) of each column.

        Same range handling as mean(). A single-row matrix gives NaN.
        """
        return self._column_statistic(column_range, full_width, _red.column_std)
