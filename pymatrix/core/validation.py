"""
Input validation utilities for PyMatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Negative indices are out of range, never wrapped
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import operator

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pymatrix.core.exceptions import (
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
    IncompatibleReplacementShapeError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating ragged nesting, mixed types
    or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with dtype float64

    Raises:
        ValidationError: If input cannot be converted to numeric array
        DimensionError: If nested sequences are ragged
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise DimensionError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_ or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex values are not supported")

    return result.astype(np.float64, copy=False)


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_not_empty(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array has no zero-length dimension.

    Raises:
        DimensionError: If any dimension is zero
    """
    if array.size == 0:
        raise DimensionError(f"{name}: empty input with shape {array.shape}")


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 1.

    Args:
        value: Candidate dimension or count
        name: Parameter name for error messages

    Returns:
        The value as a plain int

    Raises:
        ValidationError: If value is not an integer or is < 1
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name}: expected integer, got bool")
    try:
        result = operator.index(value)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected integer, got {type(value).__name__}"
        ) from e
    if result < 1:
        raise ValidationError(f"{name}: must be >= 1, got {result}")
    return result


def check_index(index: Any, bound: int, name: str) -> int:
    """
    Verify index lies in [0, bound).

    Args:
        index: Candidate index
        bound: Exclusive upper bound
        name: Parameter name for error messages

    Returns:
        The index as a plain int

    Raises:
        IndexOutOfRangeError: If index is not an integer or out of range
    """
    if isinstance(index, bool):
        raise IndexOutOfRangeError(f"{name}: expected integer index, got bool")
    try:
        result = operator.index(index)
    except TypeError as e:
        raise IndexOutOfRangeError(
            f"{name}: expected integer index, got {type(index).__name__}"
        ) from e
    if not 0 <= result < bound:
        raise IndexOutOfRangeError(
            f"{name}: index {result} out of range [0, {bound})",
            index=result,
            bound=bound,
        )
    return result


def check_range(lo: Any, hi: Any, bound: int, name: str) -> tuple[int, int]:
    """
    Verify [lo, hi) is a non-empty half-open range inside [0, bound).

    Args:
        lo: Inclusive start
        hi: Exclusive end
        bound: Exclusive upper bound of valid indices
        name: Parameter name for error messages

    Returns:
        (lo, hi) as plain ints

    Raises:
        IndexOutOfRangeError: If the range is empty, reversed or out of bounds
    """
    try:
        lo = operator.index(lo)
        hi = operator.index(hi)
    except TypeError as e:
        raise IndexOutOfRangeError(f"{name}: range bounds must be integers") from e
    if lo < 0 or hi > bound:
        raise IndexOutOfRangeError(
            f"{name}: range [{lo}, {hi}) outside [0, {bound})",
            index=lo if lo < 0 else hi,
            bound=bound,
        )
    if lo >= hi:
        raise IndexOutOfRangeError(
            f"{name}: range [{lo}, {hi}) is empty",
            index=lo,
            bound=bound,
        )
    return lo, hi


def check_replacement_shape(
    actual: tuple[int, int],
    expected: tuple[int, int],
    name: str,
) -> None:
    """
    Verify a setter's replacement has exactly the expected shape.

    Raises:
        IncompatibleReplacementShapeError: If shapes differ
    """
    if tuple(actual) != tuple(expected):
        raise IncompatibleReplacementShapeError(
            f"{name}: expected {expected[0]}x{expected[1]} replacement, "
            f"got {actual[0]}x{actual[1]}",
            expected=tuple(expected),
            actual=tuple(actual),
        )
