"""
Shape resolution for binary elementwise operations.

Rules, tried in order:
    1. same shape            -> elementwise
    2. rhs is 1 x lhs.columns -> rhs row applied to every row of lhs
    3. rhs is lhs.rows x 1    -> rhs column applied to every column of lhs
    4. anything else         -> ShapeMismatchError

Broadcasting is one-sided: only the right operand is ever stretched.
"""

from typing import Literal

from pymatrix.core.exceptions import ShapeMismatchError

BroadcastMode = Literal['same', 'row', 'column']


def resolve_broadcast(
    lhs_shape: tuple[int, int],
    rhs_shape: tuple[int, int],
    operation: str,
) -> BroadcastMode:
    """
    Decide how rhs is applied to lhs.

    Args:
        lhs_shape: (rows, columns) of the left operand
        rhs_shape: (rows, columns) of the right operand
        operation: Operator name for error messages

    Returns:
        'same', 'row' or 'column'

    Raises:
        ShapeMismatchError: If no rule applies
    """
    lhs_rows, lhs_columns = lhs_shape
    rhs_rows, rhs_columns = rhs_shape

    if lhs_rows == rhs_rows and lhs_columns == rhs_columns:
        return 'same'
    if rhs_rows == 1 and rhs_columns == lhs_columns:
        return 'row'
    if rhs_columns == 1 and rhs_rows == lhs_rows:
        return 'column'

    raise ShapeMismatchError(
        f"Cannot {operation} {lhs_rows}x{lhs_columns} matrix and "
        f"{rhs_rows}x{rhs_columns} matrix",
        lhs_shape=tuple(lhs_shape),
        rhs_shape=tuple(rhs_shape),
        operation=operation,
    )
