"""
Exception hierarchy for PyMatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Shape and index problems are ValidationErrors;
failures of the numeric kernels are NumericalErrors.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Every error is raised before any storage is written
"""


class PyMatrixError(Exception):
    """Base exception for all PyMatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Construction input has inconsistent dimensions.

    Raised when nested rows differ in length, when a column range asks
    for more columns than a row provides, or when an array has the wrong
    number of dimensions.
    """
    pass


# Construction failures are documented as ShapeError
ShapeError = DimensionError


class ShapeMismatchError(ValidationError):
    """
    Operand shapes are incompatible for an operation.

    Raised by broadcasting arithmetic, matrix multiply and matrix divide.

    Attributes:
        lhs_shape: (rows, columns) of the left operand
        rhs_shape: (rows, columns) of the right operand, if any
        operation: Name of the failing operation
    """

    def __init__(
        self,
        message: str,
        lhs_shape: tuple[int, int] | None = None,
        rhs_shape: tuple[int, int] | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.lhs_shape = lhs_shape
        self.rhs_shape = rhs_shape
        self.operation = operation


class NotSquareError(ShapeMismatchError):
    """
    A square matrix was required.

    Attributes:
        shape: (rows, columns) of the offending matrix
    """

    def __init__(
        self,
        message: str,
        shape: tuple[int, int] | None = None,
        operation: str | None = None,
    ):
        super().__init__(message, lhs_shape=shape, operation=operation)
        self.shape = shape


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    Element, row, column or range access outside valid bounds.

    Also raised when a vector accessor is used on a matrix that is neither
    a row nor a column vector. Inherits from IndexError so generic
    sequence code behaves as expected.

    Attributes:
        index: The offending index (or range bound)
        bound: The exclusive upper bound that was violated
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        bound: int | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class IncompatibleReplacementShapeError(ValidationError):
    """
    A setter was given a replacement of the wrong shape.

    Attributes:
        expected: Required (rows, columns)
        actual: (rows, columns) of the replacement
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, int] | None = None,
        actual: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when the LU factorization reports a numerically zero pivot
    (at or below max(n) * eps * ||A||_inf), or when the input contains
    non-finite values that make inversion meaningless.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Zero-based index of the first zero pivot, if known
        condition_number: Estimated condition number, if available
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        condition_number: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.condition_number = condition_number


class IllConditionedWarning(RuntimeWarning):
    """
    Inverse computed for a nearly singular matrix.

    The result is returned, but it may be dominated by rounding error.
    """
    pass
