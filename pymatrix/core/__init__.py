"""
Core infrastructure for PyMatrix.

This module provides the exception hierarchy, input validators, the
numeric backend protocol, and the compute kernels used by the Matrix
type.

Key components:
    protocols: Kernels protocol (numeric backend contract)
    exceptions: Exception hierarchy
    validation: Input validators
    compute: CPU kernels, precision constants, random source, LU
"""

from pymatrix.core.protocols import Kernels
from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionError,
    ShapeError,
    ShapeMismatchError,
    NotSquareError,
    IndexOutOfRangeError,
    IncompatibleReplacementShapeError,
    NumericalError,
    SingularMatrixError,
    IllConditionedWarning,
)

__all__ = [
    # Protocols
    "Kernels",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "ShapeError",
    "ShapeMismatchError",
    "NotSquareError",
    "IndexOutOfRangeError",
    "IncompatibleReplacementShapeError",
    "NumericalError",
    "SingularMatrixError",
    "IllConditionedWarning",
]
