"""
PyMatrix: dense row-major matrices with value semantics.

NumPy/Octave-like ergonomics behind one shape-checked Matrix type:
broadcasting elementwise arithmetic, LU-based inversion, matrix
products and column statistics, for small machine-learning routines.

Submodules:
    matrix: The Matrix type, factories and free functions
    core: Exceptions, validation, numeric kernels
"""

__version__ = "0.1.0"

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
from pymatrix.core.compute.random import UniformSource
from pymatrix.matrix import (
    Matrix,
    get_backend,
    set_backend,
    zeros,
    ones,
    full,
    identity,
    random,
    from_rows,
    from_vector,
    row_vector,
    column_vector,
    arange,
    transpose,
    matmul,
    mrdivide,
    inv,
    exp,
    log,
    power,
    sqrt,
    Extremum,
    Extremum2D,
)

__all__ = [
    "__version__",
    # Matrix
    "Matrix",
    "get_backend",
    "set_backend",
    "UniformSource",
    # Factories
    "zeros",
    "ones",
    "full",
    "identity",
    "random",
    "from_rows",
    "from_vector",
    "row_vector",
    "column_vector",
    "arange",
    # Linear algebra
    "transpose",
    "matmul",
    "mrdivide",
    "inv",
    # Elementwise
    "exp",
    "log",
    "power",
    "sqrt",
    # Results
    "Extremum",
    "Extremum2D",
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
