"""
Dense matrix module.

Public API:
    Matrix                          - the matrix value type
    zeros, ones, full, identity     - fill patterns
    random                          - uniform [0, 1] draws (seedable)
    from_rows, from_vector          - nested-row / flat-vector construction
    row_vector, column_vector       - flat-vector shorthands
    arange                          - integer ranges as vectors
    transpose, matmul, mrdivide, inv - linear algebra
    exp, log, power, sqrt           - elementwise functions
    Extremum, Extremum2D            - min/max results
    get_backend, set_backend        - numeric backend selection
"""

from pymatrix.matrix.matrix import Matrix, get_backend, set_backend
from pymatrix.matrix.factories import (
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
)
from pymatrix.matrix.linalg import transpose, matmul, mrdivide, inv
from pymatrix.matrix.elementwise import exp, log, power, sqrt
from pymatrix.matrix.reductions import Extremum, Extremum2D

__all__ = [
    "Matrix",
    "get_backend",
    "set_backend",
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
    "transpose",
    "matmul",
    "mrdivide",
    "inv",
    "exp",
    "log",
    "power",
    "sqrt",
    "Extremum",
    "Extremum2D",
]
