"""
Bracketed text rendering for matrices.

Presentational only. Each number is printed fixed-width, fixed-precision;
a single row is wrapped in parentheses, taller matrices use the
multi-line bracket glyphs.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

NUMBER_WIDTH = 20
NUMBER_PRECISION = 10


def _format_row(row: NDArray[np.floating[Any]]) -> str:
    return " ".join(f"{value:{NUMBER_WIDTH}.{NUMBER_PRECISION}f}" for value in row)


def render(data: NDArray[np.floating[Any]]) -> str:
    """
    Render a 2-D array, one line per row, each line newline-terminated.

    Glyphs: one row '( )'; otherwise first '⎛ ⎞', middle '⎜ ⎟', last '⎝ ⎠'.
    """
    n_rows = data.shape[0]
    lines = []
    for i, row in enumerate(data):
        if n_rows == 1:
            left, right = '(', ')'
        elif i == 0:
            left, right = '⎛', '⎞'
        elif i == n_rows - 1:
            left, right = '⎝', '⎠'
        else:
            left, right = '⎜', '⎟'
        lines.append(f"{left} {_format_row(row)} {right}\n")
    return "".join(lines)
