"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def tall():
    """3x2 matrix used across arithmetic and indexing tests."""
    return Matrix([[1, 2], [3, 4], [5, 6]])


@pytest.fixture
def invertible():
    """Well-conditioned 3x3 matrix with an exactly representable inverse."""
    return Matrix([[1, 2, 3], [0, 4, 0], [3, 2, 1]])


@pytest.fixture
def extrema():
    """3x3 matrix with distinct extrema in every row and column."""
    return Matrix([[19, 7, -1], [3, 40, 15], [5, 4, 21]])


@pytest.fixture
def well_conditioned(rng):
    """Random 5x5 matrix made diagonally dominant."""
    a = rng.standard_normal((5, 5))
    return Matrix(a + 10 * np.eye(5))
