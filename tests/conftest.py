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
def int_example():
    """The 2x2 Int32 worked example: det -6, no pivoting needed."""
    return Matrix.from_rows([[4, 3], [6, 3]])


@pytest.fixture
def random_square(rng):
    """Well-conditioned 4x4 Float64 matrix (diagonally dominated)."""
    a = rng.standard_normal((4, 4)) + 4.0 * np.eye(4)
    return Matrix.from_array(a)


@pytest.fixture
def spd_matrix(rng):
    """Symmetric positive definite 4x4 Float64 matrix."""
    x = rng.standard_normal((4, 4))
    return Matrix.from_array(x @ x.T + 4.0 * np.eye(4))


@pytest.fixture
def symmetric_matrix():
    """Symmetric 3x3 with distinct eigenvalues 2 - sqrt(2), 2, 2 + sqrt(2)."""
    return Matrix.from_rows([[2.0, -1.0, 0.0], [-1.0, 2.0, -1.0], [0.0, -1.0, 2.0]])
