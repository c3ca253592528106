"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix.linalg import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def counter():
    """
    Generator factory counting 1, 2, 3, ... across calls.

    Each call to the fixture value returns a fresh generator f(i, j) whose
    count restarts at 1, so consecutive matrices are filled row-major.
    """
    def make():
        state = {'c': 0.0}

        def f(i, j):
            state['c'] += 1.0
            return state['c']
        return f
    return make


@pytest.fixture
def a22():
    """[[1, 2], [3, 4]]"""
    return Matrix([[1, 2], [3, 4]])


@pytest.fixture
def well_conditioned(rng):
    """Random 5x5 matrix made diagonally dominant (safely invertible)."""
    data = rng.standard_normal((5, 5)) + 5.0 * np.eye(5)
    return Matrix.from_array(data)
