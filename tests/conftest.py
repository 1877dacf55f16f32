"""
conftest.py
~~~~~~~~~~~

Shared fixtures for the nnmatrix test suite.
"""

import pytest

from nnmatrix import random_source
from nnmatrix.matrix import from_buffer, from_rows


@pytest.fixture(autouse=True)
def isolated_generator(monkeypatch):
    """Start every test from a fresh, unseeded shared generator."""
    monkeypatch.delenv('NNMATRIX_RANDOM_SEED', raising=False)
    monkeypatch.delenv('NNMATRIX_PRINT_PRECISION', raising=False)
    random_source.reset()
    yield
    random_source.reset()


@pytest.fixture
def square():
    """The 2x2 matrix [[1, 2], [3, 4]]."""
    return from_rows([[1, 2], [3, 4]])


@pytest.fixture
def nine():
    """3x3 matrix holding 1..9 row-major."""
    return from_buffer(3, 3, range(1, 10))


@pytest.fixture
def rectangular():
    """A 2x3 matrix with distinct values."""
    return from_rows([[0.5, -1.0, 2.0], [3.0, 0.25, -4.0]])
