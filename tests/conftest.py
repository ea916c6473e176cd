"""
Shared pytest fixtures for the matrix_ops test suite.

This module provides:
- Small reference matrices used across the operator tests
- A helper to compare a matrix against nested lists with tolerance
- Settings overrides through environment variables
"""

import logging

import pytest

from matrix_ops import SquareMatrix
from matrix_ops.core.config import get_settings


@pytest.fixture
def m1() -> SquareMatrix:
    """2x2 matrix [[1, 2], [3, 4]] (sum 10)."""
    return SquareMatrix.from_rows([[1.0, 2.0], [3.0, 4.0]])


@pytest.fixture
def m2() -> SquareMatrix:
    """2x2 matrix [[5, 6], [7, 8]] (sum 26)."""
    return SquareMatrix.from_rows([[5.0, 6.0], [7.0, 8.0]])


@pytest.fixture
def m3x3() -> SquareMatrix:
    """3x3 matrix [[1, 2, 3], [0, 1, 4], [5, 6, 0]] (determinant 1)."""
    return SquareMatrix.from_rows([[1, 2, 3], [0, 1, 4], [5, 6, 0]])


@pytest.fixture
def assert_matrix_values():
    """Helper asserting a matrix holds the expected rows within tolerance."""
    def _assert_values(matrix: SquareMatrix, expected: list[list[float]], rel: float = 1e-12) -> None:
        assert matrix.size == len(expected)
        for actual_row, expected_row in zip(matrix.to_python(), expected):
            assert actual_row == pytest.approx(expected_row, rel=rel, abs=1e-12)

    return _assert_values


@pytest.fixture
def override_settings(monkeypatch):
    """Set MATRIX_OPS_* environment variables and rebuild the cached settings."""
    def _override(**values):
        for key, value in values.items():
            monkeypatch.setenv(f"MATRIX_OPS_{key}", str(value))
        get_settings.cache_clear()
        return get_settings()

    yield _override
    get_settings.cache_clear()


@pytest.fixture
def restore_root_logging():
    """Put back the root logger handlers after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
