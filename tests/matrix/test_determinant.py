"""Tests for the determinant and its numerical kernels."""

import logging
import math

import numpy as np
import pytest

from matrix_ops import SquareMatrix
from matrix_ops import algorithms


class TestDeterminant:
    """Test the cofactor expansion through SquareMatrix.determinant."""

    def test_single_element(self):
        """Test det of a 1x1 matrix is its only element."""
        assert SquareMatrix.from_rows([[5.0]]).determinant() == 5.0

    def test_two_by_two(self, m1):
        """Test det [[1, 2], [3, 4]] == -2."""
        assert m1.determinant() == -2.0

    def test_singular_three_by_three(self):
        """Test the sequential 1..9 matrix is singular."""
        matrix = SquareMatrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        assert matrix.determinant() == pytest.approx(0.0, abs=1e-12)

    def test_three_by_three(self, m3x3):
        """Test a known non-singular 3x3 determinant."""
        assert m3x3.determinant() == 1.0

    @pytest.mark.parametrize("size", [1, 2, 3, 4, 5])
    def test_identity_has_unit_determinant(self, size):
        """Test det(I) == 1 for every size."""
        assert SquareMatrix.identity(size).determinant() == 1.0

    def test_identical_rows_give_zero(self):
        """Test a matrix with two equal rows is singular."""
        matrix = SquareMatrix.from_rows([[2, 7, 1], [3, 3, 3], [2, 7, 1]])
        assert matrix.determinant() == 0.0

    def test_zero_row_gives_zero(self):
        """Test a matrix with a row of zeros is singular."""
        matrix = SquareMatrix.from_rows([[1, 2, 3, 4], [0, 0, 0, 0], [5, 6, 7, 8], [9, 1, 2, 3]])
        assert matrix.determinant() == 0.0

    def test_transpose_preserves_determinant(self, m3x3):
        """Test det(A^T) == det(A)."""
        assert (~m3x3).determinant() == m3x3.determinant()

    def test_determinant_does_not_mutate(self, m3x3):
        """Test computing the determinant leaves the matrix unchanged."""
        before = m3x3.to_python()
        m3x3.determinant()
        assert m3x3.to_python() == before

    def test_numpy_method_agrees_with_cofactor(self):
        """Test the LU-based method matches the exact expansion."""
        matrix = SquareMatrix.from_rows(
            [[2, -1, 0, 3], [1, 3, 5, -2], [-2, 0, 4, 1], [6, 1, -1, 0]]
        )
        exact = matrix.determinant(method="cofactor")
        assert matrix.determinant(method="numpy") == pytest.approx(exact, rel=1e-9)
        assert exact == pytest.approx(np.linalg.det(matrix.to_numpy()), rel=1e-9)

    @pytest.mark.parametrize("method", ["NumPy", "COFACTOR"])
    def test_method_name_is_case_insensitive(self, m1, method):
        """Test method names match regardless of case, like the setting."""
        assert m1.determinant(method=method) == pytest.approx(-2.0)

    def test_unknown_method_raises(self, m1):
        """Test an unsupported method name is rejected."""
        with pytest.raises(ValueError):
            m1.determinant(method="gauss")

    def test_configured_method_is_used(self, m1, override_settings, monkeypatch):
        """Test DETERMINANT_METHOD selects the default method."""
        override_settings(DETERMINANT_METHOD="numpy")
        calls = []

        def fake_numpy_determinant(elements, size):
            calls.append(size)
            return -2.0

        monkeypatch.setattr(algorithms, "numpy_determinant", fake_numpy_determinant)
        assert m1.determinant() == -2.0
        assert calls == [2]

    def test_large_cofactor_expansion_logs_warning(self, m3x3, override_settings, caplog):
        """Test sizes above COFACTOR_WARN_SIZE emit a warning."""
        override_settings(COFACTOR_WARN_SIZE=2)
        with caplog.at_level(logging.WARNING, logger="matrix_ops.algorithms"):
            assert m3x3.determinant() == 1.0
        records = [r for r in caplog.records if r.name == "matrix_ops.algorithms"]
        assert len(records) == 1
        assert records[0].extra_data == {
            "component": "algorithms",
            "size": 3,
            "warn_size": 2,
        }

    def test_small_cofactor_expansion_is_quiet(self, m3x3, caplog):
        """Test no warning is logged at the default threshold."""
        with caplog.at_level(logging.WARNING, logger="matrix_ops.algorithms"):
            m3x3.determinant()
        assert not [r for r in caplog.records if r.name == "matrix_ops.algorithms"]


class TestAlgorithms:
    """Test the buffer-level kernels directly."""

    def test_minor_removes_row_and_column(self):
        """Test the minor drops the requested row and column."""
        elements = [1, 2, 3, 4, 5, 6, 7, 8, 9]
        assert algorithms.minor(elements, 3, 0, 0) == [5, 6, 8, 9]
        assert algorithms.minor(elements, 3, 1, 2) == [1, 2, 7, 8]
        assert algorithms.minor(elements, 3, 2, 1) == [1, 3, 4, 6]

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            (5.5, 3, 2.5),
            (-2.5, 3, 0.5),
            (10.5, 3, 1.5),
            (-7.5, 3, 1.5),
            (-6.0, 3, 0.0),
            (0.0, 4, 0.0),
            (7.0, 1, 0.0),
            (-1e-20, 3, 0.0),
        ],
    )
    def test_nonnegative_modulo(self, a, b, expected):
        """Test remainders land in [0, b)."""
        assert algorithms.nonnegative_modulo(a, b) == pytest.approx(expected)

    @pytest.mark.parametrize("a", [math.inf, -math.inf, math.nan])
    def test_nonnegative_modulo_of_non_finite_is_nan(self, a):
        """Test non-finite dividends have no remainder."""
        assert math.isnan(algorithms.nonnegative_modulo(a, 3))

    def test_element_sum(self):
        """Test the sum accumulates every element."""
        assert algorithms.element_sum([1.0, 2.0, 3.0, 4.0]) == 10.0
        assert algorithms.element_sum([]) == 0.0

    def test_cofactor_determinant_four_by_four(self):
        """Test the recursive expansion on an upper triangular matrix."""
        elements = [
            2, 1, 0, 3,
            0, 3, 5, 1,
            0, 0, 4, 2,
            0, 0, 0, 5,
        ]
        assert algorithms.cofactor_determinant(elements, 4) == 120.0

    def test_dispatch_rejects_unknown_method(self):
        """Test the dispatcher names unsupported methods."""
        with pytest.raises(ValueError, match="lu"):
            algorithms.determinant([1.0], 1, "lu", 8)
