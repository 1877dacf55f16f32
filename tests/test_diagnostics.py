"""
test_diagnostics.py
~~~~~~~~~~~~~~~~~~~

Unit tests for matrix formatting and logging.
"""

import logging

import pytest

from nnmatrix.diagnostics import format_matrix, log_matrix
from nnmatrix.matrix import from_rows, identity


@pytest.mark.unit
class TestFormatMatrix:
    """Test the human-readable rendering."""

    def test_layout(self, square):
        """Test label line, tab-separated rows and closing brace."""
        text = format_matrix(square, "A")

        assert text.splitlines() == [
            "A = {",
            "\t1.000000 \t2.000000 ",
            "\t3.000000 \t4.000000 ",
            "}",
        ]

    def test_explicit_precision(self):
        """Test rendering with a given number of decimals."""
        text = format_matrix(from_rows([[0.25, -1.5]]), "v", precision=2)
        assert text.splitlines()[1] == "\t0.25 \t-1.50 "

    def test_precision_from_environment(self, monkeypatch):
        """Test that NNMATRIX_PRINT_PRECISION sets the default precision."""
        monkeypatch.setenv('NNMATRIX_PRINT_PRECISION', '1')
        text = format_matrix(identity(2), "I")
        assert text.splitlines()[1:3] == ["\t1.0 \t0.0 ", "\t0.0 \t1.0 "]

    def test_non_matrix_rejected(self):
        """Test that only matrices can be formatted."""
        with pytest.raises(TypeError):
            format_matrix([[1.0]], "x")


@pytest.mark.unit
class TestLogMatrix:
    """Test logging of matrices."""

    def test_logs_rendering_when_enabled(self, square, caplog):
        """Test that the rendering is logged at the requested level."""
        with caplog.at_level(logging.DEBUG, logger='nnmatrix.diagnostics'):
            log_matrix(square, "weights")

        assert "weights = {" in caplog.text
        assert "\t4.000000 " in caplog.text

    def test_silent_when_disabled(self, square, caplog):
        """Test that nothing is logged below the effective level."""
        with caplog.at_level(logging.WARNING, logger='nnmatrix.diagnostics'):
            log_matrix(square, "weights", level=logging.INFO)

        assert caplog.records == []
