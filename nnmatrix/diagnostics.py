"""
diagnostics.py
~~~~~~~~~~~~~~

Human-readable rendering of matrices for debugging.
"""

import logging
from typing import Optional

from nnmatrix.config import get_settings
from nnmatrix.matrix import Matrix, _require_matrix

logger = logging.getLogger(__name__)


def format_matrix(
    mat: Matrix,
    label: str,
    precision: Optional[int] = None
) -> str:
    """
    Render a matrix row by row, tab separated, under a label.

    Args:
        mat: Matrix to render
        label: Name printed before the values
        precision: Decimal places; defaults to ``NNMATRIX_PRINT_PRECISION``

    Returns:
        str: Multi-line rendering
    """
    _require_matrix('mat', mat)
    if precision is None:
        precision = get_settings().print_precision

    lines = [f"{label} = {{"]
    for row in mat.view():
        lines.append(''.join(f"\t{value:.{precision}f} " for value in row))
    lines.append("}")
    return "\n".join(lines)


def log_matrix(mat: Matrix, label: str, level: int = logging.DEBUG) -> None:
    """Emit :func:`format_matrix` output through the package logger."""
    if logger.isEnabledFor(level):
        logger.log(level, "\n" + format_matrix(mat, label))
