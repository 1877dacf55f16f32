"""
linalg.py
~~~~~~~~~

Matrix products and valid-mode 2-D correlation.

Every function that returns a new :class:`~nnmatrix.matrix.Matrix` hands
ownership of it to the caller.
"""

import logging
from typing import Iterable

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from nnmatrix.errors import (
    AliasingError,
    InsufficientOperandsError,
    MatrixError,
    ShapeMismatchError,
)
from nnmatrix.matrix import Matrix, allocate, _require_matrix

logger = logging.getLogger(__name__)


def dot(dest: Matrix, a: Matrix, b: Matrix) -> Matrix:
    """
    Store the matrix product ``a @ b`` in ``dest``.

    ``dest`` is overwritten entirely; its prior contents do not contribute.
    ``a`` and ``b`` may be the same matrix, but ``dest`` must not share
    memory with either of them.

    Args:
        dest: Destination of shape ``(a.rows, b.cols)``
        a: Left operand
        b: Right operand with ``b.rows == a.cols``

    Returns:
        Matrix: ``dest``

    Raises:
        ShapeMismatchError: If the inner or outer dimensions disagree
        AliasingError: If ``dest`` overlaps ``a`` or ``b``
    """
    _require_matrix('dest', dest)
    _require_matrix('a', a)
    _require_matrix('b', b)

    if a.cols != b.rows:
        raise ShapeMismatchError(
            f"dot: inner dimensions differ, a is {a.rows}x{a.cols} "
            f"and b is {b.rows}x{b.cols}"
        )
    if dest.shape != (a.rows, b.cols):
        raise ShapeMismatchError(
            f"dot: destination is {dest.rows}x{dest.cols}, "
            f"expected {a.rows}x{b.cols}"
        )
    for name, operand in (('a', a), ('b', b)):
        if np.shares_memory(dest.buffer, operand.buffer):
            raise AliasingError(
                f"dot: destination shares memory with operand {name}"
            )

    dest.view()[...] = a.view() @ b.view()
    return dest


def matmul(a: Matrix, b: Matrix) -> Matrix:
    """Return ``a @ b`` in a freshly allocated matrix."""
    _require_matrix('a', a)
    _require_matrix('b', b)
    if a.cols != b.rows:
        raise ShapeMismatchError(
            f"matmul: inner dimensions differ, a is {a.rows}x{a.cols} "
            f"and b is {b.rows}x{b.cols}"
        )
    dest = allocate(a.rows, b.cols)
    try:
        return dot(dest, a, b)
    except MatrixError:
        dest.release()
        raise


def chain_multiply(matrices: Iterable[Matrix]) -> Matrix:
    """
    Multiply an ordered sequence of matrices left to right.

    Computes ``((m0 @ m1) @ m2) @ ...``. Each step writes into a new matrix;
    the superseded intermediate is released immediately. Operands supplied
    by the caller are never released.

    Args:
        matrices: Two or more matrices

    Returns:
        Matrix: The final product, owned by the caller

    Raises:
        InsufficientOperandsError: If fewer than two matrices are given
        ShapeMismatchError: At the first adjacent pair whose inner
            dimensions differ

    Example:
        >>> a = from_rows([[1, 2], [3, 4]])
        >>> chain_multiply([a, identity(2)]).to_list()
        [[1.0, 2.0], [3.0, 4.0]]
    """
    operands = list(matrices)
    if len(operands) < 2:
        raise InsufficientOperandsError(
            f"chain_multiply needs at least 2 matrices, got {len(operands)}"
        )
    for index, operand in enumerate(operands):
        _require_matrix(f"operand {index}", operand)

    product = None
    left = operands[0]
    try:
        for position in range(1, len(operands)):
            right = operands[position]
            if left.cols != right.rows:
                raise ShapeMismatchError(
                    f"chain_multiply: cannot multiply by operand {position}, "
                    f"left is {left.rows}x{left.cols} and right is "
                    f"{right.rows}x{right.cols}"
                )
            step = matmul(left, right)
            if product is not None:
                product.release()
            product = step
            left = product
            logger.debug(
                f"chain_multiply step {position}: "
                f"{product.rows}x{product.cols}"
            )
    except MatrixError as e:
        logger.error(f"chain_multiply aborted: {e}")
        if product is not None:
            product.release()
        raise

    return product


def correlate(input: Matrix, kernel: Matrix) -> Matrix:
    """
    Valid-mode 2-D cross-correlation with unit stride.

    The kernel is applied unflipped::

        out[r][c] = sum over i, j of input[r + i][c + j] * kernel[i][j]

    Args:
        input: Matrix to slide over
        kernel: Window weights, no larger than ``input`` in either dimension

    Returns:
        Matrix: New matrix of shape
        ``(input.rows - kernel.rows + 1, input.cols - kernel.cols + 1)``

    Raises:
        ShapeMismatchError: If the kernel is larger than the input
    """
    _require_matrix('input', input)
    _require_matrix('kernel', kernel)

    if kernel.rows > input.rows or kernel.cols > input.cols:
        raise ShapeMismatchError(
            f"correlate: kernel larger than input, kernel is "
            f"{kernel.rows}x{kernel.cols} and input is "
            f"{input.rows}x{input.cols}"
        )

    out_rows = input.rows - kernel.rows + 1
    out_cols = input.cols - kernel.cols + 1
    windows = sliding_window_view(input.view(), kernel.shape)

    output = allocate(out_rows, out_cols)
    output.view()[...] = np.einsum('rcij,ij->rc', windows, kernel.view())
    return output
