"""
matrix.py
~~~~~~~~~

Dense row-major float32 matrix and its in-place elementwise operations.

A :class:`Matrix` owns a flat backing buffer of ``rows * stride`` elements
where ``element(row, col) = buffer[row * stride + col]``. Construction
functions always use ``stride == cols``; the padding of a wider stride is
never touched by any operation.

Ownership is explicit: call :meth:`Matrix.release` (or use the matrix as a
context manager) once a value is no longer needed. Any use of a released
matrix raises :class:`~nnmatrix.errors.ReleasedMatrixError`.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from nnmatrix import random_source
from nnmatrix.errors import (
    AliasingError,
    AllocationError,
    InvalidShapeError,
    ReleasedMatrixError,
    ShapeMismatchError,
)

logger = logging.getLogger(__name__)

DTYPE = np.float32


def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidShapeError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value <= 0:
        raise InvalidShapeError(f"{name} must be positive, got {value}")
    return int(value)


class Matrix:
    """
    Row-major matrix of 32-bit floats with a configurable row stride.

    Args:
        rows: Number of logical rows
        cols: Number of logical columns
        stride: Elements between consecutive row starts (defaults to cols)

    Raises:
        InvalidShapeError: If a dimension is not a positive integer or
            stride is smaller than cols
        AllocationError: If the buffer cannot be allocated
    """

    def __init__(self, rows: int, cols: int, stride: Optional[int] = None):
        self._rows = _check_dimension('rows', rows)
        self._cols = _check_dimension('cols', cols)
        if stride is None:
            self._stride = self._cols
        else:
            self._stride = _check_dimension('stride', stride)
            if self._stride < self._cols:
                raise InvalidShapeError(
                    f"stride ({self._stride}) must be >= cols ({self._cols})"
                )

        size = self._rows * self._stride
        try:
            self._buffer: Optional[np.ndarray] = np.zeros(size, dtype=DTYPE)
        except (MemoryError, ValueError) as e:
            logger.error(
                f"Could not allocate {self._rows}x{self._cols} matrix "
                f"({size} elements): {e}"
            )
            raise AllocationError(
                f"Cannot allocate buffer of {size} elements"
            ) from e

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    @property
    def is_released(self) -> bool:
        return self._buffer is None

    @property
    def buffer(self) -> np.ndarray:
        """The flat backing buffer, padding included."""
        if self._buffer is None:
            raise ReleasedMatrixError(
                f"{self._rows}x{self._cols} matrix has been released"
            )
        return self._buffer

    def view(self) -> np.ndarray:
        """
        2-D view of the logical elements.

        Writes through the view mutate the matrix; padding columns are
        excluded.
        """
        return self.buffer.reshape(self._rows, self._stride)[:, :self._cols]

    def _offset(self, row: int, col: int) -> int:
        if not 0 <= row < self._rows or not 0 <= col < self._cols:
            raise IndexError(
                f"Index ({row}, {col}) out of range for "
                f"{self._rows}x{self._cols} matrix"
            )
        return row * self._stride + col

    def at(self, row: int, col: int) -> float:
        """Return ``element(row, col)``."""
        return float(self.buffer[self._offset(row, col)])

    def set(self, row: int, col: int, value: float) -> None:
        """Overwrite ``element(row, col)``."""
        self.buffer[self._offset(row, col)] = value

    def __getitem__(self, key: Tuple[int, int]) -> float:
        row, col = key
        return self.at(row, col)

    def __setitem__(self, key: Tuple[int, int], value: float) -> None:
        row, col = key
        self.set(row, col, value)

    def to_numpy(self) -> np.ndarray:
        """Independent 2-D copy of the logical elements."""
        return self.view().copy()

    def to_list(self) -> List[List[float]]:
        return self.view().tolist()

    def release(self) -> None:
        """
        Drop the backing buffer.

        Releasing an already released matrix does nothing.
        """
        if self._buffer is None:
            return
        self._buffer = None
        logger.debug(f"Released {self._rows}x{self._cols} matrix")

    def __enter__(self) -> 'Matrix':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    def __repr__(self) -> str:
        state = ', released' if self.is_released else ''
        return (
            f"Matrix(rows={self._rows}, cols={self._cols}, "
            f"stride={self._stride}{state})"
        )


def _require_matrix(name: str, value: Any) -> Matrix:
    if not isinstance(value, Matrix):
        raise TypeError(
            f"{name} must be a Matrix, got {type(value).__name__}"
        )
    return value


def _require_same_shape(operation: str, dest: Matrix, other: Matrix) -> None:
    if dest.shape != other.shape:
        raise ShapeMismatchError(
            f"{operation}: shape mismatch, destination is "
            f"{dest.rows}x{dest.cols} but operand is "
            f"{other.rows}x{other.cols}"
        )


def _reject_overlap(operation: str, dest: Matrix, other: Matrix) -> None:
    if dest is other:
        return
    if np.shares_memory(dest.buffer, other.buffer):
        raise AliasingError(
            f"{operation}: destination shares memory with its operand"
        )


# ============================================================================
# CONSTRUCTION
# ============================================================================

def allocate(rows: int, cols: int) -> Matrix:
    """
    Create a zero-filled matrix.

    Args:
        rows: Number of rows (positive)
        cols: Number of columns (positive)

    Returns:
        Matrix: New matrix owned by the caller
    """
    mat = Matrix(rows, cols)
    logger.debug(f"Allocated {rows}x{cols} matrix")
    return mat


def from_buffer(
    rows: int,
    cols: int,
    elements: Optional[Iterable[float]] = None
) -> Matrix:
    """
    Create a matrix from a flat row-major source.

    Only the first ``rows * cols`` source elements are used. With no source
    the matrix stays zeroed.

    Args:
        rows: Number of rows
        cols: Number of columns
        elements: Flat sequence or array of at least ``rows * cols`` values

    Returns:
        Matrix: New matrix owned by the caller

    Raises:
        ShapeMismatchError: If the source holds too few elements
    """
    mat = allocate(rows, cols)
    if elements is None:
        return mat

    if not isinstance(elements, np.ndarray):
        elements = list(elements)
    source = np.asarray(elements, dtype=DTYPE).ravel()
    needed = mat.rows * mat.cols
    if source.size < needed:
        mat.release()
        raise ShapeMismatchError(
            f"Source has {source.size} elements, "
            f"{rows}x{cols} matrix needs {needed}"
        )
    mat.view()[...] = source[:needed].reshape(mat.rows, mat.cols)
    return mat


def from_rows(values: Sequence[Sequence[float]]) -> Matrix:
    """
    Create a matrix from nested row sequences.

    Example:
        >>> m = from_rows([[1, 2], [3, 4]])
        >>> m[1, 0]
        3.0
    """
    rows = [list(row) for row in values]
    if not rows or not rows[0]:
        raise InvalidShapeError("Matrix rows must be non-empty")
    cols = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != cols:
            raise InvalidShapeError(
                f"Row {index} has {len(row)} elements, expected {cols}"
            )
    return from_buffer(len(rows), cols, [x for row in rows for x in row])


def random_uniform(rows: int, cols: int) -> Matrix:
    """
    Create a matrix filled with draws in ``[0, 1)`` from the shared generator.

    Consecutive calls consume consecutive draws; results are reproducible
    only when the caller seeds :mod:`nnmatrix.random_source`.
    """
    mat = allocate(rows, cols)
    block = random_source.uniform_block(mat.rows * mat.cols)
    mat.view()[...] = block.reshape(mat.rows, mat.cols)
    return mat


def identity(size: int) -> Matrix:
    """Create a ``size x size`` identity matrix."""
    mat = allocate(size, size)
    np.fill_diagonal(mat.view(), 1.0)
    return mat


# ============================================================================
# ELEMENTWISE ARITHMETIC
# ============================================================================

def accumulate(dest: Matrix, other: Matrix) -> Matrix:
    """
    Add ``other`` into ``dest`` position-wise, in place.

    Raises:
        ShapeMismatchError: If the shapes differ
        AliasingError: If distinct matrices share memory
    """
    _require_matrix('dest', dest)
    _require_matrix('other', other)
    _require_same_shape('accumulate', dest, other)
    _reject_overlap('accumulate', dest, other)

    view = dest.view()
    view += other.view()
    return dest


def scale(mat: Matrix, factor: float) -> Matrix:
    """Multiply every element of ``mat`` by ``factor``, in place."""
    _require_matrix('mat', mat)
    view = mat.view()
    view *= DTYPE(factor)
    return mat


def copy_into(dest: Matrix, src: Matrix) -> Matrix:
    """
    Overwrite ``dest`` with the values of ``src``.

    The copy is value-independent: later mutation of either matrix does not
    affect the other.

    Raises:
        ShapeMismatchError: If the shapes differ
        AliasingError: If distinct matrices share memory
    """
    _require_matrix('dest', dest)
    _require_matrix('src', src)
    _require_same_shape('copy_into', dest, src)
    _reject_overlap('copy_into', dest, src)

    if dest is not src:
        dest.view()[...] = src.view()
    return dest


def clone(mat: Matrix) -> Matrix:
    """Return a new matrix holding a copy of ``mat``."""
    _require_matrix('mat', mat)
    return copy_into(allocate(mat.rows, mat.cols), mat)


def apply_pointwise(mat: Matrix, transform: Callable[[float], float]) -> Matrix:
    """
    Replace every element ``x`` of ``mat`` with ``transform(x)``, in place.

    Args:
        mat: Matrix to transform
        transform: Pure scalar function, e.g. an activation

    Returns:
        Matrix: ``mat`` itself
    """
    _require_matrix('mat', mat)
    if not callable(transform):
        raise TypeError(
            f"transform must be callable, got {type(transform).__name__}"
        )

    vectorized = np.vectorize(lambda x: transform(float(x)), otypes=[DTYPE])
    view = mat.view()
    view[...] = vectorized(view)
    return mat
