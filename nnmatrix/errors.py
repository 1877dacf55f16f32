"""
errors.py
~~~~~~~~~

Exceptions raised by matrix operations.

Every precondition violation surfaces as a subclass of :class:`MatrixError`,
which also derives from the matching builtin so callers can catch either.
"""


class MatrixError(Exception):
    """Base class for all matrix errors."""


class InvalidShapeError(MatrixError, ValueError):
    """Requested dimensions are not positive integers, or input is ragged."""


class ShapeMismatchError(MatrixError, ValueError):
    """Operand shapes are incompatible for the requested operation."""


class AliasingError(MatrixError, ValueError):
    """A destination shares memory with one of its operands."""


class InsufficientOperandsError(MatrixError, ValueError):
    """A chained operation received fewer operands than it needs."""


class ReleasedMatrixError(MatrixError, RuntimeError):
    """The matrix has been released and no longer owns a buffer."""


class AllocationError(MatrixError, MemoryError):
    """The backing buffer could not be allocated."""
