"""
nnmatrix package
~~~~~~~~~~~~~~~~

Dense float32 matrices and the arithmetic used by simple feed-forward
neural networks: construction, elementwise updates, matrix products,
valid-mode correlation and pointwise activations.
"""

from nnmatrix.errors import (
    AliasingError,
    AllocationError,
    InsufficientOperandsError,
    InvalidShapeError,
    MatrixError,
    ReleasedMatrixError,
    ShapeMismatchError,
)
from nnmatrix.matrix import (
    Matrix,
    accumulate,
    allocate,
    apply_pointwise,
    clone,
    copy_into,
    from_buffer,
    from_rows,
    identity,
    random_uniform,
    scale,
)
from nnmatrix.linalg import chain_multiply, correlate, dot, matmul
from nnmatrix.diagnostics import format_matrix, log_matrix

__version__ = "1.0.0"

__all__ = [
    'AliasingError',
    'AllocationError',
    'InsufficientOperandsError',
    'InvalidShapeError',
    'Matrix',
    'MatrixError',
    'ReleasedMatrixError',
    'ShapeMismatchError',
    'accumulate',
    'allocate',
    'apply_pointwise',
    'chain_multiply',
    'clone',
    'copy_into',
    'correlate',
    'dot',
    'format_matrix',
    'from_buffer',
    'from_rows',
    'identity',
    'log_matrix',
    'matmul',
    'random_uniform',
    'scale',
]
