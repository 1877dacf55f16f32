"""
activations.py
~~~~~~~~~~~~~~

Scalar activation functions for use with
:func:`nnmatrix.matrix.apply_pointwise`.

Both functions are pure and defined for every finite input. Sigmoid output is
clamped to the open interval ``(0, 1)`` at float32 resolution, so the value
stays strictly inside the interval once it is stored in a matrix.
"""

import math
from typing import Callable, Dict

import numpy as np

# Smallest and largest float32 values strictly inside (0, 1)
_SIGMOID_FLOOR = float(np.nextafter(np.float32(0.0), np.float32(1.0)))
_SIGMOID_CEIL = float(np.nextafter(np.float32(1.0), np.float32(0.0)))


class UnknownActivationError(KeyError):
    """No activation is registered under the requested name."""


def sigmoid(x: float) -> float:
    """Logistic function ``1 / (1 + e^-x)``."""
    if x >= 0:
        value = 1.0 / (1.0 + math.exp(-x))
    else:
        # exp(x) cannot overflow for negative x
        z = math.exp(x)
        value = z / (1.0 + z)
    return min(max(value, _SIGMOID_FLOOR), _SIGMOID_CEIL)


def relu(x: float) -> float:
    """Rectified linear unit ``max(0, x)``."""
    return x if x > 0 else 0.0


ACTIVATIONS: Dict[str, Callable[[float], float]] = {
    'sigmoid': sigmoid,
    'relu': relu,
}


def get_activation(name: str) -> Callable[[float], float]:
    """
    Look up an activation by name.

    Raises:
        UnknownActivationError: If ``name`` is not registered
    """
    try:
        return ACTIVATIONS[name.lower()]
    except KeyError:
        raise UnknownActivationError(
            f"Unknown activation '{name}', "
            f"expected one of {sorted(ACTIVATIONS)}"
        ) from None
