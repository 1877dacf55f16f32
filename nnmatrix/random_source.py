"""
random_source.py
~~~~~~~~~~~~~~~~

Process-wide pseudo-random generator shared by random matrix construction.

Draws are serialized with a lock so that concurrent callers consume
sequential blocks of the stream. Seeding is left to the caller, either
through :func:`seed` or the ``NNMATRIX_RANDOM_SEED`` environment variable
read when the generator is first created.
"""

import logging
import threading
from typing import Optional

import numpy as np

from nnmatrix.config import get_settings

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_generator: Optional[np.random.Generator] = None


def _get_generator() -> np.random.Generator:
    # Caller must hold _lock.
    global _generator
    if _generator is None:
        random_seed = get_settings().random_seed
        _generator = np.random.default_rng(random_seed)
        logger.debug(f"Created shared generator (seed={random_seed})")
    return _generator


def seed(value: Optional[int]) -> None:
    """
    Reseed the shared generator.

    Args:
        value: Seed value, or None for fresh OS entropy
    """
    global _generator
    with _lock:
        _generator = np.random.default_rng(value)
    logger.debug(f"Reseeded shared generator (seed={value})")


def set_generator(generator: np.random.Generator) -> None:
    """Install a caller-supplied generator as the shared one."""
    global _generator
    if not isinstance(generator, np.random.Generator):
        raise TypeError(
            f"Expected numpy.random.Generator, got {type(generator).__name__}"
        )
    with _lock:
        _generator = generator


def reset() -> None:
    """Drop the shared generator so the next draw recreates it from settings."""
    global _generator
    with _lock:
        _generator = None


def uniform_block(count: int) -> np.ndarray:
    """
    Draw ``count`` float32 values in ``[0, 1)`` as one uninterrupted block.

    Args:
        count: Number of values to draw

    Returns:
        np.ndarray: Flat float32 array of length ``count``
    """
    with _lock:
        return _get_generator().random(count, dtype=np.float32)
