"""
config.py
~~~~~~~~~

Environment-driven settings and logging setup.

Recognised variables:
- ``LOG_LEVEL``: logging level name used by :func:`configure_logging`
- ``NNMATRIX_RANDOM_SEED``: seed for the shared random generator
- ``NNMATRIX_PRINT_PRECISION``: decimals used by the diagnostic formatter
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_PRINT_PRECISION = 6


@dataclass(frozen=True)
class Settings:
    """Snapshot of the package configuration."""

    log_level: int = logging.INFO
    random_seed: Optional[int] = None
    print_precision: int = DEFAULT_PRINT_PRECISION


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            f"{name} must be an integer, got {raw!r}"
        ) from None


def get_settings() -> Settings:
    """
    Read the current settings from the environment.

    Returns:
        Settings: Parsed configuration

    Raises:
        ValueError: If a numeric variable cannot be parsed or is out of range
    """
    log_level_str = os.getenv('LOG_LEVEL', 'INFO').upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    random_seed = None
    raw_seed = os.getenv('NNMATRIX_RANDOM_SEED')
    if raw_seed:
        random_seed = _parse_int('NNMATRIX_RANDOM_SEED', raw_seed)

    print_precision = DEFAULT_PRINT_PRECISION
    raw_precision = os.getenv('NNMATRIX_PRINT_PRECISION')
    if raw_precision:
        print_precision = _parse_int('NNMATRIX_PRINT_PRECISION', raw_precision)
        if print_precision < 0:
            raise ValueError(
                f"NNMATRIX_PRINT_PRECISION must be non-negative, "
                f"got {print_precision}"
            )

    return Settings(
        log_level=log_level,
        random_seed=random_seed,
        print_precision=print_precision
    )


def configure_logging(level: Optional[int] = None) -> None:
    """
    Set up logging for applications that use the package.

    The library itself never calls this; entry points do.

    Args:
        level: Explicit level, overriding ``LOG_LEVEL``
    """
    if level is None:
        level = get_settings().log_level

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger('nnmatrix').setLevel(level)
