"""
Process-wide randomness for price advancement.

A single generator is created at startup and handed to every advance call,
so tests can substitute a seeded or scripted generator.
"""

from typing import Optional, Protocol

import numpy as np
import structlog

from ..utils.time import wall_clock_seed

logger = structlog.get_logger(__name__)


class StepGenerator(Protocol):
    """The slice of ``numpy.random.Generator`` the instruments rely on."""

    def integers(self, low: int, high: int) -> int: ...


def create_generator(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the run's random generator.

    Args:
        seed: Fixed seed for reproducible runs; wall-clock time when omitted

    Returns:
        Seeded numpy Generator
    """
    if seed is None:
        seed = wall_clock_seed()
        logger.debug("Seeded generator from wall clock", seed=seed)
    else:
        logger.debug("Seeded generator from fixed seed", seed=seed)

    return np.random.default_rng(seed)
