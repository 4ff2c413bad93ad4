"""
Random sources for redaction selection.

The selector only needs uniform floats in [0, 1). The default source wraps
a numpy Generator seeded once per process, so consecutive screensaver
activations on the same page produce different patterns.
"""

import logging
from typing import Optional, Protocol

import numpy as np


logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def next_float(self) -> float:
        ...


class NumpyRandomSource:
    """Uniform floats drawn from a numpy Generator."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def next_float(self) -> float:
        return float(self._rng.random())


_process_source: Optional[NumpyRandomSource] = None


def get_default_source() -> NumpyRandomSource:
    """Return the process-wide source, creating it on first use."""
    global _process_source
    if _process_source is None:
        _process_source = NumpyRandomSource()
    return _process_source


def seed_default_source(seed: int) -> NumpyRandomSource:
    """
    Replace the process-wide source with a seeded one.

    Meant to be called once at startup (e.g. for reproducible previews).
    """
    global _process_source
    logger.debug(f"Seeding process random source with {seed}")
    _process_source = NumpyRandomSource(seed)
    return _process_source


def shuffle_in_place(items: list, source: RandomSource) -> None:
    """
    Fisher-Yates shuffle driven by an injectable random source.

    Args:
        items: List to shuffle in place
        source: Provider of uniform floats in [0, 1)
    """
    for i in range(len(items) - 1, 0, -1):
        # min() guards against sources returning exactly 1.0
        j = min(int(source.next_float() * (i + 1)), i)
        items[i], items[j] = items[j], items[i]
