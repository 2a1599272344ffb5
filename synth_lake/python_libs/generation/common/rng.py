"""
Deterministic random number service.

Every thread owns one ``numpy.random.Generator`` that is created lazily (from
OS entropy) the first time it is used, or explicitly with ``initialize_rng``.
Two runs that initialise with the same seed and perform the same ordered
draws on the same thread produce the same values.

Column generation does not share the thread generator. Each column receives
its own ``ColumnStreams`` derived from a root seed and the column index, so
the output of a run depends only on the seed and never on which worker
thread picked up which column.
"""

from __future__ import annotations

import logging
import string
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, TypeVar

import numpy as np

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALPHANUMERIC = string.digits + string.ascii_uppercase + string.ascii_lowercase
ALPHANUMERIC_BYTES = np.frombuffer(ALPHANUMERIC.encode("ascii"), dtype=np.uint8)

# Upper bound (exclusive) for root seeds drawn when none is configured
MAX_SEED = 2**63 - 1

_local = threading.local()


@dataclass(frozen=True)
class ColumnStreams:
    """Independent generators owned by a single column for a whole run."""

    values: np.random.Generator
    presence: np.random.Generator


def initialize_rng(seed: Optional[int] = None) -> None:
    """Create or replace the generator of the calling thread.

    Args:
        seed: Seed for reproducible draws. ``None`` seeds from OS entropy.
    """
    _local.generator = np.random.default_rng(seed)
    logger.debug(f"Initialized thread RNG (seed={seed})")


def with_rng(fn: Callable[[np.random.Generator], T]) -> T:
    """Run ``fn`` with the generator of the calling thread, creating it if needed."""
    generator = getattr(_local, "generator", None)
    if generator is None:
        generator = np.random.default_rng()
        _local.generator = generator
    return fn(generator)


@contextmanager
def rng_context(generator: np.random.Generator) -> Iterator[np.random.Generator]:
    """Temporarily bind ``generator`` as the generator of the calling thread."""
    previous = getattr(_local, "generator", None)
    _local.generator = generator
    try:
        yield generator
    finally:
        _local.generator = previous


def random_bool() -> bool:
    """Draw a boolean."""
    return with_rng(lambda rng: bool(rng.integers(0, 2)))


def random_f64() -> float:
    """Draw a float in [0.0, 1.0)."""
    return with_rng(lambda rng: float(rng.random()))


def random_i32(low: int, high: int) -> int:
    """Draw an int32 in [low, high)."""
    return with_rng(lambda rng: int(rng.integers(low, high, dtype=np.int32)))


def random_i64(low: int, high: int) -> int:
    """Draw an int64 in [low, high)."""
    return with_rng(lambda rng: int(rng.integers(low, high, dtype=np.int64)))


def random_u32(low: int, high: int) -> int:
    """Draw a uint32 in [low, high)."""
    return with_rng(lambda rng: int(rng.integers(low, high, dtype=np.uint32)))


def random_usize(high: int) -> int:
    """Draw a non-negative integer in [0, high)."""
    return with_rng(lambda rng: int(rng.integers(0, high, dtype=np.uint64)))


def random_alphanumeric() -> str:
    """Draw one character of ``[0-9A-Za-z]``."""
    return with_rng(lambda rng: ALPHANUMERIC[int(rng.integers(0, len(ALPHANUMERIC)))])


def random_f64_range(low: float, high: float) -> float:
    """Draw a float in [low, high) by scaling a uniform draw."""
    return with_rng(lambda rng: low + float(rng.random()) * (high - low))


def resolve_seed(seed: Optional[int] = None) -> int:
    """Return ``seed``, or draw a root seed from the thread generator when it is None."""
    if seed is not None:
        return seed
    return with_rng(lambda rng: int(rng.integers(0, MAX_SEED)))


def derive_column_streams(seed: int, count: int) -> List[ColumnStreams]:
    """Derive ``count`` independent stream pairs from a root seed.

    Stream ``i`` depends only on ``(seed, i)``, so adding a column at the end
    of a schema leaves the streams of the existing columns untouched.
    """
    streams = []
    for index in range(count):
        sequence = np.random.SeedSequence(seed, spawn_key=(index,))
        values_sequence, presence_sequence = sequence.spawn(2)
        streams.append(
            ColumnStreams(
                values=np.random.default_rng(values_sequence),
                presence=np.random.default_rng(presence_sequence),
            )
        )
    return streams
