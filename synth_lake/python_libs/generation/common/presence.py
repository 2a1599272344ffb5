"""Presence policy: decides per value whether a column emits Null."""

from __future__ import annotations

import numbers
from typing import Any, Dict, Optional

import numpy as np
import pyarrow as pa
import pyarrow.compute as pc

from synth_lake.python_libs.generation.common.exceptions import ConfigurationError
from synth_lake.python_libs.generation.common.rng import random_f64


class Presence:
    """Probability that a column value is present (non-null).

    One uniform draw ``u`` is consumed for every value, whatever the
    probability. The value is Null when ``u >= probability``, so ``0.0``
    always yields Null and ``1.0`` never does.
    """

    DEFAULT_PROBABILITY = 1.0

    def __init__(self, probability: float = DEFAULT_PROBABILITY):
        if isinstance(probability, bool) or not isinstance(probability, numbers.Real):
            raise ConfigurationError(
                f"presence must be a number between 0 and 1, got {probability!r}"
            )
        if not 0.0 <= float(probability) <= 1.0:
            raise ConfigurationError(
                f"presence must be between 0 and 1, got {probability}"
            )
        self.probability = float(probability)

    @classmethod
    def from_config(cls, column: Dict[str, Any]) -> "Presence":
        """Read the optional ``presence`` key of a column declaration."""
        value = column.get("presence")
        if value is None:
            return cls()
        try:
            return cls(value)
        except ConfigurationError as e:
            raise ConfigurationError(f"Column '{column.get('name')}': {e}") from e

    @property
    def can_be_null(self) -> bool:
        return self.probability < 1.0

    def is_null(self, rng: Optional[np.random.Generator] = None) -> bool:
        """Draw once and decide for a single value."""
        draw = float(rng.random()) if rng is not None else random_f64()
        return draw >= self.probability

    def mask(self, count: int, rng: np.random.Generator) -> np.ndarray:
        """Boolean array, True where the value must be Null."""
        return rng.random(count) >= self.probability

    def apply(self, array: pa.Array, rng: np.random.Generator) -> pa.Array:
        """Replace the masked slots of ``array`` with nulls."""
        null_mask = self.mask(len(array), rng)
        if not null_mask.any():
            return array
        return pc.if_else(pa.array(null_mask), pa.scalar(None, type=array.type), array)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Presence) and other.probability == self.probability

    def __repr__(self) -> str:
        return f"Presence({self.probability})"
