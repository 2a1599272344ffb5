"""Random number providers over a half-open range ``[min, max)``."""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np
import pyarrow as pa

from synth_lake.python_libs.generation.common.constants import ProviderType
from synth_lake.python_libs.generation.common.exceptions import ConfigurationError
from synth_lake.python_libs.generation.providers.base_provider import (
    ValueProvider,
    get_float_param,
    get_int_param,
)


class _RandomIntegerProvider(ValueProvider):
    """Uniform integers of a fixed width. Defaults to the full signed range."""

    dtype: type

    def __init__(self, min_value: Optional[int] = None, max_value: Optional[int] = None):
        info = np.iinfo(self.dtype)
        self.min_value = int(info.min) if min_value is None else min_value
        self.max_value = int(info.max) if max_value is None else max_value

        if self.min_value >= self.max_value:
            raise ConfigurationError(
                f"min ({self.min_value}) must be lower than max ({self.max_value})"
            )
        if self.min_value < info.min or self.max_value > info.max:
            raise ConfigurationError(
                f"range [{self.min_value}, {self.max_value}) does not fit in {info.dtype}"
            )

    @classmethod
    def from_config(cls, column: Dict[str, Any]) -> "_RandomIntegerProvider":
        info = np.iinfo(cls.dtype)
        min_value = get_int_param(column, "min", int(info.min))
        max_value = get_int_param(column, "max", int(info.max))
        try:
            return cls(min_value=min_value, max_value=max_value)
        except ConfigurationError as e:
            raise ConfigurationError(f"Column '{column.get('name')}': {e}") from e

    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        drawn = rng.integers(self.min_value, self.max_value, size=count, dtype=self.dtype)
        return pa.array(drawn, type=self.arrow_type)


class RandomI32Provider(_RandomIntegerProvider, provider_type=ProviderType.RANDOM_I32):
    dtype = np.int32
    arrow_type = pa.int32()


class RandomI64Provider(_RandomIntegerProvider, provider_type=ProviderType.RANDOM_I64):
    dtype = np.int64
    arrow_type = pa.int64()


class RandomF64Provider(ValueProvider, provider_type=ProviderType.RANDOM_F64):
    """``min + u * (max - min)`` with ``u`` uniform in [0, 1)."""

    arrow_type = pa.float64()

    DEFAULT_MIN = 0.0
    DEFAULT_MAX = 1.0

    def __init__(self, min_value: float = DEFAULT_MIN, max_value: float = DEFAULT_MAX):
        if not (math.isfinite(min_value) and math.isfinite(max_value)):
            raise ConfigurationError(f"min and max must be finite, got [{min_value}, {max_value})")
        if min_value >= max_value:
            raise ConfigurationError(
                f"min ({min_value}) must be lower than max ({max_value})"
            )
        self.min_value = float(min_value)
        self.max_value = float(max_value)

    @classmethod
    def from_config(cls, column: Dict[str, Any]) -> "RandomF64Provider":
        min_value = get_float_param(column, "min", cls.DEFAULT_MIN)
        max_value = get_float_param(column, "max", cls.DEFAULT_MAX)
        try:
            return cls(min_value=min_value, max_value=max_value)
        except ConfigurationError as e:
            raise ConfigurationError(f"Column '{column.get('name')}': {e}") from e

    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        drawn = self.min_value + rng.random(count) * (self.max_value - self.min_value)
        return pa.array(drawn, type=self.arrow_type)
