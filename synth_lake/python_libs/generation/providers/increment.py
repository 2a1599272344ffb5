"""Increment provider: a pure function of the row index."""

from __future__ import annotations

from typing import Any, Dict

import numpy as np
import pyarrow as pa

from synth_lake.python_libs.generation.common.constants import ProviderType
from synth_lake.python_libs.generation.common.exceptions import ConfigurationError
from synth_lake.python_libs.generation.providers.base_provider import (
    ValueProvider,
    get_int_param,
)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class IncrementIntegerProvider(ValueProvider, provider_type=ProviderType.INCREMENT_INTEGER):
    """``start + row_index * step``. Never touches the RNG."""

    arrow_type = pa.int64()

    def __init__(self, start: int = 0, step: int = 1):
        for name, param in (("start", start), ("step", step)):
            if not INT64_MIN <= param <= INT64_MAX:
                raise ConfigurationError(f"{name} must fit in a signed 64-bit integer, got {param}")
        self.start = start
        self.step = step

    @classmethod
    def from_config(cls, column: Dict[str, Any]) -> "IncrementIntegerProvider":
        try:
            return cls(
                start=get_int_param(column, "start", 0),
                step=get_int_param(column, "step", 1),
            )
        except ConfigurationError as e:
            raise ConfigurationError(f"Column '{column.get('name')}': {e}") from e

    def check_rows(self, rows: int) -> None:
        """The last row's value must still fit in int64."""
        if rows > 0:
            self._check_range(0, rows)

    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        if count > 0:
            self._check_range(start_index, count)
        indices = np.arange(start_index, start_index + count, dtype=np.int64)
        # Intermediate products may wrap; the result is exact once both ends fit
        return pa.array(self.start + indices * self.step, type=self.arrow_type)

    def value(self, row_index: int) -> int:
        return self.start + row_index * self.step

    def _check_range(self, start_index: int, count: int) -> None:
        for row_index in (start_index, start_index + count - 1):
            if not INT64_MIN <= self.value(row_index) <= INT64_MAX:
                raise ConfigurationError(
                    f"start + row_index * step overflows int64 at row {row_index} "
                    f"(start={self.start}, step={self.step})"
                )
