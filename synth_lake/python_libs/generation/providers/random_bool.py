"""Random boolean provider."""

from __future__ import annotations

from typing import Any, Dict

import numpy as np
import pyarrow as pa

from synth_lake.python_libs.generation.common.constants import ProviderType
from synth_lake.python_libs.generation.providers.base_provider import ValueProvider


class RandomBoolProvider(ValueProvider, provider_type=ProviderType.RANDOM_BOOL):
    """One boolean draw per value."""

    arrow_type = pa.bool_()

    @classmethod
    def from_config(cls, column: Dict[str, Any]) -> "RandomBoolProvider":
        return cls()

    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        return pa.array(rng.integers(0, 2, size=count, dtype=np.int8) == 1, type=self.arrow_type)
