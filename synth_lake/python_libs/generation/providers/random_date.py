"""Random date and datetime providers.

Bounds are parsed with the column's ``format`` and stored as offsets from
the Unix epoch (days for dates, seconds for datetimes). The format is kept
in the arrow field metadata so text sinks can render values with it.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Union

import numpy as np
import pyarrow as pa

from synth_lake.python_libs.generation.common.constants import (
    FORMAT_METADATA_KEY,
    ProviderType,
)
from synth_lake.python_libs.generation.common.exceptions import ConfigurationError
from synth_lake.python_libs.generation.providers.base_provider import (
    ValueProvider,
    get_str_param,
)

EPOCH_DATE = date(1970, 1, 1)
EPOCH_DATETIME = datetime(1970, 1, 1)


class _RandomTemporalProvider(ValueProvider):
    """Integer offset uniform in ``[after, before)``, rendered through ``format``."""

    DEFAULT_FORMAT: str
    DEFAULT_AFTER: str
    DEFAULT_BEFORE: str

    def __init__(self, after: int, before: int, format: Optional[str] = None):
        if after >= before:
            raise ConfigurationError(
                f"'after' must be earlier than 'before' (epoch offsets {after} >= {before})"
            )
        self.after = after
        self.before = before
        self.format = format or self.DEFAULT_FORMAT

    @classmethod
    def from_config(cls, column: Dict[str, Any]) -> "_RandomTemporalProvider":
        fmt = get_str_param(column, "format", cls.DEFAULT_FORMAT)
        after = cls._parse_bound(column, "after", cls.DEFAULT_AFTER, fmt)
        before = cls._parse_bound(column, "before", cls.DEFAULT_BEFORE, fmt)
        try:
            return cls(after=after, before=before, format=fmt)
        except ConfigurationError as e:
            raise ConfigurationError(f"Column '{column.get('name')}': {e}") from e

    @classmethod
    def _parse_bound(cls, column: Dict[str, Any], key: str, default: str, fmt: str) -> int:
        value = column.get(key, default)
        # YAML already turns unquoted ISO dates/timestamps into date objects
        if isinstance(value, (date, datetime)):
            return cls.to_offset(value)
        if not isinstance(value, str):
            raise ConfigurationError(
                f"Column '{column.get('name')}': '{key}' must be a date string, got {value!r}"
            )
        try:
            return cls.to_offset(datetime.strptime(value, fmt))
        except ValueError as e:
            raise ConfigurationError(
                f"Column '{column.get('name')}': '{key}' value '{value}' does not match format '{fmt}'"
            ) from e

    @classmethod
    def to_offset(cls, value: Union[date, datetime]) -> int:
        raise NotImplementedError

    @property
    def field_metadata(self) -> Optional[Dict[bytes, bytes]]:
        return {FORMAT_METADATA_KEY: self.format.encode("utf-8")}


class RandomDateProvider(_RandomTemporalProvider, provider_type=ProviderType.RANDOM_DATE):
    """Dates; offsets are days since 1970-01-01."""

    arrow_type = pa.date32()

    DEFAULT_FORMAT = "%Y-%m-%d"
    DEFAULT_AFTER = "1980-01-01"
    DEFAULT_BEFORE = "2000-01-01"

    @classmethod
    def to_offset(cls, value: Union[date, datetime]) -> int:
        if isinstance(value, datetime):
            value = value.date()
        return (value - EPOCH_DATE).days

    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        days = rng.integers(self.after, self.before, size=count, dtype=np.int32)
        return pa.array(days, type=pa.int32()).cast(self.arrow_type)


class RandomDatetimeProvider(_RandomTemporalProvider, provider_type=ProviderType.RANDOM_DATETIME):
    """Naive datetimes; offsets are seconds since 1970-01-01 00:00:00."""

    arrow_type = pa.timestamp("s")

    DEFAULT_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_AFTER = "1980-01-01 00:00:00"
    DEFAULT_BEFORE = "2000-01-01 00:00:00"

    @classmethod
    def to_offset(cls, value: Union[date, datetime]) -> int:
        if not isinstance(value, datetime):
            value = datetime.combine(value, datetime.min.time())
        # Timezone-aware YAML timestamps are reduced to naive wall time
        return int((value.replace(tzinfo=None) - EPOCH_DATETIME).total_seconds())

    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        seconds = rng.integers(self.after, self.before, size=count, dtype=np.int64)
        return pa.array(seconds, type=pa.int64()).cast(self.arrow_type)
