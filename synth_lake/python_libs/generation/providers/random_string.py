"""String providers: random alphanumeric tokens, fake emails and constants."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple, Union

import numpy as np
import pyarrow as pa
from faker import Faker

from synth_lake.python_libs.generation.common.constants import ProviderType
from synth_lake.python_libs.generation.common.exceptions import ConfigurationError
from synth_lake.python_libs.generation.common.rng import ALPHANUMERIC_BYTES
from synth_lake.python_libs.generation.providers.base_provider import (
    ValueProvider,
    get_int_param,
    get_str_param,
)

_LENGTH_RANGE = re.compile(r"^\s*(-?\d+)\s*\.\.\s*(-?\d+)\s*$")


class RandomAlphanumericProvider(ValueProvider, provider_type=ProviderType.RANDOM_ALPHANUMERIC):
    """Length uniform in ``[min_length, max_length]``, then one draw per character.

    ``length`` accepts an integer (``10``) or an inclusive range (``"5..15"``);
    ``min_length`` / ``max_length`` may be given instead.
    """

    # 64-bit offsets, a chunk of long tokens can pass 2 GiB of characters
    arrow_type = pa.large_string()

    DEFAULT_LENGTH = 10

    def __init__(self, min_length: int = DEFAULT_LENGTH, max_length: int = DEFAULT_LENGTH):
        if min_length < 0 or max_length < 0:
            raise ConfigurationError(
                f"length must not be negative, got [{min_length}, {max_length}]"
            )
        if min_length > max_length:
            raise ConfigurationError(
                f"min_length ({min_length}) must not exceed max_length ({max_length})"
            )
        self.min_length = min_length
        self.max_length = max_length

    @classmethod
    def from_config(cls, column: Dict[str, Any]) -> "RandomAlphanumericProvider":
        min_length, max_length = cls._parse_length(column)
        try:
            return cls(min_length=min_length, max_length=max_length)
        except ConfigurationError as e:
            raise ConfigurationError(f"Column '{column.get('name')}': {e}") from e

    @classmethod
    def _parse_length(cls, column: Dict[str, Any]) -> Tuple[int, int]:
        length = column.get("length")
        if length is None:
            max_length = get_int_param(column, "max_length", None)
            min_default = cls.DEFAULT_LENGTH if max_length is None else min(cls.DEFAULT_LENGTH, max_length)
            min_length = get_int_param(column, "min_length", min_default)
            if max_length is None:
                max_length = max(min_length, cls.DEFAULT_LENGTH)
            return min_length, max_length
        if isinstance(length, str):
            match = _LENGTH_RANGE.match(length)
            if match:
                return int(match.group(1)), int(match.group(2))
            if length.strip().lstrip("-").isdigit():
                return int(length), int(length)
        else:
            exact = get_int_param(column, "length", cls.DEFAULT_LENGTH)
            return exact, exact
        raise ConfigurationError(
            f"Column '{column.get('name')}': 'length' must be an integer or a range "
            f"like '5..15', got {length!r}"
        )

    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        lengths = rng.integers(self.min_length, self.max_length + 1, size=count)
        offsets = np.zeros(count + 1, dtype=np.int64)
        offsets[1:] = np.cumsum(lengths)
        codes = rng.integers(0, len(ALPHANUMERIC_BYTES), size=int(offsets[-1]))
        data = ALPHANUMERIC_BYTES[codes].tobytes()
        return pa.LargeStringArray.from_buffers(count, pa.py_buffer(offsets), pa.py_buffer(data))


class RandomEmailProvider(ValueProvider, provider_type=ProviderType.RANDOM_EMAIL):
    """Realistic email addresses from Faker, seeded from the column stream."""

    arrow_type = pa.string()

    DEFAULT_LOCALE = "en_US"

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = locale
        try:
            Faker(locale)
        except AttributeError as e:
            raise ConfigurationError(f"unknown locale '{locale}'") from e

    @classmethod
    def from_config(cls, column: Dict[str, Any]) -> "RandomEmailProvider":
        locale = get_str_param(column, "locale", cls.DEFAULT_LOCALE)
        try:
            return cls(locale=locale)
        except ConfigurationError as e:
            raise ConfigurationError(f"Column '{column.get('name')}': {e}") from e

    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        fake = Faker(self.locale)
        fake.seed_instance(int(rng.integers(0, 2**32)))
        return pa.array([fake.email() for _ in range(count)], type=self.arrow_type)


class ConstantStringProvider(ValueProvider, provider_type=ProviderType.CONSTANT_STRING):
    """Always the same string, or a uniform pick from a list of strings."""

    arrow_type = pa.string()

    def __init__(self, data: Union[str, List[str]]):
        if isinstance(data, str):
            data = [data]
        if not data or not all(isinstance(item, str) for item in data):
            raise ConfigurationError(f"'data' must be a string or a non-empty list of strings, got {data!r}")
        self.data = list(data)

    @classmethod
    def from_config(cls, column: Dict[str, Any]) -> "ConstantStringProvider":
        if column.get("data") is None:
            raise ConfigurationError(f"Column '{column.get('name')}': missing 'data'")
        try:
            return cls(column["data"])
        except ConfigurationError as e:
            raise ConfigurationError(f"Column '{column.get('name')}': {e}") from e

    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        if len(self.data) == 1:
            return pa.array(self.data * count, type=self.arrow_type)
        picks = rng.integers(0, len(self.data), size=count)
        return pa.array([self.data[pick] for pick in picks], type=self.arrow_type)
