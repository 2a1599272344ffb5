"""Base interface for all value providers with self-registration."""

from __future__ import annotations

import logging
import numbers
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

import numpy as np
import pyarrow as pa

from synth_lake.python_libs.generation.common.exceptions import ConfigurationError
from synth_lake.python_libs.generation.common.rng import with_rng

# Registry for auto-registration of provider classes, keyed by lower-cased tag
_PROVIDER_REGISTRY: Dict[str, Type["ValueProvider"]] = {}

logger = logging.getLogger(__name__)


class ValueProvider(ABC):
    """
    Abstract base class for per-column value generators.

    Providers self-register when defined by specifying provider_type in class definition:
        class RandomBoolProvider(ValueProvider, provider_type="random.bool"):
            ...

    Use ValueProvider.create() to instantiate the provider named by a column
    declaration. Providers are immutable once constructed.
    """

    provider_type: str
    arrow_type: pa.DataType

    def __init_subclass__(cls, provider_type: str | None = None, **kwargs):
        """Auto-register subclasses that specify a provider_type."""
        super().__init_subclass__(**kwargs)
        if provider_type is not None:
            cls.provider_type = str(provider_type)
            _PROVIDER_REGISTRY[str(provider_type).lower()] = cls
            logger.debug(f"Registered provider for provider_type: {provider_type}")

    @classmethod
    def create(cls, column: Dict[str, Any]) -> "ValueProvider":
        """
        Factory method - create the provider declared by a column.

        Args:
            column: Column declaration with a ``provider`` tag and its parameters

        Returns:
            Provider instance ready to use

        Raises:
            ConfigurationError: If the tag is missing or unknown, or the
                parameters are invalid
        """
        name = column.get("name")
        provider_type = column.get("provider")
        if not isinstance(provider_type, str) or not provider_type.strip():
            raise ConfigurationError(f"Column '{name}': missing 'provider'")

        provider_cls = _PROVIDER_REGISTRY.get(provider_type.strip().lower())
        if not provider_cls:
            registered = ", ".join(sorted(_PROVIDER_REGISTRY.keys())) or "(none)"
            raise ConfigurationError(
                f"Column '{name}': unknown provider '{provider_type}'. "
                f"Registered providers: {registered}"
            )
        return provider_cls.from_config(column)

    @classmethod
    @abstractmethod
    def from_config(cls, column: Dict[str, Any]) -> "ValueProvider":
        """Construct the provider from a column declaration."""
        ...

    @abstractmethod
    def values(self, start_index: int, count: int, rng: np.random.Generator) -> pa.Array:
        """
        Generate the values of rows ``[start_index, start_index + count)``.

        Args:
            start_index: Global (cross-chunk) index of the first row
            count: Number of values to generate
            rng: Generator owned by the column; the only source of randomness

        Returns:
            Arrow array of length ``count`` and type ``arrow_type``
        """
        ...

    def check_rows(self, rows: int) -> None:
        """
        Check the provider can produce ``rows`` rows.

        Raises:
            ConfigurationError: If the row count is out of the provider's range
        """

    def value(self, row_index: int) -> Any:
        """Generate a single value, drawing from the thread generator."""
        return with_rng(lambda rng: self.values(row_index, 1, rng))[0].as_py()

    @property
    def field_metadata(self) -> Optional[Dict[bytes, bytes]]:
        """Extra arrow field metadata (e.g. the render format of temporal columns)."""
        return None


def get_registered_providers() -> Dict[str, Type[ValueProvider]]:
    """Get all registered providers."""
    return dict(_PROVIDER_REGISTRY)


# ----------------------------------------------------------------------------
# Parameter parsing helpers
# ----------------------------------------------------------------------------


def get_int_param(column: Dict[str, Any], key: str, default: int) -> int:
    value = column.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigurationError(
            f"Column '{column.get('name')}': '{key}' must be an integer, got {value!r}"
        )
    return int(value)


def get_float_param(column: Dict[str, Any], key: str, default: float) -> float:
    value = column.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(
            f"Column '{column.get('name')}': '{key}' must be a number, got {value!r}"
        )
    return float(value)


def get_str_param(column: Dict[str, Any], key: str, default: str) -> str:
    value = column.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigurationError(
            f"Column '{column.get('name')}': '{key}' must be a string, got {value!r}"
        )
    return value
