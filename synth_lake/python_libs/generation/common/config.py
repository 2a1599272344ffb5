"""Configuration dataclasses for the generation framework."""

from __future__ import annotations

import json
import logging
import numbers
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pyarrow as pa
import yaml

from synth_lake.python_libs.generation.common.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_DELIMITER,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_ROWS,
    FileFormat,
)
from synth_lake.python_libs.generation.common.exceptions import (
    ConfigurationError,
    ValidationError,
)
from synth_lake.python_libs.generation.common.presence import Presence
from synth_lake.python_libs.generation.providers import ValueProvider

logger = logging.getLogger(__name__)

_INFO_KEYS = {"output_name", "output_format", "rows", "seed", "delimiter", "wrap_up", "chunk_size"}


@dataclass
class ColumnSpec:
    """One output column: a name, a value provider and a presence policy."""

    name: str
    provider: ValueProvider
    presence: Presence = field(default_factory=Presence)

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ConfigurationError(f"Column name must be a non-empty string, got {self.name!r}")

    @classmethod
    def from_dict(cls, column: Dict[str, Any]) -> "ColumnSpec":
        """Create a column from its declaration (``name``, ``provider``, parameters, ``presence``)."""
        if not isinstance(column, dict):
            raise ConfigurationError(f"Column declaration must be a mapping, got {column!r}")
        name = column.get("name")
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Column declaration without a valid 'name': {column!r}")
        return cls(
            name=name,
            provider=ValueProvider.create(column),
            presence=Presence.from_config(column),
        )

    @property
    def can_be_null(self) -> bool:
        return self.presence.can_be_null

    def to_arrow_field(self) -> pa.Field:
        return pa.field(
            self.name,
            self.provider.arrow_type,
            nullable=self.can_be_null,
            metadata=self.provider.field_metadata,
        )


@dataclass
class GenerationInfo:
    """Generation metadata: where to write, in which format, how many rows."""

    output_name: str = DEFAULT_OUTPUT_NAME
    output_format: str = DEFAULT_OUTPUT_FORMAT
    rows: int = DEFAULT_ROWS
    seed: Optional[int] = None
    delimiter: str = DEFAULT_DELIMITER  # csv only
    wrap_up: bool = False  # json only
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        """Validate every field on construction."""
        if not isinstance(self.output_name, str) or not self.output_name.strip():
            raise ConfigurationError(f"output_name must be a non-empty string, got {self.output_name!r}")

        if not isinstance(self.output_format, str):
            raise ConfigurationError(f"output_format must be a string, got {self.output_format!r}")
        valid_formats = {f.value for f in FileFormat}
        output_format = self.output_format.strip().lower()
        if output_format not in valid_formats:
            raise ConfigurationError(
                f"Unsupported output_format: '{self.output_format}'. "
                f"Valid options: {', '.join(sorted(valid_formats))}"
            )
        self.output_format = FileFormat(output_format)

        if isinstance(self.rows, bool) or not isinstance(self.rows, numbers.Integral) or self.rows < 0:
            raise ValidationError(f"rows must be a non-negative integer, got {self.rows!r}")

        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, numbers.Integral) or self.chunk_size <= 0:
            raise ValidationError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")

        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral) or self.seed < 0
        ):
            raise ConfigurationError(f"seed must be a non-negative integer, got {self.seed!r}")

        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise ConfigurationError(f"delimiter must be a single character, got {self.delimiter!r}")

        if not isinstance(self.wrap_up, bool):
            raise ConfigurationError(f"wrap_up must be true or false, got {self.wrap_up!r}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GenerationInfo":
        """Create from the ``info`` section; missing keys take their defaults."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(f"'info' must be a mapping, got {data!r}")

        unknown = set(data) - _INFO_KEYS
        if unknown:
            logger.warning(f"Ignoring unknown info keys: {', '.join(sorted(unknown))}")

        return cls(**{key: value for key, value in data.items() if key in _INFO_KEYS and value is not None})

    def get_output_file_name(self, extension: str, output_dir: Optional[Union[str, Path]] = None) -> Path:
        """Output path: ``<output_dir>/<output_name><extension>``."""
        path = Path(f"{self.output_name}{extension}")
        if output_dir is not None and not path.is_absolute():
            path = Path(output_dir) / path
        return path


@dataclass
class GenerationConfig:
    """A full schema: ordered columns plus generation metadata."""

    columns: List[ColumnSpec]
    info: GenerationInfo = field(default_factory=GenerationInfo)
    source_path: Optional[str] = None

    def validate(self) -> None:
        """
        Check the schema can be generated.

        Raises:
            ValidationError: If there are no columns, column names repeat or a
                provider cannot produce ``info.rows`` rows
        """
        if not self.columns:
            raise ValidationError("No columns to generate")

        seen = set()
        for column in self.columns:
            if column.name in seen:
                raise ValidationError(f"Duplicate column name: '{column.name}'")
            seen.add(column.name)
            try:
                column.provider.check_rows(self.info.rows)
            except ConfigurationError as e:
                raise ValidationError(f"Column '{column.name}': {e}") from e

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def to_arrow_schema(self) -> pa.Schema:
        """Arrow schema derived 1:1 from the columns, in declaration order."""
        return pa.schema([column.to_arrow_field() for column in self.columns])

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source_path: Optional[str] = None) -> "GenerationConfig":
        """
        Create configuration from dictionary.

        Args:
            data: Mapping with a ``columns`` list and an optional ``info`` mapping
            source_path: File the mapping was read from, for messages

        Returns:
            Configuration instance

        Raises:
            ConfigurationError: If the mapping is malformed
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"Schema must be a mapping with 'columns', got {type(data).__name__}")

        columns = data.get("columns")
        if columns is None:
            columns = []
        if not isinstance(columns, list):
            raise ConfigurationError(f"'columns' must be a list, got {type(columns).__name__}")

        return cls(
            columns=[ColumnSpec.from_dict(column) for column in columns],
            info=GenerationInfo.from_dict(data.get("info")),
            source_path=source_path,
        )

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "GenerationConfig":
        """
        Load a schema from a YAML or JSON file.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        file_path = Path(file_path)

        if not file_path.is_file():
            raise ConfigurationError(f"Schema file not found: {file_path}")

        suffix = file_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigurationError(f"Unsupported schema file format: '{suffix}' ({file_path})")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read schema file {file_path}: {e}") from e
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Invalid schema file {file_path}: {e}") from e

        logger.debug(f"Loaded schema file: {file_path}")
        return cls.from_dict(data, source_path=str(file_path))
