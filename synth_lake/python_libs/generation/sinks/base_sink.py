"""Base interface for all output sinks with self-registration."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Type, Union

import pyarrow as pa

from synth_lake.python_libs.generation.common.config import GenerationConfig
from synth_lake.python_libs.generation.common.constants import FORMAT_METADATA_KEY
from synth_lake.python_libs.generation.common.exceptions import (
    ConfigurationError,
    OutputWriteError,
)

# Registry for auto-registration of sink classes
_SINK_REGISTRY: Dict[str, Type["OutputSink"]] = {}

logger = logging.getLogger(__name__)


class OutputSink(ABC):
    """
    Abstract base class for all output sinks with self-registration.

    Sinks self-register when defined by specifying file_format in class definition:
        class CsvSink(OutputSink, file_format="csv"):
            ...

    Use OutputSink.create() to instantiate the correct sink for a config.
    Every sink receives any number of ``write`` calls followed by exactly one
    ``flush``, which finalizes and closes the output file.
    """

    file_format: str
    EXTENSION: str = ""

    def __init_subclass__(cls, file_format: str | None = None, **kwargs):
        """Auto-register subclasses that specify a file_format."""
        super().__init_subclass__(**kwargs)
        if file_format is not None:
            cls.file_format = str(file_format)
            _SINK_REGISTRY[str(file_format)] = cls
            logger.debug(f"Registered sink for file_format: {file_format}")

    def __init__(self, output_path: Optional[Union[str, Path]] = None):
        self.output_path = Path(output_path) if output_path is not None else None
        self.rows_written = 0
        self.batches_written = 0
        self.flushed = False

    @classmethod
    def create(
        cls,
        config: GenerationConfig,
        output_dir: Optional[Union[str, Path]] = None,
    ) -> "OutputSink":
        """
        Factory method - create the correct sink for the given config.

        Args:
            config: GenerationConfig whose info names the output format and file
            output_dir: Directory that relative output names are resolved against

        Returns:
            Sink with its output file opened

        Raises:
            ConfigurationError: If no sink is registered for the format
            OutputWriteError: If the output file cannot be created
        """
        file_format = str(config.info.output_format)
        sink_cls = _SINK_REGISTRY.get(file_format)
        if not sink_cls:
            registered = ", ".join(_SINK_REGISTRY.keys()) or "(none)"
            raise ConfigurationError(
                f"No sink registered for output_format: '{file_format}'. "
                f"Registered formats: {registered}"
            )
        output_path = config.info.get_output_file_name(sink_cls.extension(), output_dir)
        return sink_cls.from_config(config, output_path)

    @classmethod
    @abstractmethod
    def from_config(cls, config: GenerationConfig, output_path: Path) -> "OutputSink":
        """Construct the sink and open ``output_path``."""
        ...

    @classmethod
    def extension(cls) -> str:
        """Canonical file suffix, including the dot."""
        return cls.EXTENSION

    def write(self, batch: pa.RecordBatch) -> None:
        """Append one batch to the output."""
        if self.flushed:
            raise OutputWriteError(f"Cannot write to {self.output_path}: sink already flushed")
        try:
            self._write(batch)
        except OSError as e:
            raise OutputWriteError(f"Failed writing to {self.output_path}: {e}") from e
        self.rows_written += batch.num_rows
        self.batches_written += 1

    def flush(self) -> None:
        """Finalize the output. Must be called exactly once, after the last write."""
        if self.flushed:
            raise OutputWriteError(f"Sink for {self.output_path} already flushed")
        try:
            self._flush()
        except OSError as e:
            raise OutputWriteError(f"Failed finalizing {self.output_path}: {e}") from e
        self.flushed = True
        logger.debug(f"Flushed {self.rows_written:,} rows to {self.output_path}")

    def abort(self) -> None:
        """Release the output without finalizing it. Written data stays on disk."""
        if self.flushed:
            return
        try:
            self._close()
        except OSError as e:
            logger.warning(f"Failed to close {self.output_path}: {e}")
        self.flushed = True

    @property
    def bytes_written(self) -> int:
        """Size of the output file on disk, 0 when there is none yet."""
        if self.output_path is None or not self.output_path.exists():
            return 0
        return self.output_path.stat().st_size

    @abstractmethod
    def _write(self, batch: pa.RecordBatch) -> None:
        ...

    @abstractmethod
    def _flush(self) -> None:
        ...

    def _close(self) -> None:
        """Close underlying resources; called by ``abort``."""
        pass

    def _open_text(self) -> IO[str]:
        """Create parent directories and open the output file for text writing."""
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            return open(self.output_path, "w", encoding="utf-8", newline="")
        except OSError as e:
            raise OutputWriteError(f"Cannot create output file {self.output_path}: {e}") from e


def get_registered_sinks() -> Dict[str, Type[OutputSink]]:
    """Get all registered sinks."""
    return dict(_SINK_REGISTRY)


def render_columns(batch: pa.RecordBatch) -> List[List[Any]]:
    """
    Convert a batch to per-column lists of Python values for text sinks.

    Temporal columns carrying a format in their field metadata are rendered
    to strings with it; Nulls stay ``None``.
    """
    columns = []
    for field, column in zip(batch.schema, batch.columns):
        values = column.to_pylist()
        fmt = (field.metadata or {}).get(FORMAT_METADATA_KEY)
        if fmt is not None:
            pattern = fmt.decode("utf-8")
            values = [None if value is None else value.strftime(pattern) for value in values]
        columns.append(values)
    return columns
