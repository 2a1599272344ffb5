"""Parquet sink built on ``pyarrow.parquet.ParquetWriter``."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import pyarrow as pa
import pyarrow.parquet as pq

from synth_lake.python_libs.generation.common.config import GenerationConfig
from synth_lake.python_libs.generation.common.constants import FileFormat
from synth_lake.python_libs.generation.common.exceptions import OutputWriteError
from synth_lake.python_libs.generation.sinks.base_sink import OutputSink

DEFAULT_COMPRESSION = "snappy"


class ParquetSink(OutputSink, file_format=FileFormat.PARQUET):
    """Each batch becomes one row group. ``flush`` writes the footer; without it the file is unreadable."""

    EXTENSION = ".parquet"

    def __init__(
        self,
        output_path: Union[str, Path],
        schema: pa.Schema,
        compression: str = DEFAULT_COMPRESSION,
    ):
        super().__init__(output_path)
        self.schema = schema
        self.compression = compression
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self._writer = pq.ParquetWriter(str(self.output_path), schema, compression=compression)
        except OSError as e:
            raise OutputWriteError(f"Cannot create output file {self.output_path}: {e}") from e

    @classmethod
    def from_config(cls, config: GenerationConfig, output_path: Path) -> "ParquetSink":
        return cls(output_path, config.to_arrow_schema())

    def _write(self, batch: pa.RecordBatch) -> None:
        self._writer.write_batch(batch)

    def _flush(self) -> None:
        self._writer.close()

    def _close(self) -> None:
        self._writer.close()
