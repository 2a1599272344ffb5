"""Delimited text sink."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Union

import pyarrow as pa

from synth_lake.python_libs.generation.common.config import GenerationConfig
from synth_lake.python_libs.generation.common.constants import (
    DEFAULT_DELIMITER,
    FileFormat,
)
from synth_lake.python_libs.generation.sinks.base_sink import OutputSink, render_columns


class CsvSink(OutputSink, file_format=FileFormat.CSV):
    """
    One line per row, ``\\n`` terminated, header first.

    Nulls are written as empty fields and booleans as ``true`` / ``false``.
    """

    EXTENSION = ".csv"

    def __init__(
        self,
        output_path: Union[str, Path],
        column_names: List[str],
        delimiter: str = DEFAULT_DELIMITER,
    ):
        super().__init__(output_path)
        self.column_names = list(column_names)
        self.delimiter = delimiter
        self._file = self._open_text()
        self._writer = csv.writer(self._file, delimiter=delimiter, lineterminator="\n")
        self._writer.writerow(self.column_names)

    @classmethod
    def from_config(cls, config: GenerationConfig, output_path: Path) -> "CsvSink":
        return cls(output_path, config.column_names, delimiter=config.info.delimiter)

    def _write(self, batch: pa.RecordBatch) -> None:
        columns = render_columns(batch)
        for index, field in enumerate(batch.schema):
            if pa.types.is_boolean(field.type):
                columns[index] = [_render_bool(value) for value in columns[index]]
        self._writer.writerows(zip(*columns))

    def _flush(self) -> None:
        self._file.close()

    def _close(self) -> None:
        self._file.close()


def _render_bool(value):
    if value is None:
        return None
    return "true" if value else "false"
