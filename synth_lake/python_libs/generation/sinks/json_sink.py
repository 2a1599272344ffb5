"""JSON sink: newline-delimited objects, or one array when ``wrap_up`` is set."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

import pyarrow as pa

from synth_lake.python_libs.generation.common.config import GenerationConfig
from synth_lake.python_libs.generation.common.constants import FileFormat
from synth_lake.python_libs.generation.sinks.base_sink import OutputSink, render_columns

_SEPARATORS = (",", ":")


class JsonSink(OutputSink, file_format=FileFormat.JSON):
    """
    Compact JSON objects, keys in column order. Null values are left out.

    Without ``wrap_up`` every object ends with a newline; with it the file
    holds a single array literal and no newlines.
    """

    EXTENSION = ".json"

    def __init__(self, output_path: Union[str, Path], wrap_up: bool = False):
        super().__init__(output_path)
        self.wrap_up = wrap_up
        self._first = True
        self._file = self._open_text()
        if self.wrap_up:
            self._file.write("[")

    @classmethod
    def from_config(cls, config: GenerationConfig, output_path: Path) -> "JsonSink":
        return cls(output_path, wrap_up=config.info.wrap_up)

    def _write(self, batch: pa.RecordBatch) -> None:
        names = batch.schema.names
        parts = []
        for row in zip(*render_columns(batch)):
            record = {name: value for name, value in zip(names, row) if value is not None}
            encoded = json.dumps(record, separators=_SEPARATORS, ensure_ascii=False)
            if not self.wrap_up:
                parts.append(encoded + "\n")
            elif self._first:
                parts.append(encoded)
                self._first = False
            else:
                parts.append("," + encoded)
        self._file.write("".join(parts))

    def _flush(self) -> None:
        if self.wrap_up:
            self._file.write("]")
        self._file.close()

    def _close(self) -> None:
        self._file.close()
