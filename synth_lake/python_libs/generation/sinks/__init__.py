"""Output sinks. Importing this package registers every output format."""

from synth_lake.python_libs.generation.sinks.base_sink import (
    OutputSink,
    get_registered_sinks,
    render_columns,
)
from synth_lake.python_libs.generation.sinks.csv_sink import CsvSink
from synth_lake.python_libs.generation.sinks.json_sink import JsonSink
from synth_lake.python_libs.generation.sinks.parquet_sink import ParquetSink

__all__ = [
    "OutputSink",
    "get_registered_sinks",
    "render_columns",
    "CsvSink",
    "JsonSink",
    "ParquetSink",
]
