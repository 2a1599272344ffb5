"""Pytest fixtures for generation framework tests."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pyarrow as pa
import pytest

from synth_lake.python_libs.generation.common.config import GenerationConfig
from synth_lake.python_libs.generation.sinks import OutputSink

SCHEMAS_DIR = Path(__file__).parent / "schemas"


class RecordingSink(OutputSink):
    """In-memory sink that keeps every batch and counts flushes."""

    EXTENSION = ".mem"

    def __init__(self):
        super().__init__(None)
        self.batches: List[pa.RecordBatch] = []
        self.flush_count = 0

    @classmethod
    def from_config(cls, config, output_path):
        return cls()

    def _write(self, batch: pa.RecordBatch) -> None:
        self.batches.append(batch)

    def _flush(self) -> None:
        self.flush_count += 1

    def table(self) -> pa.Table:
        return pa.Table.from_batches(self.batches)


def _make_config(
    columns: List[Dict[str, Any]],
    rows: int = 10,
    seed: Optional[int] = 42,
    **info: Any,
) -> GenerationConfig:
    return GenerationConfig.from_dict(
        {"columns": columns, "info": {"rows": rows, "seed": seed, **info}}
    )


@pytest.fixture
def make_config():
    """Build a GenerationConfig the way a schema file would declare it."""
    return _make_config


@pytest.fixture
def recording_sink():
    """Fresh in-memory sink."""
    return RecordingSink()


@pytest.fixture
def sink_factory():
    """Factory for additional in-memory sinks."""
    return RecordingSink


@pytest.fixture
def schemas_dir():
    """Directory holding the sample schema files."""
    return SCHEMAS_DIR


@pytest.fixture
def mixed_columns():
    """One column of every provider type, some of them nullable."""
    return [
        {"name": "id", "provider": "Increment.integer", "start": 1, "step": 1},
        {"name": "active", "provider": "Random.Bool", "presence": 0.9},
        {"name": "small", "provider": "Random.Number.i32", "min": -5, "max": 5},
        {"name": "big", "provider": "Random.Number.i64", "min": 0, "max": 10**12},
        {"name": "score", "provider": "Random.Number.f64", "min": 0, "max": 100, "presence": 0.5},
        {"name": "code", "provider": "Random.String.Alphanumeric", "length": "3..8"},
        {"name": "email", "provider": "Random.String.Email"},
        {"name": "segment", "provider": "Constant.String", "data": ["retail", "wholesale"]},
        {"name": "born", "provider": "Random.Date.Date", "after": "1990-01-01", "before": "2000-01-01"},
        {
            "name": "seen_at",
            "provider": "Random.Date.Datetime",
            "format": "%Y-%m-%dT%H:%M:%S",
            "after": "2024-01-01T00:00:00",
            "before": "2024-02-01T00:00:00",
            "presence": 0.75,
        },
    ]
