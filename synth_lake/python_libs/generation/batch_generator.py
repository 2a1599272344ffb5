"""BatchGenerator for turning a column schema into chunked record batches."""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import pyarrow as pa

from synth_lake.python_libs.generation.common.config import ColumnSpec, GenerationConfig
from synth_lake.python_libs.generation.common.constants import (
    ExecutionStatus,
    GenerationState,
)
from synth_lake.python_libs.generation.common.exceptions import (
    InternalGenerationError,
    SyntheticDataError,
    ValidationError,
)
from synth_lake.python_libs.generation.common.results import (
    GenerationMetrics,
    GenerationResult,
)
from synth_lake.python_libs.generation.common.rng import (
    ColumnStreams,
    derive_column_streams,
    resolve_seed,
)
from synth_lake.python_libs.generation.sinks import OutputSink

logger = logging.getLogger(__name__)

# Called after every written chunk with (chunks_done, chunks_total, rows_in_chunk)
ChunkCallback = Callable[[int, int, int], None]


class BatchGenerator:
    """
    Generates the rows of a schema chunk by chunk and hands them to a sink.

    Handles:
    - Chunking of the row count (last chunk takes the remainder)
    - Parallel generation of the columns of a chunk
    - Ordered batch assembly and the write/flush protocol of the sink
    - State tracking

    Every column draws from its own streams derived from the root seed and the
    column index, so the output only depends on the seed and the schema.
    """

    def __init__(
        self,
        config: GenerationConfig,
        chunk_size: Optional[int] = None,
        max_workers: Optional[int] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize BatchGenerator.

        Args:
            config: Schema and generation metadata
            chunk_size: Rows per batch. Defaults to ``config.info.chunk_size``.
            max_workers: Maximum columns generated in parallel. Defaults to the
                number of columns, capped like ThreadPoolExecutor's default.
            seed: Root seed. Defaults to ``config.info.seed``; when both are
                None one is drawn from the thread RNG.
        """
        self.config = config
        self.chunk_size = chunk_size if chunk_size is not None else config.info.chunk_size
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ValidationError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")
        if max_workers is not None and max_workers < 1:
            raise ValidationError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self.seed = seed if seed is not None else config.info.seed
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0
        ):
            raise ValidationError(f"seed must be a non-negative integer, got {self.seed!r}")
        self.state = GenerationState.IDLE
        self.chunks_written = 0
        self.logger = logger

    @property
    def rows(self) -> int:
        return self.config.info.rows

    @property
    def chunk_count(self) -> int:
        return -(-self.rows // self.chunk_size)

    def chunk_bounds(self) -> List[Tuple[int, int]]:
        """``(first global row index, row count)`` of every chunk, in order."""
        return [
            (start, min(self.chunk_size, self.rows - start))
            for start in range(0, self.rows, self.chunk_size)
        ]

    def generate(self, sink: OutputSink, on_chunk: Optional[ChunkCallback] = None) -> GenerationResult:
        """
        Generate every chunk, write it to ``sink`` and flush the sink once.

        Args:
            sink: Open output sink
            on_chunk: Optional progress callback

        Returns:
            GenerationResult with status SUCCESS and metrics

        Raises:
            ValidationError: If the schema cannot be generated
            OutputWriteError: If the sink fails
            InternalGenerationError: If a provider fails
        """
        if self.state != GenerationState.IDLE:
            raise SyntheticDataError(f"BatchGenerator already used (state: {self.state})")

        start_time = time.time()
        columns = self.config.columns

        try:
            self.config.validate()
            schema = self.config.to_arrow_schema()
            root_seed = resolve_seed(self.seed)
            streams = derive_column_streams(root_seed, len(columns))
            bounds = self.chunk_bounds()

            result = GenerationResult(
                output_path=str(sink.output_path) if sink.output_path else "",
                file_format=getattr(sink, "file_format", type(sink).__name__),
                seed=root_seed,
                started_at=datetime.utcnow(),
            )

            self.logger.info(
                f"Generating {self.rows:,} rows x {len(columns)} columns "
                f"in {len(bounds)} chunk(s) (seed={root_seed})"
            )

            self.state = GenerationState.GENERATING
            with ThreadPoolExecutor(max_workers=self._worker_count(len(columns))) as executor:
                for chunk_index, (chunk_start, rows_in_chunk) in enumerate(bounds):
                    batch = self._generate_chunk(executor, schema, streams, chunk_start, rows_in_chunk)
                    sink.write(batch)
                    self.chunks_written += 1
                    self.logger.debug(
                        f"Wrote chunk {chunk_index + 1}/{len(bounds)}: "
                        f"rows [{chunk_start}, {chunk_start + rows_in_chunk})"
                    )
                    if on_chunk is not None:
                        on_chunk(chunk_index + 1, len(bounds), rows_in_chunk)

            sink.flush()
            self.state = GenerationState.FLUSHED
        except Exception:
            self.state = GenerationState.FAILED
            sink.abort()
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        result.status = ExecutionStatus.SUCCESS
        result.metrics = GenerationMetrics(
            rows_generated=sink.rows_written,
            chunks_written=self.chunks_written,
            columns=len(columns),
            total_bytes=sink.bytes_written,
            duration_ms=duration_ms,
        )
        result.completed_at = datetime.utcnow()
        self.state = GenerationState.DONE
        return result

    def _worker_count(self, column_count: int) -> int:
        max_workers = self.max_workers or min(32, (os.cpu_count() or 1) + 4)
        return max(1, min(column_count, max_workers))

    def _generate_chunk(
        self,
        executor: Executor,
        schema: pa.Schema,
        streams: List[ColumnStreams],
        chunk_start: int,
        rows_in_chunk: int,
    ) -> pa.RecordBatch:
        """Generate all columns of one chunk in parallel and assemble them in schema order."""
        slots: List[Optional[pa.Array]] = [None] * len(self.config.columns)

        future_to_index = {
            executor.submit(
                _generate_column, column, streams[index], chunk_start, rows_in_chunk
            ): index
            for index, column in enumerate(self.config.columns)
        }

        for future in as_completed(future_to_index):
            slots[future_to_index[future]] = future.result()

        return pa.RecordBatch.from_arrays(slots, schema=schema)


def _generate_column(
    column: ColumnSpec,
    streams: ColumnStreams,
    chunk_start: int,
    rows_in_chunk: int,
) -> pa.Array:
    """Values for global rows ``[chunk_start, chunk_start + rows_in_chunk)`` with presence applied."""
    try:
        array = column.provider.values(chunk_start, rows_in_chunk, streams.values)
        return column.presence.apply(array, streams.presence)
    except Exception as e:
        raise InternalGenerationError(
            f"Column '{column.name}' failed for rows "
            f"[{chunk_start}, {chunk_start + rows_in_chunk}): {e}"
        ) from e


def generate_from_config(
    config: GenerationConfig,
    output_dir: Optional[Union[str, Path]] = None,
    seed: Optional[int] = None,
    max_workers: Optional[int] = None,
    on_chunk: Optional[ChunkCallback] = None,
) -> GenerationResult:
    """
    Validate ``config``, open the sink for its output format and generate.

    Nothing is written when validation fails.

    Args:
        config: Loaded schema
        output_dir: Directory that a relative ``output_name`` is resolved against
        seed: Overrides ``config.info.seed``
        max_workers: Maximum columns generated in parallel
        on_chunk: Optional progress callback

    Returns:
        GenerationResult of the run
    """
    config.validate()
    generator = BatchGenerator(config, max_workers=max_workers, seed=seed)
    sink = OutputSink.create(config, output_dir)

    logger.info(f"Writing {config.info.output_format} output to {sink.output_path}")
    result = generator.generate(sink, on_chunk=on_chunk)
    logger.info(
        f"Generation of {result.output_path} completed: "
        f"{result.metrics.rows_generated:,} rows in {result.metrics.duration_ms / 1000:.2f}s"
    )
    return result
