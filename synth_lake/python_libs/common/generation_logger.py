"""
Synthetic Data Generation Logging

This module configures logging for dataset generation runs and keeps a record
of the metrics of every completed run for run summaries.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from synth_lake.python_libs.generation.common.config import GenerationConfig
from synth_lake.python_libs.generation.common.results import GenerationResult

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class GenerationLogger:
    """Logger for synthetic data generation with run tracking."""

    def __init__(self,
                 logger_name: str = "synth_lake",
                 log_level: int = logging.INFO,
                 enable_console_output: bool = True,
                 enable_file_logging: bool = False,
                 log_file_path: Optional[str] = None):

        self.logger = logging.getLogger(logger_name)
        self.logger.setLevel(log_level)

        # Clear existing handlers to avoid duplicates
        self.logger.handlers.clear()

        if enable_console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(console_handler)

        if enable_file_logging and log_file_path:
            file_handler = logging.FileHandler(log_file_path)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(file_handler)

        self._generation_logs: List[GenerationResult] = []

    def log_generation_start(self, config: GenerationConfig, seed: Optional[int] = None):
        """Log the start of a generation run."""
        info = config.info
        source = config.source_path or "<in-memory schema>"
        self.logger.info(f"🚀 Starting generation for {source}")
        self.logger.info(f"   📊 Columns: {len(config.columns)} ({', '.join(config.column_names)})")
        self.logger.info(f"   🎯 Target rows: {info.rows:,} in chunks of {info.chunk_size:,}")
        self.logger.info(f"   📁 Format: {info.output_format}")
        if seed is not None:
            self.logger.debug(f"   🎲 Seed: {seed}")

    def log_generation_complete(self, result: GenerationResult) -> str:
        """
        Log the completion of a run with its metrics.

        Returns:
            One-line summary of the run
        """
        metrics = result.metrics
        self.logger.info(f"✅ Completed generation for {result.output_path}")
        self.logger.info(f"   📈 Rows generated: {metrics.rows_generated:,} in {metrics.chunks_written} chunk(s)")
        self.logger.info(f"   ⏱️ Duration: {metrics.duration_ms / 1000:.2f} seconds")
        self.logger.info(f"   🚀 Rate: {metrics.rows_per_second:.0f} rows/second")
        self.logger.info(f"   💾 Size: {metrics.total_bytes:,} bytes")

        self._generation_logs.append(result)
        return (
            f"File {Path(result.output_path).name} contains {metrics.rows_generated:,} records "
            f"across {metrics.columns} column(s)"
        )

    def log_generation_failure(self, source: str, error: Union[Exception, str]):
        """Log a failed run."""
        self.logger.error(f"❌ Generation failed for {source}: {error}")

    def get_generation_statistics(self) -> Dict[str, Any]:
        """Get aggregated statistics from all completed runs."""
        if not self._generation_logs:
            return {}

        total_rows = sum(log.metrics.rows_generated for log in self._generation_logs)
        total_duration = sum(log.metrics.duration_ms for log in self._generation_logs) / 1000
        total_files = len(self._generation_logs)

        formats: Dict[str, int] = {}
        for log in self._generation_logs:
            formats[str(log.file_format)] = formats.get(str(log.file_format), 0) + 1

        return {
            "total_files_generated": total_files,
            "total_rows_generated": total_rows,
            "total_duration_seconds": total_duration,
            "average_rows_per_file": total_rows / total_files,
            "overall_generation_rate": total_rows / total_duration if total_duration > 0 else 0,
            "formats_breakdown": formats,
        }
