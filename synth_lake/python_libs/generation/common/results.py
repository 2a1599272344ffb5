"""Result dataclasses for the generation framework."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from synth_lake.python_libs.generation.common.constants import ExecutionStatus


@dataclass
class GenerationMetrics:
    """Metrics for one generation run."""

    rows_generated: int = 0
    chunks_written: int = 0
    columns: int = 0
    total_bytes: int = 0
    duration_ms: int = 0

    @property
    def rows_per_second(self) -> float:
        """Generation rate in rows per second."""
        if self.duration_ms <= 0:
            return 0.0
        return self.rows_generated / (self.duration_ms / 1000)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "rows_generated": self.rows_generated,
            "chunks_written": self.chunks_written,
            "columns": self.columns,
            "total_bytes": self.total_bytes,
            "duration_ms": self.duration_ms,
        }


@dataclass
class GenerationResult:
    """Result of generating one schema."""

    output_path: str
    file_format: str
    status: ExecutionStatus = ExecutionStatus.PENDING
    metrics: GenerationMetrics = field(default_factory=GenerationMetrics)
    seed: Optional[int] = None
    error_message: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "output_path": self.output_path,
            "file_format": self.file_format,
            "status": str(self.status),
            "metrics": self.metrics.to_dict(),
            "seed": self.seed,
            "error_message": self.error_message,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }
