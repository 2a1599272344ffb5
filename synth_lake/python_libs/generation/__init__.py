"""
Synthetic Data Generation Library

Turns a declarative column schema into chunked pyarrow record batches,
generated in parallel across columns and written to CSV, JSON or Parquet.
"""

from synth_lake.python_libs.generation.batch_generator import (
    BatchGenerator,
    generate_from_config,
)
from synth_lake.python_libs.generation.common.config import (
    ColumnSpec,
    GenerationConfig,
    GenerationInfo,
)
from synth_lake.python_libs.generation.common.constants import (
    ExecutionStatus,
    FileFormat,
    GenerationState,
    ProviderType,
)
from synth_lake.python_libs.generation.common.presence import Presence
from synth_lake.python_libs.generation.common.results import (
    GenerationMetrics,
    GenerationResult,
)
from synth_lake.python_libs.generation.providers import ValueProvider
from synth_lake.python_libs.generation.sinks import OutputSink

__all__ = [
    # Config
    "ColumnSpec",
    "GenerationConfig",
    "GenerationInfo",
    "Presence",
    # Constants
    "ExecutionStatus",
    "FileFormat",
    "GenerationState",
    "ProviderType",
    # Results
    "GenerationResult",
    "GenerationMetrics",
    # Core components
    "BatchGenerator",
    "generate_from_config",
    "ValueProvider",
    "OutputSink",
]
