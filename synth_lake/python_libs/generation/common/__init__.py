"""Common utilities for the generation framework."""

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
from synth_lake.python_libs.generation.common.exceptions import (
    ConfigurationError,
    InternalGenerationError,
    OutputWriteError,
    SyntheticDataError,
    ValidationError,
)
from synth_lake.python_libs.generation.common.presence import Presence
from synth_lake.python_libs.generation.common.results import (
    GenerationMetrics,
    GenerationResult,
)

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
    # Exceptions
    "SyntheticDataError",
    "ConfigurationError",
    "ValidationError",
    "OutputWriteError",
    "InternalGenerationError",
    # Results
    "GenerationResult",
    "GenerationMetrics",
]
