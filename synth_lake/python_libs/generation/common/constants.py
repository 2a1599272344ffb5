"""Constants for the generation framework."""

from enum import StrEnum


class FileFormat(StrEnum):
    """Supported output file formats."""

    CSV = "csv"
    JSON = "json"
    PARQUET = "parquet"


class ProviderType(StrEnum):
    """Type tags accepted in the ``provider`` key of a column."""

    INCREMENT_INTEGER = "increment.integer"
    RANDOM_BOOL = "random.bool"
    RANDOM_I32 = "random.number.i32"
    RANDOM_I64 = "random.number.i64"
    RANDOM_F64 = "random.number.f64"
    RANDOM_ALPHANUMERIC = "random.string.alphanumeric"
    RANDOM_EMAIL = "random.string.email"
    RANDOM_DATE = "random.date.date"
    RANDOM_DATETIME = "random.date.datetime"
    CONSTANT_STRING = "constant.string"


class GenerationState(StrEnum):
    """Lifecycle of a single BatchGenerator run."""

    IDLE = "idle"
    GENERATING = "generating"
    FLUSHED = "flushed"
    DONE = "done"
    FAILED = "failed"


class ExecutionStatus(StrEnum):
    """Outcome of generating one schema file."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


DEFAULT_OUTPUT_NAME = "output"
DEFAULT_OUTPUT_FORMAT = FileFormat.PARQUET
DEFAULT_ROWS = 1_000_000
DEFAULT_CHUNK_SIZE = 8192 * 8
DEFAULT_DELIMITER = ","

# Key in arrow field metadata holding the strftime pattern of temporal columns
FORMAT_METADATA_KEY = b"format"
