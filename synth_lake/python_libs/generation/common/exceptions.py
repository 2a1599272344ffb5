"""Custom exceptions for the generation framework."""


class SyntheticDataError(Exception):
    """Base exception for synthetic data generation."""

    pass


class ConfigurationError(SyntheticDataError):
    """Error in a schema file or in provider parameters."""

    pass


class ValidationError(ConfigurationError):
    """Raised when a loaded schema cannot be generated (no columns, bad row count)."""

    pass


class OutputWriteError(SyntheticDataError):
    """Error creating or writing the output file."""

    pass


class InternalGenerationError(SyntheticDataError):
    """A provider failed after construction. Never retried."""

    pass
