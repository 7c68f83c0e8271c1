"""
Exception hierarchy for vectorscape.

Numeric input is expected to be pre-validated by the caller, so the
taxonomy is narrow: configuration problems, malformed embedding batches
and invalid importance weights.  Each subclasses VectorscapeError so
callers can catch at the granularity they need.
"""


class VectorscapeError(Exception):
    """Base exception for all vectorscape errors."""


class ConfigError(VectorscapeError):
    """Raised when a required configuration key is missing or invalid."""

    def __init__(self, key: str, reason: str = "missing or None"):
        self.key = key
        super().__init__(f"Configuration error for '{key}': {reason}")


class DimensionError(VectorscapeError, ValueError):
    """Raised when an embedding batch has ragged, empty or non-finite rows."""

    def __init__(self, detail: str):
        super().__init__(f"Dimension error: {detail}")


class WeightConfigError(VectorscapeError, ValueError):
    """Raised when an importance weight is negative or not a finite number."""

    def __init__(self, name: str, value):
        self.name = name
        self.value = value
        super().__init__(f"Invalid importance weight '{name}': {value!r}")
