# wav2pwl/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all wav2pwl conversion failures."""


# ---- Configuration ----
class ConfigError(CoreError, ValueError):
    """Raised when a ConversionConfig (or a CLI flag) holds an invalid value."""


# ---- File access / container errors ----
class IoError(CoreError, OSError):
    """Raised when a path cannot be read or written."""


class FormatError(CoreError):
    """Raised when an audio container is malformed or uses an unsupported encoding."""


# ---- Time series validation ----
class InvalidTimeSeries(CoreError):
    """Raised when a TimeSeries / SampleBuffer is constructed with invalid inputs."""


class NonMonotonicTime(InvalidTimeSeries):
    """Raised when time goes backwards, usually because the file was read mid-write."""


class EmptySeries(CoreError):
    """Raised when a conversion has no samples to write."""


# ---- Table parsing ----
class MalformedRow(CoreError):
    """A data row that could not be parsed.

    Normally recorded as a warning and skipped; raised only when a table
    has no usable row at all.
    """

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        super().__init__(f"line {line_no}: {reason}: {line!r}")
        self.line_no = line_no
        self.line = line
        self.reason = reason


# ---- Lookup errors (also behave like KeyError / IndexError) ----
class ColumnNotFound(CoreError, KeyError):
    """Raised when a requested column name is not present."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class IndexOutOfRange(CoreError, IndexError):
    """Raised when a column index selects time or lies past the last column."""
