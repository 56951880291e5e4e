"""
Core domain objects for wav2pwl.

This module defines the format-agnostic data model:
- TimeSeries: validated time/value series (PWL points, simulator columns)
- SampleBuffer: fixed-rate normalized audio samples
- ColumnTable: multi-column simulator export
- ConversionConfig: settings shared by encode/decode/watch
- resample: time series -> fixed-rate samples

The core layer is independent from file formats.
"""

from .timeseries import TimeSeries, SampleBuffer
from .table import ColumnTable
from .config import ConversionConfig, ColumnSelector, parse_selector, DEFAULT_SAMPLE_RATE
from .resample import resample
from .exceptions import (
    CoreError,
    ConfigError,
    IoError,
    FormatError,
    InvalidTimeSeries,
    NonMonotonicTime,
    EmptySeries,
    MalformedRow,
    ColumnNotFound,
    IndexOutOfRange,
)


__all__ = [
    # data model
    "TimeSeries",
    "SampleBuffer",
    "ColumnTable",

    # configuration
    "ConversionConfig",
    "ColumnSelector",
    "parse_selector",
    "DEFAULT_SAMPLE_RATE",

    # processing
    "resample",

    # exceptions
    "CoreError",
    "ConfigError",
    "IoError",
    "FormatError",
    "InvalidTimeSeries",
    "NonMonotonicTime",
    "EmptySeries",
    "MalformedRow",
    "ColumnNotFound",
    "IndexOutOfRange",
]
