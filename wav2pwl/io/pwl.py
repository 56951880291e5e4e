# wav2pwl/io/pwl.py
from __future__ import annotations

import logging
import os
from dataclasses import replace

from wav2pwl.core import TimeSeries
from wav2pwl.io.atomic import atomic_write
from wav2pwl.io.table_reader import extract_column

logger = logging.getLogger(__name__)

TIME_FORMAT = "{:.12e}"
VALUE_FORMAT = "{:.9e}"


def format_point(time: float, value: float, sep: str = " ") -> str:
    return f"{TIME_FORMAT.format(time)}{sep}{VALUE_FORMAT.format(value)}"


def write_pwl(path: str | os.PathLike, series: TimeSeries, sep: str = " ") -> None:
    """Write one `<time><sep><value>` line per point (seconds, volts)."""
    with atomic_write(path, "w") as f:
        for t, v in zip(series.time.tolist(), series.values.tolist()):
            f.write(format_point(t, v, sep))
            f.write("\n")
    logger.debug(f"Wrote {path}: {series.n} PWL points")


def read_pwl(path: str | os.PathLike) -> TimeSeries:
    """Read PWL points back; values are volts."""
    return replace(extract_column(path, 1), unit="V")
