# wav2pwl/io/table_reader.py
from __future__ import annotations

import logging
import math
import os
import re
from typing import Iterable

import numpy as np

from wav2pwl.core import (
    ColumnSelector,
    ColumnTable,
    IoError,
    MalformedRow,
    NonMonotonicTime,
    TimeSeries,
)
from wav2pwl.core.table import default_header

logger = logging.getLogger(__name__)

# SPICE (*), ini/LTspice (;) and shell-style (#) comment lines
COMMENT_PREFIXES = ("*", ";", "#")

# Commas outside parentheses, so signal names like V(n001,n002) stay whole
_COMMA_RE = re.compile(r"\s*,\s*(?![^(]*\))")
_PARENS_RE = re.compile(r"\([^()]*\)")


def detect_delimiter(line: str) -> str | None:
    """Return "," for comma separated lines (CSV, `t, v` PWL), None for whitespace."""
    return "," if "," in _PARENS_RE.sub("", line) else None


def split_fields(line: str, delimiter: str | None = None) -> list[str]:
    """Split a row on `delimiter`, or on runs of whitespace when it is None."""
    line = line.strip()
    if delimiter is None:
        return line.split()
    line = line.strip(delimiter).strip()
    if not line:
        return []
    return _COMMA_RE.split(line)


def _is_number(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


def _is_header(fields: list[str]) -> bool:
    """A line is a header if its first field is not a number."""
    return bool(fields) and not _is_number(fields[0])


def _meaningful_lines(lines: Iterable[str]) -> Iterable[tuple[int, str]]:
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        yield line_no, line


def parse_table(lines: Iterable[str], *, source: str | None = None) -> ColumnTable:
    """Parse simulator output text into a ColumnTable.

    The delimiter (comma or whitespace) is chosen once from the first
    meaningful line. Rows with non-numeric or non-finite fields, or the wrong
    number of fields, are skipped and recorded in `ColumnTable.malformed`;
    a partially flushed last line ends up there too.
    """
    header: tuple[str, ...] | None = None
    has_header = False
    width: int | None = None
    rows: list[list[float]] = []
    malformed: list[MalformedRow] = []
    delimiter: str | None = None

    for line_no, line in _meaningful_lines(lines):
        if width is None:
            delimiter = detect_delimiter(line)
        fields = split_fields(line, delimiter)

        if width is None:
            if _is_header(fields):
                header = tuple(fields)
                has_header = True
                width = len(fields)
                continue
            width = len(fields)

        if len(fields) != width:
            malformed.append(
                MalformedRow(line_no, line, f"expected {width} fields, got {len(fields)}")
            )
            continue
        try:
            row = [float(x) for x in fields]
        except ValueError:
            malformed.append(MalformedRow(line_no, line, "non-numeric field"))
            continue
        if not all(math.isfinite(x) for x in row):
            malformed.append(MalformedRow(line_no, line, "non-finite field"))
            continue
        rows.append(row)

    for bad in malformed:
        logger.warning(f"{source or '<table>'}: skipping malformed row, {bad}")

    if not rows and malformed:
        raise malformed[0]

    if width is None:
        # Empty file: an empty two-column table
        width = 2
    if header is None:
        header = default_header(width)

    data = np.array(rows, dtype=np.float64).reshape(-1, width)
    if data.shape[0] > 1:
        dt = np.diff(data[:, 0])
        if np.any(dt < 0):
            pos = int(np.argmax(dt < 0)) + 1
            raise NonMonotonicTime(
                f"{source or '<table>'}: time goes backwards at data row {pos} "
                f"({data[pos - 1, 0]} -> {data[pos, 0]}); file may still be being written"
            )

    return ColumnTable(
        header=header,
        data=data,
        has_header=has_header,
        malformed=tuple(malformed),
        source=source,
    )


def read_table(path: str | os.PathLike) -> ColumnTable:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return parse_table(f, source=os.fspath(path))
    except OSError as e:
        raise IoError(f"Cannot read {path}: {e.strerror or e}") from e


def extract_column(path: str | os.PathLike, selector: ColumnSelector = None) -> TimeSeries:
    """Read `path` and return the selected value column against time."""
    table = read_table(path)
    series = table.series(selector)
    logger.info(
        f"Extracted column {table.column_index(selector)} ({series.name}) from {path}: "
        f"{table.n_rows} rows, {len(table.malformed)} skipped"
    )
    return series
