# wav2pwl/core/table.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from .config import ColumnSelector
from .exceptions import ColumnNotFound, IndexOutOfRange, InvalidTimeSeries, MalformedRow
from .timeseries import TimeSeries


def default_header(width: int) -> tuple[str, ...]:
    """Column names used when a table has no header line: time, col1, col2, ..."""
    return ("time",) + tuple(f"col{i}" for i in range(1, width))


def unit_for_column(name: str) -> str | None:
    """SPICE signal names carry their unit: V(out) is volts, I(R1) is amperes."""
    if name.startswith(("V(", "v(")):
        return "V"
    if name.startswith(("I(", "i(", "Ix(", "ix(")):
        return "A"
    return None


@dataclass(frozen=True, slots=True)
class ColumnTable:
    """
    A simulator export: one time column followed by one or more value columns.

    Design goals:
    - easy access: table["V(out)"] -> TimeSeries
    - safe: every data row is exactly as wide as the header
    - tolerant: unparsable rows are kept aside in `malformed`, not raised
    """
    header: tuple[str, ...]
    data: np.ndarray = field(repr=False)
    has_header: bool = True
    malformed: tuple[MalformedRow, ...] = field(default=(), repr=False)
    source: str | None = None

    def __post_init__(self) -> None:
        header = tuple(self.header)
        if len(header) < 2:
            raise InvalidTimeSeries(
                f"a table needs a time column and at least one value column, got {list(header)}"
            )

        data = np.asarray(self.data, dtype=np.float64)
        if data.size == 0:
            data = data.reshape(0, len(header))
        if data.ndim != 2 or data.shape[1] != len(header):
            raise InvalidTimeSeries(
                f"data rows must have {len(header)} fields, got shape {data.shape}"
            )

        object.__setattr__(self, "header", header)
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "malformed", tuple(self.malformed))

    # ---- dict-like API ----
    def __len__(self) -> int:
        return len(self.header) - 1

    def __iter__(self) -> Iterator[str]:
        return iter(self.header[1:])

    def __contains__(self, name: object) -> bool:
        return self.has_header and name in self.header[1:]

    def __getitem__(self, name: str) -> TimeSeries:
        return self.series(name)

    @property
    def n_rows(self) -> int:
        return int(self.data.shape[0])

    @property
    def time(self) -> np.ndarray:
        return self.data[:, 0]

    # ---- column selection ----
    def column_index(self, selector: ColumnSelector = None) -> int:
        """Resolve a selector to a position in the header (never 0, which is time)."""
        if selector is None:
            return 1

        if isinstance(selector, str):
            if selector in self:
                return self.header.index(selector, 1)
            if self.has_header:
                raise ColumnNotFound(
                    f"Column '{selector}' not found. Available: {', '.join(self)}"
                )
            raise ColumnNotFound(
                f"Column '{selector}' requested by name but the table has no header; "
                f"select by index 1..{len(self)} instead."
            )

        if not 1 <= selector <= len(self):
            raise IndexOutOfRange(
                f"Column index {selector} out of range (valid: 1..{len(self)}, "
                f"table has {len(self.header)} columns including time)"
            )
        return selector

    def series(self, selector: ColumnSelector = None) -> TimeSeries:
        idx = self.column_index(selector)
        return TimeSeries(
            time=self.time,
            values=self.data[:, idx],
            unit=unit_for_column(self.header[idx]),
            name=self.header[idx],
            attrs={"source": self.source, "column": idx},
        )
