# core/timeseries.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .exceptions import InvalidTimeSeries, NonMonotonicTime


@dataclass(frozen=True, slots=True)
class TimeSeries:
    """Immutable time/value series: 1D time vector (seconds) + 1D values vector."""

    time: np.ndarray = field(repr=False)
    values: np.ndarray = field(repr=False)
    unit: str | None = None
    name: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        t = np.asarray(self.time, dtype=np.float64)
        v = np.asarray(self.values, dtype=np.float64)

        if t.ndim != 1:
            raise InvalidTimeSeries(f"`time` must be 1D, got shape {t.shape}")
        if v.ndim != 1:
            raise InvalidTimeSeries(f"`values` must be 1D, got shape {v.shape}")
        if t.size != v.size:
            raise InvalidTimeSeries(
                f"`time` and `values` must have same length, got {t.size} vs {v.size}"
            )

        if t.size > 0:
            if not np.isfinite(t).all():
                raise InvalidTimeSeries("`time` contains non-finite values (NaN/Inf).")
            if t[0] < 0:
                raise InvalidTimeSeries(f"`time` must be non-negative, got {t[0]}")
            dt = np.diff(t)
            if np.any(dt < 0):
                pos = int(np.argmax(dt < 0)) + 1
                raise NonMonotonicTime(
                    f"`time` must be monotonic non-decreasing "
                    f"(t[{pos - 1}]={t[pos - 1]} > t[{pos}]={t[pos]})."
                )

        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidTimeSeries("`attrs` must be a dict.")

        object.__setattr__(self, "time", t)
        object.__setattr__(self, "values", v)

    @property
    def n(self) -> int:
        return int(self.time.size)

    @property
    def t_start(self) -> float | None:
        return None if self.n == 0 else float(self.time[0])

    @property
    def t_end(self) -> float | None:
        return None if self.n == 0 else float(self.time[-1])

    def decimate(self, factor: int) -> "TimeSeries":
        """Keep every `factor`-th point. Kept points retain their true time."""
        if factor < 1:
            raise ValueError(f"decimation factor must be >= 1, got {factor}")
        if factor == 1:
            return self
        return TimeSeries(
            time=self.time[::factor],
            values=self.values[::factor],
            unit=self.unit,
            name=self.name,
            attrs=self.attrs.copy(),
        )

    def scale(self, factor: float, *, unit: str | None = None) -> "TimeSeries":
        """Multiply values by `factor`; `unit` names the unit of the result, if it changes."""
        return TimeSeries(
            time=self.time,
            values=self.values * factor,
            unit=self.unit if unit is None else unit,
            name=self.name,
            attrs=self.attrs.copy(),
        )

    def to_numpy(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray]:
        if copy:
            return self.time.copy(), self.values.copy()
        return self.time, self.values


@dataclass(frozen=True, slots=True)
class SampleBuffer:
    """
    Fixed-rate mono audio samples, normalized to [-1.0, 1.0).

    Each sample is implicitly timestamped by `index / sample_rate`.
    - bits_per_sample: bit depth of the container the samples came from
    - channels: channel count of the source before the first channel was kept
    """
    samples: np.ndarray = field(repr=False)
    sample_rate: int
    bits_per_sample: int = 16
    channels: int = 1

    def __post_init__(self) -> None:
        s = np.asarray(self.samples, dtype=np.float64)
        if s.ndim != 1:
            raise InvalidTimeSeries(f"`samples` must be 1D, got shape {s.shape}")
        if not isinstance(self.sample_rate, (int, np.integer)) or self.sample_rate <= 0:
            raise InvalidTimeSeries(f"`sample_rate` must be a positive integer, got {self.sample_rate!r}")
        object.__setattr__(self, "samples", s)
        object.__setattr__(self, "sample_rate", int(self.sample_rate))

    @property
    def n(self) -> int:
        return int(self.samples.size)

    @property
    def duration(self) -> float:
        return self.n / self.sample_rate

    def to_timeseries(self, *, name: str | None = None) -> TimeSeries:
        t = np.arange(self.n, dtype=np.float64) / self.sample_rate
        return TimeSeries(
            time=t,
            values=self.samples,
            name=name,
            attrs={"sample_rate": self.sample_rate},
        )
