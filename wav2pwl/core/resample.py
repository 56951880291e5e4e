# wav2pwl/core/resample.py
from __future__ import annotations

import numpy as np

from .exceptions import ConfigError
from .timeseries import SampleBuffer, TimeSeries

# Absorbs float error in last_time * rate so that a series ending exactly on
# a sample boundary (e.g. written by encode()) keeps its final sample.
_RATE_EPS = 1e-9


def output_length(last_time: float, target_rate: int) -> int:
    """Number of output samples covering [0, last_time] at `target_rate`."""
    return int(np.floor(last_time * target_rate + _RATE_EPS)) + 1


def resample(series: TimeSeries, target_rate: int) -> SampleBuffer:
    """Linearly interpolate `series` onto the grid t = i / target_rate.

    Output stops at the last recorded point (never extrapolates past it);
    grid points before the first recorded point take the first value.
    """
    if isinstance(target_rate, bool) or not isinstance(target_rate, (int, np.integer)) or target_rate <= 0:
        raise ConfigError(f"target rate must be a positive integer, got {target_rate!r}")

    if series.n == 0:
        return SampleBuffer(samples=np.array([]), sample_rate=int(target_rate))

    t, v = series.to_numpy()
    n_out = output_length(float(t[-1]), int(target_rate))
    grid = np.arange(n_out, dtype=np.float64) / target_rate

    # np.interp clamps to v[0] / v[-1] outside [t[0], t[-1]]
    out = np.interp(grid, t, v)
    return SampleBuffer(samples=out, sample_rate=int(target_rate))
