# wav2pwl/io/convert.py
from __future__ import annotations

import logging
import os

import numpy as np

from wav2pwl.core import (
    ConfigError,
    ConversionConfig,
    EmptySeries,
    SampleBuffer,
    TimeSeries,
    resample,
)
from wav2pwl.io.pwl import write_pwl
from wav2pwl.io.table_reader import extract_column
from wav2pwl.io.wav import read_wav, write_wav

logger = logging.getLogger(__name__)


def encode(
    input_path: str | os.PathLike,
    output_path: str | os.PathLike,
    config: ConversionConfig | None = None,
) -> TimeSeries:
    """WAV -> PWL.

    Keeps every `config.decimation`-th sample at its original time
    (index / source rate) and multiplies it by `config.voltage_scale`.
    """
    config = config or ConversionConfig()

    audio = read_wav(input_path)
    logger.info(f"Reading WAV file: {input_path}")
    logger.info(f"  Sample rate: {audio.sample_rate} Hz")
    logger.info(f"  Channels: {audio.channels}")
    logger.info(f"  Bits per sample: {audio.bits_per_sample}")
    logger.info(
        f"  Decimation: {config.decimation} "
        f"(effective rate: {audio.sample_rate / config.decimation:g} Hz)"
    )

    series = (
        audio.to_timeseries(name="v")
        .decimate(config.decimation)
        .scale(config.voltage_scale, unit="V")
    )

    write_pwl(output_path, series)
    logger.info(f"Wrote PWL file: {output_path} ({series.n} points)")
    return series


def decode(
    input_path: str | os.PathLike,
    output_path: str | os.PathLike,
    config: ConversionConfig | None = None,
) -> SampleBuffer:
    """Simulator output -> WAV.

    Extracts `config.column`, resamples it to `config.sample_rate`, divides by
    `config.voltage_scale` and clamps to full scale before writing 16-bit PCM.
    """
    config = config or ConversionConfig()
    if config.voltage_scale == 0:
        raise ConfigError("voltage_scale must be nonzero to convert volts back to audio")

    series = extract_column(input_path, config.column)
    if series.n == 0:
        raise EmptySeries(f"No valid samples found in {input_path}")

    logger.info(f"  Duration: {series.t_end:.6f} seconds, unit: {series.unit or 'unknown'}")
    buffer = resample(series, config.sample_rate)

    normalized = np.clip(buffer.samples / config.voltage_scale, -1.0, 1.0)
    out = SampleBuffer(samples=normalized, sample_rate=buffer.sample_rate)

    write_wav(output_path, out, config.sample_rate)
    logger.info(f"Wrote WAV file: {output_path} ({out.n} samples @ {out.sample_rate} Hz)")
    return out
