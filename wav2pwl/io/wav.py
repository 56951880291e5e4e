# wav2pwl/io/wav.py
from __future__ import annotations

import logging
import os

import numpy as np
import soundfile as sf

from wav2pwl.core import FormatError, IoError, SampleBuffer
from wav2pwl.io.atomic import atomic_write

logger = logging.getLogger(__name__)

WAV_FORMATS = ("WAV", "WAVEX", "RF64")

# libsndfile subtype -> bits per sample
READ_SUBTYPES = {
    "PCM_U8": 8,
    "PCM_16": 16,
    "PCM_24": 24,
    "PCM_32": 32,
    "FLOAT": 32,
    "DOUBLE": 64,
}
FLOAT_SUBTYPES = ("FLOAT", "DOUBLE")

# bits per sample -> libsndfile subtype used when writing integer PCM
WRITE_SUBTYPES = {8: "PCM_U8", 16: "PCM_16", 24: "PCM_24", 32: "PCM_32"}


def _full_scale(bits: int) -> float:
    return float(1 << (bits - 1))


def _to_pcm(samples: np.ndarray, bits: int) -> np.ndarray:
    """Normalized floats -> int32 left-justified PCM, clipped to `bits` full scale."""
    full = _full_scale(bits)
    bad = ~np.isfinite(samples)
    if bad.any():
        logger.warning(f"Replacing {int(bad.sum())} non-finite samples before writing")
        samples = np.nan_to_num(samples, nan=0.0, posinf=1.0, neginf=-1.0)
    ints = np.clip(np.round(samples * full), -full, full - 1).astype(np.int64)
    # libsndfile reads int32 input as full-scale 32-bit and keeps the top `bits`
    return (ints << (32 - bits)).astype(np.int32)


def read_wav(path: str | os.PathLike) -> SampleBuffer:
    """Read an integer PCM or IEEE float WAV file into a normalized mono SampleBuffer.

    Integer samples are divided by 2**(bits-1); float samples are kept as-is.
    Only the first channel of a multi-channel file is kept.
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        raise IoError(f"Cannot read {path}: {e.strerror or e}") from e

    with f:
        try:
            with sf.SoundFile(f) as snd:
                container, subtype = snd.format, snd.subtype
                rate, channels = snd.samplerate, snd.channels
                if container not in WAV_FORMATS:
                    raise FormatError(f"{path}: not a WAV file (container {container})")
                if subtype not in READ_SUBTYPES:
                    raise FormatError(f"{path}: unsupported sample encoding {subtype}")
                dtype = "float64" if subtype in FLOAT_SUBTYPES else "int32"
                data = snd.read(dtype=dtype, always_2d=True)
        except sf.SoundFileError as e:
            raise FormatError(f"{path} is not a supported WAV file: {e}") from e

    if channels > 1:
        logger.info(f"{path}: {channels} channels, using only the first channel")
    first = data[:, 0]

    bits = READ_SUBTYPES[subtype]
    if subtype in FLOAT_SUBTYPES:
        samples = first.astype(np.float64)
    else:
        # soundfile returns every integer depth left-justified in int32
        samples = first.astype(np.float64) / _full_scale(32)
    return SampleBuffer(samples=samples, sample_rate=rate, bits_per_sample=bits, channels=channels)


def write_wav(
    path: str | os.PathLike,
    buffer: SampleBuffer,
    sample_rate: int | None = None,
    bits_per_sample: int = 16,
) -> None:
    """Write `buffer` as mono integer PCM. The file appears only once complete."""
    rate = buffer.sample_rate if sample_rate is None else int(sample_rate)
    if rate <= 0:
        raise FormatError(f"sample rate must be positive, got {rate}")
    if bits_per_sample not in WRITE_SUBTYPES:
        raise FormatError(f"Unsupported bit depth: {bits_per_sample}")

    pcm = _to_pcm(buffer.samples, bits_per_sample)
    with atomic_write(path, "wb") as f:
        try:
            sf.write(f, pcm, rate, subtype=WRITE_SUBTYPES[bits_per_sample], format="WAV")
        except sf.SoundFileError as e:
            raise FormatError(f"Cannot encode {path}: {e}") from e

    logger.debug(f"Wrote {path}: {buffer.n} samples @ {rate} Hz, {bits_per_sample}-bit")
