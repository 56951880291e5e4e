"""wav2pwl: convert between WAV audio and SPICE piecewise-linear (PWL) sources."""

__version__ = "0.1.0"
