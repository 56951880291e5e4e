# wav2pwl/core/config.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .exceptions import ConfigError


ColumnSelector = Union[int, str, None]

DEFAULT_SAMPLE_RATE = 44100


def parse_selector(text: str | None) -> ColumnSelector:
    """Turn a CLI column argument into a selector.

    "2" -> 2 (1-based index), "out" -> "out" (name), None/"" -> None.
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    return text


@dataclass(frozen=True, slots=True)
class ConversionConfig:
    """
    Settings shared by both conversion directions.

    - voltage_scale: volts per unit of normalized amplitude
    - decimation: keep every N-th sample when encoding (1 = keep all)
    - sample_rate: output rate in Hz when decoding
    - column: name or 1-based index of the value column (None = first non-time column)
    """
    voltage_scale: float = 1.0
    decimation: int = 1
    sample_rate: int = DEFAULT_SAMPLE_RATE
    column: ColumnSelector = None

    def __post_init__(self) -> None:
        try:
            scale = float(self.voltage_scale)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"voltage_scale must be a number, got {self.voltage_scale!r}") from e
        if not math.isfinite(scale):
            raise ConfigError(f"voltage_scale must be finite, got {scale}")
        object.__setattr__(self, "voltage_scale", scale)

        if isinstance(self.decimation, bool) or not isinstance(self.decimation, int):
            raise ConfigError(f"decimation must be an integer, got {self.decimation!r}")
        if self.decimation < 1:
            raise ConfigError(f"decimation factor must be at least 1, got {self.decimation}")

        if isinstance(self.sample_rate, bool) or not isinstance(self.sample_rate, int):
            raise ConfigError(f"sample_rate must be an integer, got {self.sample_rate!r}")
        if self.sample_rate <= 0:
            raise ConfigError(f"sample_rate must be positive, got {self.sample_rate}")

        if self.column is not None:
            if isinstance(self.column, bool) or not isinstance(self.column, (int, str)):
                raise ConfigError(f"column must be a name or an index, got {self.column!r}")
            if isinstance(self.column, str) and not self.column.strip():
                raise ConfigError("column name must be a non-empty string.")
