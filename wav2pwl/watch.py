# wav2pwl/watch.py
from __future__ import annotations

import logging
import os
import threading
from enum import Enum
from pathlib import Path

from wav2pwl.core import ConversionConfig, CoreError
from wav2pwl.io.convert import decode

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.25  # seconds


class WatchState(Enum):
    IDLE = "idle"              # input absent
    DETECTED = "detected"      # input present, not yet stable
    CONVERTING = "converting"  # stable input being decoded


class Watcher:
    """
    Turns every simulator export written to `input_path` into `output_path`.

    The input path is a mailbox: an external producer creates it, the watcher
    converts it once its size and mtime have been unchanged for `stable_polls`
    successive polls, then deletes it so the producer can write the next one.
    A file that fails to convert is never deleted; it is retried on the next
    poll.
    """

    def __init__(
        self,
        input_path: str | os.PathLike,
        output_path: str | os.PathLike,
        config: ConversionConfig | None = None,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        stable_polls: int = 2,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        if stable_polls < 1:
            raise ValueError(f"stable_polls must be >= 1, got {stable_polls}")

        self.input_path = Path(input_path)
        self.output_path = Path(output_path)
        self.config = config or ConversionConfig()
        self.poll_interval = poll_interval
        self.stable_polls = stable_polls

        self.state = WatchState.IDLE
        self.conversions = 0
        self.failures = 0
        self._signature: tuple[int, int] | None = None
        self._stable_count = 0

    def _stat(self) -> tuple[int, int] | None:
        try:
            st = self.input_path.stat()
        except FileNotFoundError:
            return None
        return st.st_size, st.st_mtime_ns

    def _reset(self) -> None:
        self._signature = None
        self._stable_count = 0

    def poll(self) -> WatchState:
        """Run one iteration of the state machine and return the new state."""
        try:
            signature = self._stat()
        except OSError as e:
            logger.warning(f"Cannot stat {self.input_path}: {e}; will retry")
            return self.state

        if signature is None:
            if self.state is not WatchState.IDLE:
                logger.debug(f"{self.input_path} disappeared before conversion")
            self._reset()
            self.state = WatchState.IDLE
            return self.state

        if self.state is WatchState.IDLE:
            logger.info(f"File detected: {self.input_path}, waiting for write to complete...")

        if signature == self._signature and signature[0] > 0:
            self._stable_count += 1
        else:
            self._signature = signature
            self._stable_count = 1 if signature[0] > 0 else 0

        if self._stable_count < self.stable_polls:
            self.state = WatchState.DETECTED
            return self.state

        self.state = WatchState.CONVERTING
        self._convert()
        return self.state

    def _convert(self) -> None:
        logger.info(f"Converting {self.input_path} -> {self.output_path}")
        try:
            decode(self.input_path, self.output_path, self.config)
        except (CoreError, OSError) as e:
            self.failures += 1
            logger.error(f"Error during conversion of {self.input_path}: {e}")
            # Keep the signature: an unchanged file is retried on the next poll,
            # a changed one goes through the stability check again.
            self.state = WatchState.DETECTED
            return

        self.conversions += 1
        logger.info("Conversion successful!")
        try:
            self.input_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not delete input file {self.input_path}: {e}")
        else:
            logger.info("Input file deleted, waiting for next export...")
        self._reset()
        self.state = WatchState.IDLE

    def run(self, stop: threading.Event | None = None) -> None:
        """Poll until `stop` is set. A running conversion always finishes first."""
        stop = stop or threading.Event()
        logger.info(f"Watching file: {self.input_path}")
        logger.info(f"Will convert to WAV: {self.output_path}")
        if self.config.column is not None:
            logger.info(f"Extracting column: {self.config.column}")

        while not stop.is_set():
            self.poll()
            stop.wait(self.poll_interval)

        logger.info(
            f"Stopped watching {self.input_path} "
            f"({self.conversions} converted, {self.failures} failed attempts)"
        )
