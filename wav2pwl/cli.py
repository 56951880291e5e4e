# wav2pwl/cli.py
from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path

from wav2pwl.core import ConfigError, ConversionConfig, CoreError, DEFAULT_SAMPLE_RATE, parse_selector
from wav2pwl.io.convert import encode
from wav2pwl.watch import DEFAULT_POLL_INTERVAL, Watcher

logger = logging.getLogger("wav2pwl")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wav2pwl",
        description="Convert between WAV and SPICE PWL formats",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_enc = sub.add_parser("wav2pwl", help="Convert WAV file to PWL format")
    p_enc.add_argument("-i", "--input", type=Path, required=True, help="Input WAV file")
    p_enc.add_argument("-o", "--output", type=Path, required=True, help="Output PWL file")
    p_enc.add_argument(
        "-v", "--voltage-scale", type=float, default=1.0,
        help="Voltage scale (peak voltage value, default: 1.0)",
    )
    p_enc.add_argument(
        "-d", "--decimate", type=int, default=1,
        help="Decimation factor (output every Nth sample, default: 1 = no decimation)",
    )

    p_watch = sub.add_parser("watch", help="Watch a simulator export and convert it to WAV")
    p_watch.add_argument("-i", "--input", type=Path, required=True, help="Input file to watch")
    p_watch.add_argument("-o", "--output", type=Path, required=True, help="Output WAV file")
    p_watch.add_argument(
        "-c", "--column", default=None,
        help='Column name or 1-based index to extract (e.g. "V(out)" or "2"; default: 1)',
    )
    p_watch.add_argument(
        "-s", "--sample-rate", type=int, default=DEFAULT_SAMPLE_RATE,
        help=f"Sample rate for output WAV (default: {DEFAULT_SAMPLE_RATE} Hz)",
    )
    p_watch.add_argument(
        "-v", "--voltage-scale", type=float, default=1.0,
        help="Voltage that maps to full-scale audio (default: 1.0)",
    )
    p_watch.add_argument(
        "--poll-interval", type=float, default=DEFAULT_POLL_INTERVAL,
        help=f"Seconds between polls (default: {DEFAULT_POLL_INTERVAL})",
    )
    return parser


def _check_parent(path: Path, what: str) -> None:
    parent = path.resolve().parent
    if not parent.is_dir():
        raise ConfigError(f"{what} directory does not exist: {parent}")


def run_wav2pwl(args: argparse.Namespace) -> int:
    config = ConversionConfig(voltage_scale=args.voltage_scale, decimation=args.decimate)
    encode(args.input, args.output, config)
    logger.info("Conversion complete!")
    return 0


def run_watch(args: argparse.Namespace) -> int:
    config = ConversionConfig(
        voltage_scale=args.voltage_scale,
        sample_rate=args.sample_rate,
        column=parse_selector(args.column),
    )
    if config.voltage_scale == 0:
        raise ConfigError("voltage scale must be nonzero in watch mode")
    _check_parent(args.input, "Input")
    _check_parent(args.output, "Output")

    try:
        watcher = Watcher(args.input, args.output, config, poll_interval=args.poll_interval)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    stop = threading.Event()

    def _request_stop(signum, frame):
        logger.info(f"Received signal {signum}, stopping after the current poll...")
        stop.set()

    previous = {
        sig: signal.signal(sig, _request_stop) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        logger.info("Press Ctrl+C to stop watching...")
        watcher.run(stop)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    handlers = {"wav2pwl": run_wav2pwl, "watch": run_watch}
    try:
        return handlers[args.command](args)
    except CoreError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
