#!/usr/bin/env python3
"""
zonetrack: CLI entry point.

Prints the current area id from one or more Path of Exile client logs,
or watches a single log and prints every zone change.

Usage::

    python track_area.py
    python track_area.py logs/Client.txt
    python track_area.py a/Client.txt b/Client.txt --no-progress
    python track_area.py logs/Client.txt --watch --interval 0.5 -v 2

Verbosity levels::

    -v 0   Quiet: warnings and errors only.
    -v 1   Normal: area changes and run summary (default).
    -v 2   Debug: per-read detail.
"""

import argparse
import codecs
import logging
import sys
from typing import List, Optional

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from core.document.log_reader import ReadError
from zonetrack.scanner.models import (
    DEFAULT_SHAPE,
    MARKER,
    LineShape,
    MalformedLogLine,
)
from zonetrack.tracker import (
    DEFAULT_CLIENT_LOG,
    AreaTracker,
    ScanResult,
    TrackerConfig,
    read_area_name,
)

logger = logging.getLogger("zonetrack")

# Loggers owned by this CLI: configured together and redirected around tqdm
_LOGGER_NAMES = ("zonetrack", "core")

# Mapping from --verbose integer to logging level
_VERBOSITY_MAP = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


# ------------------------------------------------------------------
# Argument parsing
# ------------------------------------------------------------------


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number '{value}'.")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Interval must be > 0, got {value}.")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer '{value}'.")
    if number < 0:
        raise argparse.ArgumentTypeError(f"Field index must be >= 0, got {value}.")
    return number


def _codec_name(value: str) -> str:
    try:
        return codecs.lookup(value).name
    except LookupError:
        raise argparse.ArgumentTypeError(f"Unknown encoding '{value}'.")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    p = argparse.ArgumentParser(
        description="Print the current area id from a Path of Exile client log.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  python track_area.py logs/Client.txt\n"
            "  python track_area.py logs/Client.txt --watch --interval 0.5\n"
        ),
    )

    p.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Client log file(s). Default: the standard Windows install path.",
    )

    # -- Watch -------------------------------------------------------------
    watch = p.add_argument_group("watch")
    watch.add_argument(
        "--watch",
        action="store_true",
        help="Keep polling a single log and print every area change",
    )
    watch.add_argument(
        "--interval",
        type=_positive_float,
        default=1.0,
        metavar="SEC",
        help="Seconds between polls in --watch mode (default: 1.0)",
    )

    # -- Log format --------------------------------------------------------
    fmt = p.add_argument_group("log format")
    fmt.add_argument(
        "--encoding",
        type=_codec_name,
        default="utf-8",
        help="Log file encoding (default: utf-8)",
    )
    fmt.add_argument(
        "--marker",
        default=MARKER,
        metavar="TEXT",
        help=f"Marker substring of area lines (default: '{MARKER}')",
    )
    fmt.add_argument(
        "--field-index",
        type=_non_negative_int,
        default=DEFAULT_SHAPE.field_index,
        metavar="N",
        help=(
            "Token index after the marker, split on spaces "
            f"(default: {DEFAULT_SHAPE.field_index})"
        ),
    )

    # -- Output control ----------------------------------------------------
    out = p.add_argument_group("output")
    out.add_argument(
        "-v",
        "--verbose",
        type=int,
        choices=[0, 1, 2],
        default=1,
        help="Verbosity: 0=quiet, 1=normal (default), 2=debug",
    )
    out.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar when scanning several files",
    )

    return p


# ------------------------------------------------------------------
# Logging setup
# ------------------------------------------------------------------


def _configure_logging(verbosity: int) -> None:
    """
    Attach one stderr handler to the ``zonetrack`` and ``core`` loggers.

    Area results go to stdout; everything logged here goes to stderr, so
    ``track_area.py Client.txt > area.txt`` stays clean.  -v 0 keeps only
    per-file failures, -v 1 adds area changes and the multi-file summary,
    -v 2 adds timestamped per-read detail from the reader and scanner.
    """
    level = _VERBOSITY_MAP.get(verbosity, logging.INFO)

    if level <= logging.DEBUG:
        fmt = "%(asctime)s %(name)s %(levelname)s: %(message)s"
        datefmt = "%H:%M:%S"
    elif level <= logging.INFO:
        fmt = "%(message)s"
        datefmt = None
    else:
        fmt = "%(levelname)s: %(message)s"
        datefmt = None

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    for name in _LOGGER_NAMES:
        root = logging.getLogger(name)
        root.setLevel(level)
        root.handlers.clear()
        root.addHandler(handler)


# ------------------------------------------------------------------
# Sub-commands
# ------------------------------------------------------------------


def _cmd_scan(
    paths: List[str],
    shape: LineShape,
    encoding: str,
    disable_progress: bool,
) -> int:
    """Scan each log once and print its area. Returns the exit code."""
    failures = 0
    show_path = len(paths) > 1

    loggers = [logging.getLogger(name) for name in _LOGGER_NAMES]
    with logging_redirect_tqdm(loggers=loggers):
        pbar = tqdm(
            paths,
            desc="Scanning logs",
            unit="file",
            disable=disable_progress or len(paths) < 2,
        )
        for path in pbar:
            try:
                area_name = read_area_name(path, shape, encoding)
            except (ReadError, MalformedLogLine) as e:
                reason = f" ({e.__cause__})" if e.__cause__ is not None else ""
                logger.error("%s: %s%s", path, e, reason)
                failures += 1
                continue

            if show_path:
                tqdm.write(f"{path}\t{area_name}")
            else:
                print(area_name)

    if show_path:
        logger.info("Scanned %d files, %d failed", len(paths), failures)
    return 1 if failures else 0


def _cmd_watch(config: TrackerConfig) -> int:
    """Poll one log until interrupted, printing each area change."""

    def _print_change(result: ScanResult) -> None:
        if result.ok:
            print(result.area_name, flush=True)

    tracker = AreaTracker(config)
    polls = tracker.watch(on_change=_print_change)
    logger.debug("Watch finished after %d polls", polls)
    return 0


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging, and run."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Logging must be configured before any logger calls
    _configure_logging(args.verbose)

    paths = args.paths or [DEFAULT_CLIENT_LOG]
    if args.watch and len(paths) != 1:
        parser.error("--watch takes exactly one log file.")
    if not args.marker:
        parser.error("--marker must not be empty.")

    shape = LineShape(marker=args.marker, field_index=args.field_index)

    if args.watch:
        config = TrackerConfig(
            log_path=paths[0],
            poll_interval=args.interval,
            encoding=args.encoding,
            shape=shape,
        )
        return _cmd_watch(config)

    disable_progress = args.no_progress or args.verbose == 0
    return _cmd_scan(paths, shape, args.encoding, disable_progress)


if __name__ == "__main__":
    sys.exit(main())
