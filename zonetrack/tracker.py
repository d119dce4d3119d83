"""
Area tracker: log file → current area name, once or on a poll loop.

Exposes the boundary operations a host calls with a file path:

- :func:`read_area_name` reads and scans synchronously.
- :func:`get_area_name` does the same from inside an event loop, running
  the blocking read in the default executor.

:class:`AreaTracker` wraps these for hosts that poll the client log
and only care about zone changes.

Usage::

    from zonetrack.tracker import AreaTracker, TrackerConfig

    tracker = AreaTracker(TrackerConfig(log_path="Client.txt"))
    tracker.watch(on_change=lambda r: print(r.area_name))
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from core.document.log_reader import ReadError, read_log
from zonetrack.scanner.log_scanner import extract_area_name
from zonetrack.scanner.models import DEFAULT_SHAPE, LineShape, MalformedLogLine

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_LOG = (
    r"C:\Program Files (x86)\Grinding Gear Games\Path of Exile\logs\Client.txt"
)


# ------------------------------------------------------------------
# Boundary operations
# ------------------------------------------------------------------


def read_area_name(
    path: Union[str, Path],
    shape: LineShape = DEFAULT_SHAPE,
    encoding: str = "utf-8",
) -> str:
    """
    Read a log file and return the area name from its last marker line.

    The scanner never runs when the read fails.

    Raises:
        ReadError:        The file could not be read or decoded.
        MalformedLogLine: The last marker line had too few tokens.
    """
    document = read_log(path, encoding=encoding)
    return extract_area_name(document, shape)


async def get_area_name(
    path: Union[str, Path],
    shape: LineShape = DEFAULT_SHAPE,
    encoding: str = "utf-8",
) -> str:
    """Async variant of :func:`read_area_name` for event-loop hosts."""
    loop = asyncio.get_running_loop()
    document = await loop.run_in_executor(None, lambda: read_log(path, encoding))
    return extract_area_name(document, shape)


# ------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------


@dataclass
class TrackerConfig:
    """
    Tuneable parameters for :class:`AreaTracker`.

    Attributes:
        log_path:       Client log to poll.
        poll_interval:  Seconds between polls.
        encoding:       Log text encoding (strict decoding).
        shape:          Marker line schema.
        clear_on_error: Reset the current area to ``""`` when a poll fails.
    """

    log_path: str = DEFAULT_CLIENT_LOG
    poll_interval: float = 1.0
    encoding: str = "utf-8"
    shape: LineShape = DEFAULT_SHAPE
    clear_on_error: bool = True


# ------------------------------------------------------------------
# Result
# ------------------------------------------------------------------


@dataclass
class ScanResult:
    """Outcome of a single poll."""

    path: str
    area_name: str = ""
    changed: bool = False
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.error is not None:
            return f"{self.path}: {self.error}"
        return f"{self.path}: {self.area_name or '<none>'}"


# ------------------------------------------------------------------
# Tracker
# ------------------------------------------------------------------


class AreaTracker:
    """
    Polls one client log and remembers the last area seen.

    Read and parse failures are reported in :attr:`ScanResult.error`;
    they never propagate out of :meth:`poll`.  A failure is logged as a
    warning when it first appears; identical repeats log at DEBUG until a
    poll succeeds or the failure changes.
    """

    def __init__(self, config: Optional[TrackerConfig] = None):
        self.config = config or TrackerConfig()
        self._current_area = ""
        self._polls = 0
        self._last_failure: Optional[str] = None

    @property
    def current_area(self) -> str:
        return self._current_area

    def poll(self) -> ScanResult:
        """Read the log once and compare against the previous area."""
        cfg = self.config
        result = ScanResult(path=cfg.log_path)
        self._polls += 1

        try:
            area_name = read_area_name(cfg.log_path, cfg.shape, cfg.encoding)
        except (ReadError, MalformedLogLine) as e:
            self._log_failure(e)
            result.error = e
            if not cfg.clear_on_error:
                result.area_name = self._current_area
                return result
            area_name = ""
        else:
            if self._last_failure is not None:
                logger.info("Log readable again after poll %d", self._polls)
            self._last_failure = None

        result.area_name = area_name
        result.changed = area_name != self._current_area
        if result.changed:
            logger.info("Area changed: %r -> %r", self._current_area, area_name)
        self._current_area = area_name
        return result

    def _log_failure(self, error: Exception) -> None:
        cause = error.__cause__
        failure = f"{type(error).__name__}: {error} ({cause!r})"
        if failure == self._last_failure:
            logger.debug("Poll %d failed again: %s", self._polls, error)
            return
        self._last_failure = failure
        if cause is not None:
            logger.warning("Poll %d failed: %s (%s)", self._polls, error, cause)
        else:
            logger.warning("Poll %d failed: %s", self._polls, error)

    def watch(
        self,
        on_change: Optional[Callable[[ScanResult], None]] = None,
        max_polls: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """
        Poll until interrupted, calling ``on_change`` on every area change.

        Args:
            on_change: Callback receiving the :class:`ScanResult` of a
                       poll whose area differs from the previous one.
            max_polls: Stop after this many polls (``None`` = forever).
            sleep:     Delay function, replaceable in tests.

        Returns:
            Number of polls performed.
        """
        cfg = self.config
        count = 0
        logger.info("Watching %s every %.2fs", cfg.log_path, cfg.poll_interval)

        try:
            while max_polls is None or count < max_polls:
                result = self.poll()
                count += 1
                if result.changed and on_change is not None:
                    on_change(result)
                if max_polls is not None and count >= max_polls:
                    break
                sleep(cfg.poll_interval)
        except KeyboardInterrupt:
            logger.info("Stopped after %d polls", count)

        return count

    def __repr__(self) -> str:
        return (
            f"AreaTracker(path={self.config.log_path!r}, "
            f"area={self._current_area!r})"
        )
