"""
Log file reading for the area tracker.

Loads a client log into an immutable, line-indexed document.  Nothing
here knows about markers or area names; see ``zonetrack.scanner``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# Message surfaced to callers whenever a log cannot be read
READ_ERROR_MESSAGE = "Error while reading file"


class ReadError(Exception):
    """
    The log file could not be read.

    Covers every I/O failure (missing file, permission denied, path is a
    directory), strict decoding failures, and unknown encoding names.
    The message is always :data:`READ_ERROR_MESSAGE`; the underlying
    exception is kept as ``__cause__``.
    """

    def __init__(self, path: Optional[str] = None):
        super().__init__(READ_ERROR_MESSAGE)
        self.path = path


def split_lines(text: str) -> Tuple[str, ...]:
    """
    Split text into lines on ``\\n``, trimming one trailing ``\\r`` per line.

    A trailing newline does not produce an extra empty line, and an empty
    string produces no lines at all.
    """
    if not text:
        return ()
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(line[:-1] if line.endswith("\r") else line for line in lines)


@dataclass(frozen=True)
class LogDocument:
    """Full contents of one log file as an ordered sequence of lines."""

    lines: Tuple[str, ...] = ()
    path: Optional[str] = None

    @classmethod
    def from_text(cls, text: str, path: Optional[str] = None) -> "LogDocument":
        return cls(lines=split_lines(text), path=path)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __reversed__(self) -> Iterator[str]:
        return reversed(self.lines)

    def __repr__(self) -> str:
        return f"LogDocument(path={self.path!r}, lines={len(self.lines)})"


def read_log(path: Union[str, Path], encoding: str = "utf-8") -> LogDocument:
    """
    Read a log file into a :class:`LogDocument`.

    Args:
        path:     Path to the log file.
        encoding: Text encoding, decoded strictly.

    Returns:
        The file contents split into lines.

    Raises:
        ReadError: If the file cannot be opened, read, or decoded, or if
                   ``encoding`` is not a known codec.
    """
    path_str = str(path)
    try:
        with open(path_str, "r", encoding=encoding, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError, LookupError) as e:
        logger.debug("Could not read log '%s': %s", path_str, e)
        raise ReadError(path_str) from e

    document = LogDocument.from_text(text, path=path_str)
    logger.debug("Read %d lines from %s", len(document), path_str)
    return document
