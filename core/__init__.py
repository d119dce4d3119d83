"""
Core backend for zonetrack.
Log file reading only: no marker or area-name knowledge.
"""

from .document import LogDocument, ReadError, read_log, split_lines

__all__ = [
    "LogDocument",
    "ReadError",
    "read_log",
    "split_lines",
]
