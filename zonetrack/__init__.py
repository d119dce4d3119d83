"""
zonetrack: current-area detection from the Path of Exile client log.

Scans the client log for the newest ``Generating level`` line and
extracts the area id, once or on a poll loop.
"""

from .scanner import DEFAULT_SHAPE, LineShape, MalformedLogLine, extract_area_name
from .tracker import (
    DEFAULT_CLIENT_LOG,
    AreaTracker,
    ScanResult,
    TrackerConfig,
    get_area_name,
    read_area_name,
)

__all__ = [
    "AreaTracker",
    "DEFAULT_CLIENT_LOG",
    "DEFAULT_SHAPE",
    "LineShape",
    "MalformedLogLine",
    "ScanResult",
    "TrackerConfig",
    "extract_area_name",
    "get_area_name",
    "read_area_name",
]
