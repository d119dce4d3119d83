"""Area-name extraction from client log lines."""

from .log_scanner import extract_area_name, extract_token
from .models import DEFAULT_SHAPE, MARKER, LineShape, MalformedLogLine

__all__ = [
    "MARKER",
    "LineShape",
    "DEFAULT_SHAPE",
    "MalformedLogLine",
    "extract_area_name",
    "extract_token",
]
