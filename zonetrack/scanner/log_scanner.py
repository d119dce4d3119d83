"""
Log tail scanner: find the newest area-generation line and pull the
area name out of it.

The client appends one ``Generating level`` line per zone load, so the
last such line in the file names the zone the player is currently in.
"""

import logging
from typing import Union

from core.document.log_reader import LogDocument, split_lines

from .models import DEFAULT_SHAPE, LineShape, MalformedLogLine

logger = logging.getLogger(__name__)


def extract_token(line: str, line_number: int, shape: LineShape = DEFAULT_SHAPE) -> str:
    """
    Extract the area token from a single marker line.

    Args:
        line:        A line known to contain ``shape.marker``.
        line_number: 0-based position of the line, for error reporting.
        shape:       Line schema.

    Raises:
        MalformedLogLine: If the remainder has too few tokens.
    """
    remainder = line.split(shape.marker, 1)[1]
    tokens = remainder.split(shape.delimiter)
    if len(tokens) <= shape.field_index:
        raise MalformedLogLine(line, line_number, len(tokens), shape.field_index)

    token = tokens[shape.field_index].strip()
    for ch in shape.strip_chars:
        token = token.replace(ch, "")
    return token


def extract_area_name(
    contents: Union[str, LogDocument],
    shape: LineShape = DEFAULT_SHAPE,
) -> str:
    """
    Return the area name from the last marker line of a log.

    Lines are scanned from the end; the first line containing
    ``shape.marker`` decides the result and scanning stops there, even
    if that line turns out to be malformed.

    Args:
        contents: Full log text, or an already split :class:`LogDocument`.
        shape:    Line schema (defaults to the client log shape).

    Returns:
        The extracted token, or ``""`` when no line contains the marker.

    Raises:
        MalformedLogLine: If the last marker line has too few tokens.
    """
    if isinstance(contents, LogDocument):
        lines = contents.lines
    else:
        lines = split_lines(contents)

    for line_number in range(len(lines) - 1, -1, -1):
        line = lines[line_number]
        if shape.marker in line:
            area_name = extract_token(line, line_number, shape)
            logger.debug("Line %d -> area %r", line_number, area_name)
            return area_name

    logger.debug("No %r line in %d lines", shape.marker, len(lines))
    return ""
