"""
Line-shape schema and errors for the log tail scanner.
"""

from dataclasses import dataclass

# Substring that identifies an area-generation line in the client log
MARKER = "Generating level"


@dataclass(frozen=True)
class LineShape:
    """
    Where the area token sits in a marker line.

    The remainder after the first ``marker`` occurrence is split on
    ``delimiter`` (no collapsing of repeated delimiters) and the token at
    ``field_index`` is taken, whitespace-trimmed, with every character in
    ``strip_chars`` removed.

    For the client line ``... Generating level 1 area "1_1_1" with seed 9``
    the remainder splits into ``["", "1", "area", '"1_1_1"', ...]``, so the
    area id is field 3.
    """

    marker: str = MARKER
    delimiter: str = " "
    field_index: int = 3
    strip_chars: str = '"'

    def __post_init__(self):
        if not self.marker:
            raise ValueError("LineShape.marker must not be empty")
        if not self.delimiter:
            raise ValueError("LineShape.delimiter must not be empty")
        if self.field_index < 0:
            raise ValueError(
                f"LineShape.field_index must be >= 0, got {self.field_index}"
            )


DEFAULT_SHAPE = LineShape()


class MalformedLogLine(ValueError):
    """A line contained the marker but had too few tokens after it."""

    def __init__(
        self,
        line: str,
        line_number: int,
        token_count: int,
        field_index: int,
    ):
        self.line = line
        self.line_number = line_number
        self.token_count = token_count
        self.field_index = field_index
        super().__init__(
            f"Line {line_number} has {token_count} token(s) after the marker, "
            f"need at least {field_index + 1}: {line[:120]!r}"
        )
