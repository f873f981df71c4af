from __future__ import annotations

"""
Disk Usage Record Parser.

Turns the lines of a `du` listing into Records, preserving input order. Each
line is `<digits><space|tab><path>`; the path is split on '/' and kept
verbatim (bar one trailing '/'), so a component may begin with whitespace.
Any malformed line aborts the parse with a line-numbered error; no partial
record list is returned.
"""

import logging
from typing import Iterable, List

from duvis.domain.constants import (
    MAX_LINE_BYTES,
    MAX_SIZE,
    PATH_SEPARATOR,
    SIZE_SEPARATORS,
)
from duvis.domain.errors import BufferOverrunError, FormatError, SizeParseError
from duvis.domain.tree_models import Record
from duvis.infra.fs import encoded_length

logger = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")
_TERMINATORS = ("\n", "\0")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_records(lines: Iterable[str]) -> List[Record]:
    """
    Parse a whole listing into records, one per line, in input order.

    Args:
        lines: Raw input lines, each optionally ending with one terminator
               ('\\n', or NUL for zero-terminated listings).

    Returns:
        List[Record]: Records indexed from 0 in input order.

    Raises:
        FormatError: A line lacks a valid `<digits><whitespace>` prefix.
        SizeParseError: A size does not fit an unsigned 64-bit value.
        BufferOverrunError: A line exceeds MAX_LINE_BYTES.
    """
    records: List[Record] = []
    for index, line in enumerate(lines):
        records.append(parse_line(line, index))

    logger.debug(f"Parsed {len(records)} records.")
    return records


def parse_line(line: str, index: int = 0) -> Record:
    """
    Parse a single listing line.

    Args:
        line: One raw input line.
        index: 0-based position of the line; errors report `index + 1`.

    Returns:
        Record: The parsed record.
    """
    line_number = index + 1

    if line and line[-1] in _TERMINATORS:
        line = line[:-1]

    if _exceeds_buffer(line):
        raise BufferOverrunError(line_number, "path buffer overrun")

    end = 0
    while end < len(line) and line[end] in _DIGITS:
        end += 1

    if end == 0 or end == len(line) or line[end] not in SIZE_SEPARATORS:
        raise FormatError(line_number, "expected '<size><whitespace><path>'")

    size = int(line[:end])
    if size > MAX_SIZE:
        raise SizeParseError(line_number, f"size {line[:end]} exceeds 64 bits")

    # Only the single mandatory separator is consumed
    path = line[end + 1:]
    components = path.split(PATH_SEPARATOR)

    # `du dir/` prints its root as 'dir/' and the children as 'dir/sub'
    if len(components) > 1 and components[-1] == "":
        components.pop()

    return Record(size=size, components=tuple(components), index=index)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _exceeds_buffer(line: str) -> bool:
    """Check the encoded length, skipping the encode when it cannot matter."""
    if len(line) > MAX_LINE_BYTES:
        return True
    if len(line) * 4 <= MAX_LINE_BYTES:
        return False
    return encoded_length(line) > MAX_LINE_BYTES
