from __future__ import annotations

"""
Domain Error Taxonomy.

Every failure of the parsing and tree-reconstruction core is a typed,
unrecoverable error for the current build. Parser errors carry the 1-based
line number of the offending input line; builder errors carry the arena index
of the offending record. The CLI layer decides exit codes and message text.
"""

from typing import Optional


# -----------------------------------------------------------------------------
# BASE CLASSES
# -----------------------------------------------------------------------------

class DuvisError(Exception):
    """
    Root of all duvis domain failures.

    Attributes:
        kind: Short machine-readable identifier of the failure.
        position: Line number or record index, when one applies.
    """

    kind: str = "error"
    unit: str = "position"

    def __init__(self, position: Optional[int] = None, detail: str = ""):
        self.position = position
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        where = f" at {self.unit} {self.position}" if self.position is not None else ""
        tail = f": {self.detail}" if self.detail else ""
        return f"{self.kind}{where}{tail}"


class ParseError(DuvisError):
    """Failure while turning an input line into a Record."""

    unit = "line"

    @property
    def line(self) -> Optional[int]:
        return self.position


class TreeBuildError(DuvisError):
    """Failure while reconstructing the tree from parsed records."""

    unit = "index"

    @property
    def index(self) -> Optional[int]:
        return self.position


# -----------------------------------------------------------------------------
# PARSER ERRORS
# -----------------------------------------------------------------------------

class FormatError(ParseError):
    """Line lacks a valid <digits><whitespace> prefix."""
    kind = "format_error"


class SizeParseError(ParseError):
    """Digit run does not fit an unsigned 64-bit size."""
    kind = "size_parse_error"


class BufferOverrunError(ParseError):
    """Line exceeds the maximum accepted length."""
    kind = "buffer_overrun"


# -----------------------------------------------------------------------------
# BUILDER ERRORS
# -----------------------------------------------------------------------------

class DuplicatePathError(TreeBuildError):
    """Two distinct records resolve to an identical component sequence."""
    kind = "duplicate_path"


class DuplicateSiblingError(TreeBuildError):
    """Two siblings tie on both size and label. Position is the parent index."""
    kind = "duplicate_sibling"

    @property
    def parent_index(self) -> Optional[int]:
        return self.position


class MalformedHierarchyError(TreeBuildError):
    """Post-order input does not nest as its parent offset requires."""
    kind = "malformed_hierarchy"


class MissingEntryError(TreeBuildError):
    """Pre-order input lacks a record for some ancestor path."""
    kind = "missing_entry"


class EmptyRootError(TreeBuildError):
    """The designated root record has zero path components, or there is none."""
    kind = "empty_root"
