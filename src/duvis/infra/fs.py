from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user data directory and acquires the raw `du` listing from a
file or standard input. Input is read in binary with a large buffer and
decoded with 'surrogateescape', so path bytes that are not valid UTF-8 survive
verbatim through parsing and rendering.
"""

import os
import sys
from typing import BinaryIO, Iterator, Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "duvis"
UNIX_APP_DIR_NAME = ".duvis"

IO_BUFFER_LENGTH = 1024 * 1024
INPUT_ENCODING = "utf-8"
INPUT_ERRORS = "surrogateescape"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/duvis
    - Linux/Mac: ~/.duvis

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)

# -----------------------------------------------------------------------------
# INPUT ACQUISITION API
# -----------------------------------------------------------------------------

def iter_input_lines(path: Optional[str] = None, zero_terminated: bool = False) -> Iterator[str]:
    """
    Yield the raw text lines of a `du` listing, terminators included.

    Args:
        path: Input file; None or '-' reads standard input.
        zero_terminated: Records end with NUL (`du -0`) instead of newline.

    Yields:
        str: One decoded line per record. The last one may lack a terminator.

    Raises:
        OSError: If the input file cannot be opened.
    """
    if path is None or path == "-":
        yield from iter_stream_lines(sys.stdin.buffer, zero_terminated)
        return

    with open(path, "rb", buffering=IO_BUFFER_LENGTH) as f:
        yield from iter_stream_lines(f, zero_terminated)


def iter_stream_lines(stream: BinaryIO, zero_terminated: bool = False) -> Iterator[str]:
    """Split an open binary stream into decoded lines, keeping terminators."""
    if not zero_terminated:
        for raw in stream:
            yield _decode(raw)
        return

    pending = b""
    while True:
        chunk = stream.read(IO_BUFFER_LENGTH)
        if not chunk:
            break
        pending += chunk
        *complete, pending = pending.split(b"\0")
        for raw in complete:
            yield _decode(raw + b"\0")

    if pending:
        yield _decode(pending)


def encoded_length(text: str) -> int:
    """Number of input bytes a decoded line originally occupied."""
    return len(text.encode(INPUT_ENCODING, INPUT_ERRORS))


def _decode(raw: bytes) -> str:
    return raw.decode(INPUT_ENCODING, INPUT_ERRORS)
