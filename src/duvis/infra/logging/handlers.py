from __future__ import annotations

"""
Logging Handler Factories.

Builds the sinks the queue listener drives and tags them, so duvis can later
tell its own handlers apart from ones installed by a host application or by
pytest.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from duvis.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_duvis_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(cfg: LoggingConfig, level: int) -> logging.Handler:
    """Stderr sink. Stdout is reserved for the rendered tree."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(cfg.console_fmt))
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(cfg: LoggingConfig, level: int) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file named by `cfg.log_file`.

    A file that cannot be opened is reported once on stderr and skipped; the
    run continues with console logging only.

    Returns:
        Optional[RotatingFileHandler]: The tagged handler, or None on I/O failure.
    """
    path = str(cfg.log_file)
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        fh = RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: cannot open log file '{path}': {e}\n")
        return None

    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    _tag_handler(fh)
    return fh
