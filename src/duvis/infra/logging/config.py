from __future__ import annotations

"""
Logging Configuration Models.

Immutable settings for the logging subsystem, derived from the validated
duvis configuration plus the `--log-file` flag. Console output always goes to
stderr; stdout carries only the rendered tree.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for `configure_logging`.

    Attributes:
        level: Level name; unknown names resolve to INFO.
        console: Mirror records to stderr.
        log_file: Optional rotated log file.
        max_bytes: Rollover size of the log file.
        backup_count: Rotated files kept next to it.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], log_file: Optional[str] = None) -> LoggingConfig:
        """
        Build the logging settings for one run.

        Args:
            settings: Validated duvis configuration (reads `log_level`).
            log_file: Path given with `--log-file`, if any.
        """
        return cls(level=str(settings.get("log_level", "INFO")), console=True, log_file=log_file or None)

    @property
    def level_no(self) -> int:
        """Numeric level for `self.level`."""
        if not self.level:
            return logging.INFO
        return _LEVEL_MAP.get(str(self.level).strip().upper(), logging.INFO)
