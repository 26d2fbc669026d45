from __future__ import annotations

"""
Logging Configuration Model.

Translates the shell settings (log_level, log_file) into the parameters of
the two log sinks: stderr for the interactive user and an optional rotating
file for post-mortem diagnostics.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from treefs.infra.fs import normalize_path

_LEVELS: Dict[str, int] = {
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
    Sink parameters for one logging setup.

    Attributes:
        level: Severity name; unknown names behave like INFO.
        console: Whether records are echoed on stderr.
        log_file: Rotating log file, or None to keep logs on stderr only.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the active one.
        console_fmt: Format of stderr lines, kept short to sit between
                     command output.
        file_fmt: Format of log file lines.
        datefmt: Timestamp format of log file lines.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> LoggingConfig:
        """
        Build the config from validated shell settings.

        Args:
            settings: Output of validate_config.

        Returns:
            LoggingConfig: Console logging at the configured level, plus a
                           file sink when log_file is set.
        """
        log_file = settings.get("log_file") or ""
        return cls(
            level=settings.get("log_level", "WARNING"),
            log_file=normalize_path(log_file, "") if log_file else None,
        )

    @property
    def level_number(self) -> int:
        if not self.level:
            return logging.INFO
        return _LEVELS.get(str(self.level).strip().upper(), logging.INFO)
