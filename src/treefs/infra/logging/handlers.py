from __future__ import annotations

"""
Log Sinks.

Factories for the stderr and rotating-file handlers. Every handler built
here carries a marker attribute so reconfiguration can remove exactly the
handlers treefs installed and leave foreign ones (pytest's capture
handlers, an embedding application's) alone.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional, TextIO

from treefs.infra.fs import ensure_parent_dir
from treefs.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_treefs_handler"


def mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_marked(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def marked_handlers(logger: logging.Logger) -> List[logging.Handler]:
    """Return the handlers of a logger that treefs installed."""
    return [h for h in logger.handlers if is_marked(h)]


def console_sink(cfg: LoggingConfig, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Stderr handler writing synchronously.

    The shell prints command failures on the same stream, so records must be
    written in call order rather than from a background thread.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(cfg.level_number)
    handler.setFormatter(logging.Formatter(cfg.console_fmt))
    return mark(handler)


def file_sink(cfg: LoggingConfig) -> RotatingFileHandler:
    """
    Rotating file handler for cfg.log_file.

    Raises:
        OSError: If the file or its directory cannot be created.
    """
    ensure_parent_dir(cfg.log_file)
    handler = RotatingFileHandler(
        cfg.log_file,
        maxBytes=int(cfg.max_bytes),
        backupCount=int(cfg.backup_count),
        encoding="utf-8",
    )
    handler.setLevel(cfg.level_number)
    handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    mark(handler)
    return handler
