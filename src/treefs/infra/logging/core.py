from __future__ import annotations

"""
Logging Setup.

Installs the treefs sinks on the root logger. The shell is single threaded
and writes its own failure messages to stderr, so handlers are attached
directly and emit synchronously: a log line always appears before the
prompt that follows the command which produced it.
"""

import logging

from treefs.infra.logging.config import LoggingConfig
from treefs.infra.logging.handlers import console_sink, file_sink, marked_handlers

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the configured sinks to the root logger.

    A second call is a no-op while treefs handlers are installed, unless
    force is set, in which case they are replaced.

    Args:
        cfg: Sink parameters.
        force: Replace an existing treefs setup.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if marked_handlers(root) and not force:
        return root

    reset_logging()
    root.setLevel(cfg.level_number)

    if cfg.console:
        root.addHandler(console_sink(cfg))

    if cfg.log_file:
        try:
            root.addHandler(file_sink(cfg))
        except OSError as e:
            logger.warning(f"Logging: Cannot open log file '{cfg.log_file}': {e}")

    return root


def reset_logging() -> None:
    """Detach and close every handler treefs installed on the root logger."""
    root = logging.getLogger()
    for handler in marked_handlers(root):
        root.removeHandler(handler)
        handler.close()


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger; records propagate to the root sinks.

    Args:
        name: Usually the calling module's __name__.
    """
    return logging.getLogger(name)
