from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies idempotent setup, that only treefs handlers are replaced, and that
records from core operations reach the sinks synchronously.
"""

import logging
from pathlib import Path
from typing import Generator

import pytest

from treefs.core.operations import FileSystem
from treefs.infra.logging import LoggingConfig, configure_logging, reset_logging
from treefs.infra.logging.handlers import marked_handlers


@pytest.fixture(autouse=True)
def clean_root_logger() -> Generator[None, None, None]:
    """Remove treefs handlers before and after each test."""
    root = logging.getLogger()
    level = root.level
    reset_logging()
    yield
    reset_logging()
    root.setLevel(level)


def test_logging_idempotency() -> None:
    """TC-01: Multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_force_reconfiguration_replaces_handlers() -> None:
    """TC-02: force=True swaps our handlers instead of stacking them."""
    configure_logging(LoggingConfig(level="INFO", console=True))
    root = logging.getLogger()
    ours_before = marked_handlers(root)

    configure_logging(LoggingConfig(level="DEBUG", console=True), force=True)
    ours_after = marked_handlers(root)

    assert len(ours_after) == len(ours_before) == 1
    assert ours_after[0] is not ours_before[0]
    assert root.level == logging.DEBUG


def test_reset_leaves_foreign_handlers_alone() -> None:
    """TC-03: Handlers installed by someone else survive reconfiguration."""
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        configure_logging(LoggingConfig(level="INFO", console=True))
        reset_logging()

        assert foreign in root.handlers
        assert marked_handlers(root) == []
    finally:
        root.removeHandler(foreign)


def test_console_records_are_written_immediately(capsys: pytest.CaptureFixture[str]) -> None:
    """TC-04: A warning is on stderr as soon as the call returns."""
    configure_logging(LoggingConfig(level="WARNING", console=True))

    logging.getLogger("treefs.test").warning("disk almost full")

    assert "WARNING | disk almost full" in capsys.readouterr().err


def test_snapshot_save_is_logged_to_file(tmp_path: Path) -> None:
    """TC-05: INFO records from the snapshot codec reach the log file."""
    log_file = tmp_path / "logs" / "treefs.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    fs = FileSystem(snapshot_path=str(tmp_path / "s.fs"))
    fs.mkdir("/a")
    fs.save()

    content = log_file.read_text(encoding="utf-8")
    assert "Saved 2 nodes" in content
    assert "treefs.core.snapshot" in content


def test_unopenable_log_file_keeps_console(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """TC-06: A log path under a regular file degrades to console only."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    configure_logging(LoggingConfig(level="INFO", console=True, log_file=str(blocker / "x.log")))

    assert len(marked_handlers(logging.getLogger())) == 1
    assert "Cannot open log file" in capsys.readouterr().err


def test_unknown_level_falls_back_to_info() -> None:
    """TC-07: Garbage levels do not break configuration."""
    configure_logging(LoggingConfig(level="LOUD", console=True))

    assert logging.getLogger().level == logging.INFO


def test_config_from_settings(tmp_path: Path) -> None:
    """TC-08: Shell settings map onto the sink parameters."""
    cfg = LoggingConfig.from_settings({"log_level": "debug", "log_file": str(tmp_path / "t.log")})

    assert cfg.level_number == logging.DEBUG
    assert cfg.log_file == str(tmp_path / "t.log")
    assert LoggingConfig.from_settings({"log_level": "ERROR", "log_file": ""}).log_file is None
