from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for file systems, sessions and an isolated user data dir.
"""

import os
import sys
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treefs.core.operations import FileSystem  # noqa: E402
from treefs.interface.shell.session import Session  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fs(tmp_path: Path) -> FileSystem:
    """
    Return an empty FileSystem whose default snapshot lives in tmp_path.
    """
    return FileSystem(snapshot_path=str(tmp_path / "backup.fs"))


@pytest.fixture
def populated_fs(fs: FileSystem) -> FileSystem:
    """
    Return a FileSystem holding a small sample tree.

    Structure:
    /
      home/
        docs/
          report.txt
        notes.txt
      tmp/
    """
    fs.mkdir("/home")
    fs.mkdir("/home/docs")
    fs.creat("/home/docs/report.txt")
    fs.creat("/home/notes.txt")
    fs.mkdir("/tmp")
    return fs


@pytest.fixture
def session(fs: FileSystem) -> Session:
    """Return a session over the empty fs fixture, autosave enabled."""
    return Session(fs)


@pytest.fixture
def mock_user_data_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """
    Point the config layer at a temporary user data directory.

    Prevents tests from reading/writing the real OS user folder.
    """
    data_dir = tmp_path / "userdata"
    data_dir.mkdir()
    with patch("treefs.domain.config.get_user_data_dir", return_value=str(data_dir)):
        yield data_dir
