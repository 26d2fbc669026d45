from __future__ import annotations

"""
Integration tests for snapshot persistence on disk.

Verifies:
1. Save followed by reload restores paths, kinds and the id counter.
2. Reload always returns to the root directory.
3. Rejected snapshots and I/O failures leave the live store untouched.
"""

from pathlib import Path

import pytest

from treefs.core.operations import FileSystem
from treefs.domain.errors import ErrorKind, FsError
from treefs.domain.node_models import NodeKind


def _snapshot_of(fs: FileSystem):
    return set(fs.walk("/")), fs.store.counter


def test_save_then_reload_round_trip(populated_fs: FileSystem, tmp_path: Path) -> None:
    populated_fs.rm("/home/notes.txt")
    populated_fs.mkdir("/home/my photos")
    populated_fs.cd("/home/docs")
    expected = _snapshot_of(populated_fs)

    target = str(tmp_path / "state.fs")
    populated_fs.save(target)

    restored = FileSystem()
    restored.reload(target)

    assert _snapshot_of(restored) == expected
    assert restored.pwd() == "/"


def test_reload_resets_cwd_on_same_instance(populated_fs: FileSystem) -> None:
    populated_fs.save()
    populated_fs.cd("/home/docs")

    populated_fs.reload()

    assert populated_fs.pwd() == "/"
    assert populated_fs.ls("/home") == ["docs", "notes.txt"]


def test_new_ids_continue_after_reload(populated_fs: FileSystem) -> None:
    counter = populated_fs.store.counter
    populated_fs.save()

    restored = FileSystem(snapshot_path=populated_fs.snapshot_path)
    restored.reload()
    new_id = restored.mkdir("/fresh")

    assert new_id == counter + 1


def test_default_snapshot_path_is_used(fs: FileSystem) -> None:
    fs.mkdir("/a")

    written = fs.save()

    assert written == fs.snapshot_path
    assert Path(written).read_text(encoding="utf-8").splitlines()[0] == "1 2"


def test_malformed_header_leaves_store_untouched(populated_fs: FileSystem, tmp_path: Path) -> None:
    bad = tmp_path / "bad.fs"
    bad.write_text("abc 2\n0 /\nD 0 0\n", encoding="utf-8")
    populated_fs.cd("/home")
    before = _snapshot_of(populated_fs)

    with pytest.raises(FsError) as exc:
        populated_fs.reload(str(bad))

    assert exc.value.kind is ErrorKind.MALFORMED_HEADER
    assert _snapshot_of(populated_fs) == before
    assert populated_fs.pwd() == "/home"


def test_late_failure_leaves_store_untouched(populated_fs: FileSystem, tmp_path: Path) -> None:
    bad = tmp_path / "dangling.fs"
    bad.write_text("9 2\n0 /\n1 a\nD 1 0\nD 0 0 1,9\n", encoding="utf-8")
    before = _snapshot_of(populated_fs)

    with pytest.raises(FsError) as exc:
        populated_fs.reload(str(bad))

    assert exc.value.kind is ErrorKind.DANGLING_CHILD_REFERENCE
    assert _snapshot_of(populated_fs) == before


def test_missing_file_is_io_failure(fs: FileSystem, tmp_path: Path) -> None:
    with pytest.raises(FsError) as exc:
        fs.reload(str(tmp_path / "nowhere.fs"))

    assert exc.value.kind is ErrorKind.IO_FAILURE


def test_unwritable_target_is_io_failure(fs: FileSystem, tmp_path: Path) -> None:
    with pytest.raises(FsError) as exc:
        fs.save(str(tmp_path))

    assert exc.value.kind is ErrorKind.IO_FAILURE


def test_removed_current_directory_survives_round_trip(fs: FileSystem, tmp_path: Path) -> None:
    fs.mkdir("/a")
    fs.cd("/a")
    fs.rmdir("/a")
    fs.mkdir("orphan")
    target = str(tmp_path / "state.fs")

    fs.save(target)
    restored = FileSystem()
    restored.reload(target)

    assert list(restored.walk("/")) == [("/", NodeKind.DIRECTORY)]
    assert len(restored.store) == 3


def test_self_parent_snapshot_is_rejected(fs: FileSystem, tmp_path: Path) -> None:
    bad = tmp_path / "cycle.fs"
    bad.write_text("1 2\n0 /\n1 a\nD 0 0 1\nD 1 1\n", encoding="utf-8")

    with pytest.raises(FsError) as exc:
        fs.reload(str(bad))

    assert exc.value.kind is ErrorKind.MALFORMED_BODY_LINE
    assert fs.ls("/") == []
