from __future__ import annotations

"""
Unit tests for the Node Store.

Verifies:
1. A fresh store holds only the root directory.
2. Identifier allocation is strictly increasing.
3. Lookup failures map to the right error kinds.
4. Whole-set replacement resets the current directory.
"""

import pytest

from treefs.core.store import NodeStore
from treefs.domain.errors import ErrorKind, FsError, InconsistentStoreError
from treefs.domain.node_models import DirNode, FileNode


def test_empty_store_contains_only_root() -> None:
    store = NodeStore.empty()

    assert len(store) == 1
    root = store.get(0)
    assert isinstance(root, DirNode)
    assert root.name == "/"
    assert root.parent == 0
    assert root.children == {}
    assert store.counter == 0
    assert store.cwd == 0


def test_next_id_is_strictly_increasing() -> None:
    store = NodeStore.empty()

    ids = [store.next_id() for _ in range(3)]

    assert ids == [1, 2, 3]
    assert store.counter == 3


def test_get_unknown_id_raises_no_such_entry() -> None:
    store = NodeStore.empty()

    with pytest.raises(FsError) as exc:
        store.get(42)

    assert exc.value.kind is ErrorKind.NO_SUCH_ENTRY


def test_get_dir_on_file_raises_not_a_directory() -> None:
    store = NodeStore.empty()
    store.insert(store.next_id(), FileNode("a.txt", 0))

    with pytest.raises(FsError) as exc:
        store.get_dir(1)

    assert exc.value.kind is ErrorKind.NOT_A_DIRECTORY


def test_replace_swaps_nodes_and_resets_cwd() -> None:
    store = NodeStore.empty()
    store.insert(store.next_id(), DirNode("a", 0))
    store.get_dir(0).children["a"] = 1
    store.cwd = 1

    store.replace({0: DirNode("/", 0), 7: FileNode("x", 0)}, counter=9)

    assert store.cwd == 0
    assert store.counter == 9
    assert 7 in store
    assert 1 not in store


def test_check_consistency_detects_dangling_cwd() -> None:
    store = NodeStore.empty()
    store.cwd = 99

    with pytest.raises(InconsistentStoreError):
        store.check_consistency()
