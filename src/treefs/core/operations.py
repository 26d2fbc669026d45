from __future__ import annotations

"""
Tree Operations.

The mutation and navigation surface of the namespace. Each operation
normalizes its path, resolves it through the store and validates every
precondition before touching any node, so a failed call leaves the store
exactly as it found it.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from treefs.core import snapshot
from treefs.core.paths import resolve, resolve_path, split_parent, start_id
from treefs.core.store import NodeStore
from treefs.domain.constants import DEFAULT_SNAPSHOT_FILE, PATH_SEPARATOR, ROOT_ID
from treefs.domain.errors import ErrorKind, FsError
from treefs.domain.node_models import DirNode, FileNode, Node, NodeKind

logger = logging.getLogger(__name__)


class FileSystem:
    """
    In-memory namespace driven by path strings.

    Attributes:
        store: The node arena backing this namespace.
        snapshot_path: File used by save/reload when no path is given.
        sort_listing: Whether ls returns names in sorted order.
    """

    def __init__(
            self,
            store: Optional[NodeStore] = None,
            snapshot_path: str = DEFAULT_SNAPSHOT_FILE,
            sort_listing: bool = True,
    ) -> None:
        self.store = store if store is not None else NodeStore.empty()
        self.snapshot_path = snapshot_path
        self.sort_listing = sort_listing

    # -------------------------------------------------------------------------
    # CREATION
    # -------------------------------------------------------------------------

    def mkdir(self, path: str) -> int:
        """
        Create an empty directory.

        Returns:
            int: Identifier of the new directory.

        Raises:
            FsError: MISSING_OPERAND, NO_SUCH_ENTRY, NOT_A_DIRECTORY or
                     ALREADY_EXISTS.
        """
        parent_id, name = self._creation_target(path)
        node_id = self._attach(parent_id, name, DirNode(name, parent_id))
        logger.debug(f"mkdir: Created directory '{name}' (id={node_id}) under id {parent_id}")
        return node_id

    def creat(self, path: str) -> int:
        """
        Create an empty file.

        Returns:
            int: Identifier of the new file.
        """
        parent_id, name = self._creation_target(path)
        node_id = self._attach(parent_id, name, FileNode(name, parent_id))
        logger.debug(f"creat: Created file '{name}' (id={node_id}) under id {parent_id}")
        return node_id

    # -------------------------------------------------------------------------
    # REMOVAL
    # -------------------------------------------------------------------------

    def rmdir(self, path: str) -> None:
        """
        Remove an empty directory.

        Raises:
            FsError: CANNOT_REMOVE_ROOT, NO_SUCH_ENTRY, NOT_A_DIRECTORY
                     or DIRECTORY_NOT_EMPTY.
        """
        target_id = resolve_path(self.store, path)
        if target_id == ROOT_ID:
            raise FsError(ErrorKind.CANNOT_REMOVE_ROOT)

        node = self.store.get(target_id)
        if not isinstance(node, DirNode):
            raise FsError(ErrorKind.NOT_A_DIRECTORY, node.name)
        if node.children:
            raise FsError(ErrorKind.DIRECTORY_NOT_EMPTY, node.name)

        self._detach(target_id, node)
        logger.debug(f"rmdir: Removed directory '{node.name}' (id={target_id})")

    def rm(self, path: str) -> None:
        """
        Remove a file.

        Raises:
            FsError: NO_SUCH_ENTRY, NOT_A_DIRECTORY or NOT_A_FILE.
        """
        target_id = resolve_path(self.store, path)
        node = self.store.get(target_id)
        if isinstance(node, DirNode):
            raise FsError(ErrorKind.NOT_A_FILE, node.name)

        self._detach(target_id, node)
        logger.debug(f"rm: Removed file '{node.name}' (id={target_id})")

    # -------------------------------------------------------------------------
    # NAVIGATION
    # -------------------------------------------------------------------------

    def ls(self, path: Optional[str] = None) -> List[str]:
        """
        List the child names of a directory.

        Args:
            path: Directory to list. None lists the current directory.

        Returns:
            List[str]: Child names, sorted when sort_listing is enabled.
        """
        if path is None:
            directory = self.store.cwd_dir()
        else:
            directory = self.store.get_dir(resolve_path(self.store, path))

        names = list(directory.children)
        return sorted(names) if self.sort_listing else names

    def cd(self, path: Optional[str] = None) -> None:
        """
        Change the current directory. None returns to the root.

        Raises:
            FsError: NO_SUCH_ENTRY or NOT_A_DIRECTORY.
        """
        if path is None:
            self.store.cwd = ROOT_ID
            return

        target_id = resolve_path(self.store, path)
        self.store.get_dir(target_id)
        self.store.cwd = target_id

    def pwd(self) -> str:
        """Return the absolute path of the current directory."""
        self.store.check_consistency()
        return self.path_of(self.store.cwd)

    def path_of(self, node_id: int) -> str:
        """Build the absolute path of a node by following parent links."""
        names: List[str] = []
        current = node_id
        while current != ROOT_ID:
            node = self.store.get(current)
            names.append(node.name)
            current = node.parent
        return PATH_SEPARATOR + PATH_SEPARATOR.join(reversed(names))

    def walk(self, path: Optional[str] = None) -> Iterator[Tuple[str, NodeKind]]:
        """
        Yield every reachable (absolute path, kind) pair below a directory.

        The starting directory itself is yielded first. Children are visited
        in name order.
        """
        top = self.store.cwd if path is None else resolve_path(self.store, path)
        pending = [top]
        while pending:
            node_id = pending.pop()
            node = self.store.get(node_id)
            yield self.path_of(node_id), node.kind
            if isinstance(node, DirNode):
                pending.extend(node.children[name] for name in sorted(node.children, reverse=True))

    # -------------------------------------------------------------------------
    # PERSISTENCE
    # -------------------------------------------------------------------------

    def save(self, filepath: Optional[str] = None) -> str:
        """
        Write a snapshot of the whole store.

        Returns:
            str: The path written to.
        """
        target = filepath or self.snapshot_path
        snapshot.save_snapshot(self.store, target)
        return target

    def reload(self, filepath: Optional[str] = None) -> str:
        """
        Replace the store contents with a snapshot read from disk.

        The store is untouched unless the whole snapshot parses.

        Returns:
            str: The path read from.
        """
        source = filepath or self.snapshot_path
        state = snapshot.load_snapshot(source)
        self.store.replace(state.nodes, state.counter)
        return source

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    def _creation_target(self, path: str) -> Tuple[int, str]:
        """Resolve the parent directory of a path that is about to be created."""
        parent_segments, name = split_parent(path)
        if name is None:
            raise FsError(ErrorKind.MISSING_OPERAND)

        parent_id = resolve(self.store, start_id(path, self.store.cwd), parent_segments)
        parent = self.store.get_dir(parent_id)
        if name in parent.children:
            raise FsError(ErrorKind.ALREADY_EXISTS, name)
        return parent_id, name

    def _attach(self, parent_id: int, name: str, node: Node) -> int:
        node_id = self.store.next_id()
        self.store.insert(node_id, node)
        self.store.get_dir(parent_id).children[name] = node_id
        return node_id

    def _detach(self, node_id: int, node: Node) -> None:
        # The node stays in the arena, unreachable.
        parent = self.store.get_dir(node.parent)
        parent.children.pop(node.name, None)
