from __future__ import annotations

"""
Node Store.

Arena owning every node of the namespace, keyed by a monotonically
increasing identifier. Directories point down through their child mapping
and every node points up through its parent id, so the tree never holds
object cycles.
"""

import logging
from typing import Dict, ItemsView, Optional

from treefs.domain.constants import ROOT_ID, ROOT_NAME
from treefs.domain.errors import ErrorKind, FsError, InconsistentStoreError
from treefs.domain.node_models import DirNode, Node

logger = logging.getLogger(__name__)


class NodeStore:
    """
    Sole owner of the namespace nodes.

    Attributes:
        counter: Highest identifier ever handed out.
        cwd: Identifier of the current directory.
    """

    def __init__(self, nodes: Optional[Dict[int, Node]] = None, counter: int = ROOT_ID) -> None:
        if nodes is None:
            nodes = {ROOT_ID: DirNode(ROOT_NAME, ROOT_ID)}
        self._nodes: Dict[int, Node] = nodes
        self.counter = counter
        self.cwd = ROOT_ID

    @classmethod
    def empty(cls) -> NodeStore:
        """Create a store holding only the root directory."""
        return cls()

    # -------------------------------------------------------------------------
    # LOOKUP
    # -------------------------------------------------------------------------

    def get(self, node_id: int) -> Node:
        """
        Fetch a node by identifier.

        Raises:
            FsError: NO_SUCH_ENTRY if the identifier is unknown.
        """
        try:
            return self._nodes[node_id]
        except KeyError:
            raise FsError(ErrorKind.NO_SUCH_ENTRY, str(node_id)) from None

    def get_dir(self, node_id: int) -> DirNode:
        """
        Fetch a node that must be a directory.

        Raises:
            FsError: NO_SUCH_ENTRY or NOT_A_DIRECTORY.
        """
        node = self.get(node_id)
        if not isinstance(node, DirNode):
            raise FsError(ErrorKind.NOT_A_DIRECTORY, node.name)
        return node

    def cwd_dir(self) -> DirNode:
        """Return the current directory node, faulting if the invariant broke."""
        self.check_consistency()
        return self._nodes[self.cwd]  # type: ignore[return-value]

    def items(self) -> ItemsView[int, Node]:
        return self._nodes.items()

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    # -------------------------------------------------------------------------
    # MUTATION
    # -------------------------------------------------------------------------

    def next_id(self) -> int:
        """Advance the counter and return the fresh identifier."""
        self.counter += 1
        return self.counter

    def insert(self, node_id: int, node: Node) -> None:
        self._nodes[node_id] = node

    def replace(self, nodes: Dict[int, Node], counter: int) -> None:
        """
        Swap the whole node set in one step and return to the root.

        Args:
            nodes: Fully reconstructed node mapping.
            counter: Identifier counter read alongside the nodes.
        """
        self._nodes = nodes
        self.counter = counter
        self.cwd = ROOT_ID
        logger.debug(f"NodeStore: Replaced node set ({len(nodes)} nodes, counter={counter})")

    # -------------------------------------------------------------------------
    # INVARIANTS
    # -------------------------------------------------------------------------

    def check_consistency(self) -> None:
        """
        Verify that the current directory still names a directory.

        Raises:
            InconsistentStoreError: If a prior invariant breach is detected.
        """
        node = self._nodes.get(self.cwd)
        if not isinstance(node, DirNode):
            raise InconsistentStoreError(
                f"Current directory id {self.cwd} does not resolve to a directory"
            )
