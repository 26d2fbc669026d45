from __future__ import annotations

"""
Namespace Node Data Models.

Defines the two node variants stored in the arena. Directories carry the
name-to-id child mapping; files carry nothing beyond their name and the id
of the directory that holds them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Union

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class NodeKind(Enum):
    """Discriminator used when a node kind has to travel without the node."""
    FILE = "F"
    DIRECTORY = "D"


@dataclass
class FileNode:
    """
    Represents a leaf entry (empty file) in the namespace.

    Attributes:
        name: Entry name inside the parent directory.
        parent: Identifier of the containing directory.
    """
    name: str
    parent: int

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE


@dataclass
class DirNode:
    """
    Represents a directory entry in the namespace.

    Attributes:
        name: Entry name inside the parent directory ("/" for the root).
        parent: Identifier of the containing directory (0 for the root).
        children: Mapping of child name to child identifier.
    """
    name: str
    parent: int
    children: Dict[str, int] = field(default_factory=dict)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.DIRECTORY


Node = Union[FileNode, DirNode]


def is_dir(node: Node) -> bool:
    return isinstance(node, DirNode)
