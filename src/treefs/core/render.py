from __future__ import annotations

"""
Tree Renderer.

Converts a directory subtree of the node store into ASCII lines using the
usual connectors (├──, └──).
"""

from typing import List

from treefs.core.store import NodeStore
from treefs.domain.node_models import DirNode


def render_tree(store: NodeStore, node_id: int, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append one line per descendant of a directory.

    Args:
        store: Node arena to read from.
        node_id: Directory whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    node = store.get(node_id)
    if not isinstance(node, DirNode):
        return

    entries = sorted(node.children)
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        child_id = node.children[entry]
        child = store.get(child_id)

        if isinstance(child, DirNode):
            lines.append(f"{prefix}{connector}{entry}/")
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree(store, child_id, lines, prefix=new_prefix)
            continue

        lines.append(f"{prefix}{connector}{entry}")
