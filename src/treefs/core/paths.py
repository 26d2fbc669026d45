from __future__ import annotations

"""
Path Resolver.

Normalizes raw path strings into segments and walks them through the node
store. No segment is special: "." and ".." are ordinary child names.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from treefs.core.store import NodeStore
from treefs.domain.constants import PATH_SEPARATOR, ROOT_ID
from treefs.domain.errors import ErrorKind, FsError
from treefs.domain.node_models import DirNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# NORMALIZATION
# -----------------------------------------------------------------------------

def split_path(path: str) -> List[str]:
    """
    Break a raw path into its non-empty segments.

    Leading, trailing and repeated separators are ignored, so "/a//b/" and
    "a/b" yield the same segments.

    Args:
        path: Raw path as typed by the user.

    Returns:
        List[str]: Ordered path segments.
    """
    return [part for part in path.strip(PATH_SEPARATOR).split(PATH_SEPARATOR) if part]


def split_parent(path: str) -> Tuple[List[str], Optional[str]]:
    """
    Separate the parent segments from the final component.

    Returns:
        Tuple[List[str], Optional[str]]: Parent segments and the final name,
                                         or ([], None) when the path has no
                                         component at all.
    """
    segments = split_path(path)
    if not segments:
        return [], None
    return segments[:-1], segments[-1]


def start_id(path: str, cwd: int) -> int:
    """Pick the root for absolute paths and the current directory otherwise."""
    return ROOT_ID if path.startswith(PATH_SEPARATOR) else cwd

# -----------------------------------------------------------------------------
# RESOLUTION
# -----------------------------------------------------------------------------

def resolve(store: NodeStore, start: int, segments: Sequence[str]) -> int:
    """
    Walk segments from a starting node to the identifier they name.

    The final node may be a file; callers decide whether that is acceptable.

    Args:
        store: Node arena to read from.
        start: Identifier the walk begins at.
        segments: Path segments already normalized by split_path.

    Returns:
        int: Identifier of the node reached.

    Raises:
        FsError: NO_SUCH_ENTRY for an unknown name, NOT_A_DIRECTORY when a
                 file would have to contain a further segment.
    """
    current = start
    for segment in segments:
        node = store.get(current)
        if not isinstance(node, DirNode):
            raise FsError(ErrorKind.NOT_A_DIRECTORY, node.name)
        child = node.children.get(segment)
        if child is None:
            logger.debug(f"Resolver: '{segment}' not found under id {current}")
            raise FsError(ErrorKind.NO_SUCH_ENTRY, segment)
        current = child
    return current


def resolve_path(store: NodeStore, path: str) -> int:
    """Resolve a raw path string relative to the store's current directory."""
    return resolve(store, start_id(path, store.cwd), split_path(path))
