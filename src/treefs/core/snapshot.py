from __future__ import annotations

"""
Snapshot Codec.

Serializes the node store to a line-oriented text file and rebuilds an
equivalent node set from one. Layout:

    <counter> <node_count>
    <id> <name>                      (node_count index lines)
    D <id> <parent> <c1,c2,...>      (node_count body lines)
    D <id> <parent>                  directory without children
    F <id> <parent>

Names live only on index lines so they may contain spaces; body lines stay
purely numeric. Reconstruction happens into a scratch mapping and is only
handed back once every line has been validated.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from treefs.core.store import NodeStore
from treefs.domain.constants import (
    CHILD_SEPARATOR,
    DIR_TAG,
    FILE_TAG,
    ROOT_ID,
    SNAPSHOT_ENCODING,
)
from treefs.domain.errors import ErrorKind, FsError
from treefs.domain.node_models import DirNode, FileNode, Node

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SnapshotState:
    """
    Node set reconstructed from a snapshot, ready to be swapped in.

    Attributes:
        counter: Identifier counter from the header.
        nodes: Rebuilt id-to-node mapping.
    """
    counter: int
    nodes: Dict[int, Node]

# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def dump_lines(store: NodeStore) -> Iterator[str]:
    """
    Produce the snapshot lines for a store, without line terminators.

    Nodes are emitted in identifier order so equal stores give equal files.
    """
    ordered = sorted(store.items())

    yield f"{store.counter} {len(ordered)}"

    for node_id, node in ordered:
        yield f"{node_id} {node.name}"

    for node_id, node in ordered:
        if isinstance(node, DirNode):
            if node.children:
                children = CHILD_SEPARATOR.join(str(c) for c in node.children.values())
                yield f"{DIR_TAG} {node_id} {node.parent} {children}"
            else:
                yield f"{DIR_TAG} {node_id} {node.parent}"
        else:
            yield f"{FILE_TAG} {node_id} {node.parent}"


def save_snapshot(store: NodeStore, path: str) -> None:
    """
    Write the store to a snapshot file. Best effort, not atomic.

    Raises:
        FsError: IO_FAILURE if the file cannot be opened or written.
    """
    try:
        with open(path, "w", encoding=SNAPSHOT_ENCODING, newline="\n") as f:
            for line in dump_lines(store):
                f.write(line + "\n")
    except OSError as e:
        logger.error(f"Snapshot: Failed to write '{path}': {e}")
        raise FsError(ErrorKind.IO_FAILURE, str(e)) from e

    logger.info(f"Snapshot: Saved {len(store)} nodes to '{path}'")

# -----------------------------------------------------------------------------
# DESERIALIZATION
# -----------------------------------------------------------------------------

def parse_lines(lines: Iterable[str]) -> SnapshotState:
    """
    Rebuild a node set from snapshot lines.

    Args:
        lines: Snapshot lines, with or without trailing newlines.

    Returns:
        SnapshotState: The reconstructed counter and node mapping.

    Raises:
        FsError: MALFORMED_HEADER, MALFORMED_INDEX_LINE, MALFORMED_BODY_LINE,
                 DANGLING_CHILD_REFERENCE, DANGLING_SELF_REFERENCE or
                 MISSING_ROOT.
    """
    it = iter(lines)

    # 1. Header
    header = next(it, None)
    tokens = header.split() if header is not None else []
    if len(tokens) != 2 or not all(_is_id(t) for t in tokens):
        raise FsError(ErrorKind.MALFORMED_HEADER, (header or "").strip())
    counter, total = int(tokens[0]), int(tokens[1])

    # 2. Index table
    index: Dict[int, str] = {}
    for lineno in range(2, total + 2):
        raw = next(it, None)
        index_id, name = _parse_index_line(raw, lineno)
        index[index_id] = name

    # 3. Body
    nodes: Dict[int, Node] = {}
    line_of: Dict[int, int] = {}
    for lineno in range(total + 2, 2 * total + 2):
        raw = next(it, None)
        node_id, node = _parse_body_line(raw, lineno, index)
        nodes[node_id] = node
        line_of[node_id] = lineno

    if not isinstance(nodes.get(ROOT_ID), DirNode):
        raise FsError(ErrorKind.MISSING_ROOT)
    if nodes and counter < max(nodes):
        raise FsError(ErrorKind.MALFORMED_HEADER, f"counter {counter} below highest id {max(nodes)}")

    # 4. Links
    _check_links(nodes, line_of)

    return SnapshotState(counter=counter, nodes=nodes)


def load_snapshot(path: str) -> SnapshotState:
    """
    Read and rebuild a snapshot file.

    Raises:
        FsError: IO_FAILURE on open/read errors, or any parse failure.
    """
    try:
        with open(path, "r", encoding=SNAPSHOT_ENCODING) as f:
            state = parse_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Snapshot: Failed to read '{path}': {e}")
        raise FsError(ErrorKind.IO_FAILURE, str(e)) from e
    except FsError as e:
        logger.warning(f"Snapshot: Rejected '{path}': {e}")
        raise

    logger.info(f"Snapshot: Loaded {len(state.nodes)} nodes from '{path}'")
    return state

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_id(token: str) -> bool:
    return token.isascii() and token.isdigit()


def _parse_index_line(raw: Optional[str], lineno: int) -> Tuple[int, str]:
    """Split an index line on its first space into (id, name)."""
    if raw is None:
        raise FsError(ErrorKind.MALFORMED_INDEX_LINE, f"line {lineno}: unexpected end of file")

    parts = raw.rstrip("\r\n").split(" ", 1)
    if len(parts) != 2 or not _is_id(parts[0]) or not parts[1]:
        raise FsError(ErrorKind.MALFORMED_INDEX_LINE, f"line {lineno}")
    return int(parts[0]), parts[1]


def _parse_body_line(raw: Optional[str], lineno: int, index: Dict[int, str]) -> Tuple[int, Node]:
    """Decode one D/F structural line, resolving names through the index."""
    if raw is None:
        raise FsError(ErrorKind.MALFORMED_BODY_LINE, f"line {lineno}: unexpected end of file")

    tokens = raw.split()
    shape_ok = (
        (len(tokens) in (3, 4) and tokens[0] == DIR_TAG)
        or (len(tokens) == 3 and tokens[0] == FILE_TAG)
    )
    if not shape_ok or not _is_id(tokens[1]) or not _is_id(tokens[2]):
        raise FsError(ErrorKind.MALFORMED_BODY_LINE, f"line {lineno}")

    node_id, parent = int(tokens[1]), int(tokens[2])
    name = index.get(node_id)
    if name is None:
        raise FsError(ErrorKind.DANGLING_SELF_REFERENCE, f"line {lineno}: id {node_id}")

    if tokens[0] == FILE_TAG:
        return node_id, FileNode(name, parent)

    children: Dict[str, int] = {}
    if len(tokens) == 4:
        for token in tokens[3].split(CHILD_SEPARATOR):
            if not _is_id(token):
                raise FsError(ErrorKind.MALFORMED_BODY_LINE, f"line {lineno}")
            child_id = int(token)
            child_name = index.get(child_id)
            if child_name is None:
                raise FsError(ErrorKind.DANGLING_CHILD_REFERENCE, f"line {lineno}: id {child_id}")
            if child_name in children:
                raise FsError(ErrorKind.MALFORMED_BODY_LINE, f"line {lineno}: duplicate name '{child_name}'")
            children[child_name] = child_id

    return node_id, DirNode(name, parent, children)


def _check_links(nodes: Dict[int, Node], line_of: Dict[int, int]) -> None:
    """
    Verify that parent links and child lists describe a tree rooted at ROOT_ID.

    Every listed child must point back at the directory listing it, and every
    parent chain must reach the root through directories without looping.
    Nodes no directory lists are kept: they are the removed entries a saved
    store still carries.

    Raises:
        FsError: MALFORMED_BODY_LINE naming the offending line, or
                 DANGLING_CHILD_REFERENCE for a child without a body line.
    """
    root = nodes[ROOT_ID]
    if root.parent != ROOT_ID:
        raise FsError(ErrorKind.MALFORMED_BODY_LINE, f"line {line_of[ROOT_ID]}: root parent must be {ROOT_ID}")

    for node_id, node in nodes.items():
        if not isinstance(node, DirNode):
            continue
        for child_id in node.children.values():
            if child_id not in nodes:
                raise FsError(ErrorKind.DANGLING_CHILD_REFERENCE, f"line {line_of[node_id]}: id {child_id}")
            if child_id == ROOT_ID or nodes[child_id].parent != node_id:
                raise FsError(
                    ErrorKind.MALFORMED_BODY_LINE,
                    f"line {line_of[node_id]}: child {child_id} does not point back to {node_id}",
                )

    reaches_root = {ROOT_ID}
    for node_id in nodes:
        chain: List[int] = []
        on_chain = set()
        current = node_id
        while current not in reaches_root:
            if current in on_chain:
                raise FsError(ErrorKind.MALFORMED_BODY_LINE, f"line {line_of[node_id]}: parent cycle")
            chain.append(current)
            on_chain.add(current)
            parent_id = nodes[current].parent
            if not isinstance(nodes.get(parent_id), DirNode):
                raise FsError(
                    ErrorKind.MALFORMED_BODY_LINE,
                    f"line {line_of[current]}: parent {parent_id} is not a directory",
                )
            current = parent_id
        reaches_root.update(chain)
