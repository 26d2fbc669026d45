from __future__ import annotations

"""
Error Taxonomy.

Every recoverable failure raised by the core carries exactly one ErrorKind.
The shell turns these into messages at the command boundary; nothing in the
core prints.
"""

from enum import Enum


class ErrorKind(Enum):
    """Enumeration of recoverable failure kinds."""
    NO_SUCH_ENTRY = "no_such_entry"
    NOT_A_DIRECTORY = "not_a_directory"
    NOT_A_FILE = "not_a_file"
    ALREADY_EXISTS = "already_exists"
    DIRECTORY_NOT_EMPTY = "directory_not_empty"
    MISSING_OPERAND = "missing_operand"
    CANNOT_REMOVE_ROOT = "cannot_remove_root"
    NOT_IMPLEMENTED = "not_implemented"

    MALFORMED_HEADER = "malformed_header"
    MALFORMED_INDEX_LINE = "malformed_index_line"
    MALFORMED_BODY_LINE = "malformed_body_line"
    DANGLING_CHILD_REFERENCE = "dangling_child_reference"
    DANGLING_SELF_REFERENCE = "dangling_self_reference"
    MISSING_ROOT = "missing_root"
    IO_FAILURE = "io_failure"


class FsError(Exception):
    """
    Recoverable namespace or snapshot failure.

    Attributes:
        kind: The failure category.
        detail: Optional context (offending path segment, line number, OS error).
    """

    def __init__(self, kind: ErrorKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


class InconsistentStoreError(RuntimeError):
    """Raised when a store invariant no longer holds. Not recoverable."""
