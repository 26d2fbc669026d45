from __future__ import annotations

"""
Shell Command Data Models.

Typed commands produced by the shell parser and the result objects handed
back by the session, plus the factories that build those results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from treefs.domain.errors import ErrorKind

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

class CommandKind(Enum):
    """Enumeration of the verbs understood by the shell."""
    PWD = "pwd"
    QUIT = "quit"
    MKDIR = "mkdir"
    CREAT = "creat"
    RMDIR = "rmdir"
    RM = "rm"
    LS = "ls"
    CD = "cd"
    SAVE = "save"
    RELOAD = "reload"
    TREE = "tree"
    HELP = "help"
    NOOP = ""


@dataclass(frozen=True)
class Command:
    """
    A parsed shell command.

    Attributes:
        kind: The verb.
        arg: The single argument, or None when it was omitted. An empty
             string is a supplied argument, distinct from None.
    """
    kind: CommandKind
    arg: Optional[str] = None

# -----------------------------------------------------------------------------
# RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of a single command.

    Attributes:
        ok: Flag indicating success or failure.
        output: Lines the command printed on success.
        error: Rendered failure message, empty on success.
        error_kind: Failure category, None on success.
        quit: True when the session should end after this command.
    """
    ok: bool
    output: List[str] = field(default_factory=list)
    error: str = ""
    error_kind: Optional[ErrorKind] = None
    quit: bool = False


def create_success_result(output: Optional[List[str]] = None, quit: bool = False) -> CommandResult:
    """Build a successful command result."""
    return CommandResult(ok=True, output=output or [], quit=quit)


def create_error_result(
        error: str,
        kind: Optional[ErrorKind] = None,
        output: Optional[List[str]] = None,
        quit: bool = False,
) -> CommandResult:
    """
    Build a failed command result.

    Args:
        error: Rendered message for the user.
        kind: Failure category if it came from an FsError.
        output: Lines produced before the failure (e.g. "Saving...").
        quit: Whether the session still ends.
    """
    return CommandResult(ok=False, output=output or [], error=error, error_kind=kind, quit=quit)
