from __future__ import annotations

"""
Shell Command Parser.

Turns one input line into a typed Command. Tokens are whitespace separated;
the first is the verb, the second its argument, and anything after that is
ignored.
"""

from typing import Dict

from treefs.domain.command_models import Command, CommandKind
from treefs.domain.constants import PATH_SEPARATOR
from treefs.domain.errors import ErrorKind, FsError

# Verbs whose argument is mandatory
REQUIRED_ARG_KINDS = {CommandKind.MKDIR, CommandKind.CREAT, CommandKind.RMDIR, CommandKind.RM}

_VERBS: Dict[str, CommandKind] = {
    kind.value: kind for kind in CommandKind if kind is not CommandKind.NOOP
}


def parse_command(line: str) -> Command:
    """
    Parse a raw command line.

    Args:
        line: Text as read from the terminal or a script.

    Returns:
        Command: The typed command. A blank line yields NOOP.

    Raises:
        FsError: NOT_IMPLEMENTED for an unknown verb, MISSING_OPERAND when a
                 required argument is absent, CANNOT_REMOVE_ROOT for "rmdir /".
    """
    tokens = line.split()
    if not tokens:
        return Command(CommandKind.NOOP)

    kind = _VERBS.get(tokens[0])
    if kind is None:
        raise FsError(ErrorKind.NOT_IMPLEMENTED, tokens[0])

    arg = tokens[1] if len(tokens) > 1 else None

    if kind in REQUIRED_ARG_KINDS and arg is None:
        raise FsError(ErrorKind.MISSING_OPERAND, kind.value)
    if kind is CommandKind.RMDIR and arg == PATH_SEPARATOR:
        raise FsError(ErrorKind.CANNOT_REMOVE_ROOT)

    return Command(kind, arg)
