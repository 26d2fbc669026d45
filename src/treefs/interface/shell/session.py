from __future__ import annotations

"""
Shell Session.

Dispatches typed commands to the FileSystem and converts every FsError into
a failed CommandResult at the command boundary. The same session serves the
interactive prompt, scripted input and tests.
"""

import logging
import sys
from typing import Callable, Dict, Iterable, List, Optional, TextIO

from treefs.core.operations import FileSystem
from treefs.core.paths import resolve_path
from treefs.core.render import render_tree
from treefs.domain.command_models import (
    Command,
    CommandKind,
    CommandResult,
    create_error_result,
    create_success_result,
)
from treefs.domain.constants import DEFAULT_PROMPT
from treefs.domain.errors import ErrorKind, FsError
from treefs.interface.shell.parser import REQUIRED_ARG_KINDS, parse_command
from treefs.utils.i18n import i18n

logger = logging.getLogger(__name__)

# Failure kinds whose detail is worth showing to the user
_DETAILED_KINDS = {
    ErrorKind.MALFORMED_HEADER,
    ErrorKind.MALFORMED_INDEX_LINE,
    ErrorKind.MALFORMED_BODY_LINE,
    ErrorKind.DANGLING_CHILD_REFERENCE,
    ErrorKind.DANGLING_SELF_REFERENCE,
    ErrorKind.IO_FAILURE,
}

_HELP_ORDER = ["pwd", "ls", "cd", "mkdir", "creat", "rmdir", "rm", "tree", "save", "reload", "quit"]


def describe_error(err: FsError) -> str:
    """Render the human readable reason for a failure."""
    reason = i18n.t(f"errors.{err.kind.value}")
    if err.detail and err.kind in _DETAILED_KINDS:
        return f"{reason} ({err.detail})"
    return reason


class Session:
    """
    Command dispatcher bound to one FileSystem.

    Attributes:
        fs: The namespace the commands operate on.
        autosave_on_quit: Whether quit writes the default snapshot.
        prompt: Prompt string for interactive use.
        finished: Set once a quit command has been executed.
    """

    def __init__(
            self,
            fs: FileSystem,
            autosave_on_quit: bool = True,
            prompt: str = DEFAULT_PROMPT,
    ) -> None:
        self.fs = fs
        self.autosave_on_quit = autosave_on_quit
        self.prompt = prompt
        self.finished = False
        self._handlers: Dict[CommandKind, Callable[[Optional[str]], List[str]]] = {
            CommandKind.PWD: lambda _: [self.fs.pwd()],
            CommandKind.MKDIR: lambda arg: self._silent(self.fs.mkdir, arg),
            CommandKind.CREAT: lambda arg: self._silent(self.fs.creat, arg),
            CommandKind.RMDIR: lambda arg: self._silent(self.fs.rmdir, arg),
            CommandKind.RM: lambda arg: self._silent(self.fs.rm, arg),
            CommandKind.LS: lambda arg: self.fs.ls(arg),
            CommandKind.CD: lambda arg: self._silent(self.fs.cd, arg),
            CommandKind.SAVE: lambda arg: self._silent(self.fs.save, arg),
            CommandKind.RELOAD: lambda arg: self._silent(self.fs.reload, arg),
            CommandKind.TREE: self._tree,
            CommandKind.HELP: lambda _: self._help(),
            CommandKind.NOOP: lambda _: [],
        }

    # -------------------------------------------------------------------------
    # DISPATCH
    # -------------------------------------------------------------------------

    def execute(self, command: Command) -> CommandResult:
        """
        Run one typed command.

        Args:
            command: Parsed command.

        Returns:
            CommandResult: Success with output lines, or failure with a
                           rendered message.
        """
        if command.kind is CommandKind.QUIT:
            return self._quit()

        try:
            if command.kind in REQUIRED_ARG_KINDS and command.arg is None:
                raise FsError(ErrorKind.MISSING_OPERAND, command.kind.value)
            output = self._handlers[command.kind](command.arg)
        except FsError as e:
            logger.debug(f"Session: '{command.kind.value}' failed with {e.kind.name}")
            message = i18n.t(
                f"commands.{command.kind.value}",
                path=command.arg or "",
                reason=describe_error(e),
            )
            return create_error_result(message, e.kind)

        return create_success_result(output)

    def run_line(self, line: str) -> CommandResult:
        """Parse and execute a single raw input line."""
        try:
            command = parse_command(line)
        except FsError as e:
            return create_error_result(i18n.t("commands.generic", reason=describe_error(e)), e.kind)
        return self.execute(command)

    def run(
            self,
            lines: Iterable[str],
            out: Optional[TextIO] = None,
            err: Optional[TextIO] = None,
            prompt: Optional[str] = None,
    ) -> int:
        """
        Execute lines until they run out or a quit command is seen.

        Args:
            lines: Source of raw command lines.
            out: Stream for command output (default stdout).
            err: Stream for failure messages (default stderr).
            prompt: Written before each line when given.

        Returns:
            int: Number of commands that failed.
        """
        out = out or sys.stdout
        err = err or sys.stderr
        failures = 0

        self._write_prompt(out, prompt)
        for line in lines:
            result = self.run_line(line)
            self.emit(result, out, err)
            if not result.ok:
                failures += 1
            if result.quit:
                break
            self._write_prompt(out, prompt)

        return failures

    def interact(self, stdin: Optional[TextIO] = None, out: Optional[TextIO] = None,
                 err: Optional[TextIO] = None) -> int:
        """
        Prompt-driven loop. End of input behaves like quit.

        Returns:
            int: Number of commands that failed.
        """
        out = out or sys.stdout
        failures = self.run(stdin or sys.stdin, out, err, prompt=self.prompt)
        if not self.finished:
            out.write("\n")
            result = self.execute(Command(CommandKind.QUIT))
            self.emit(result, out, err or sys.stderr)
            failures += 0 if result.ok else 1
        return failures

    @staticmethod
    def emit(result: CommandResult, out: TextIO, err: TextIO) -> None:
        for line in result.output:
            out.write(line + "\n")
        if result.error:
            err.write(result.error + "\n")
        out.flush()

    # -------------------------------------------------------------------------
    # COMMAND HANDLERS
    # -------------------------------------------------------------------------

    def _quit(self) -> CommandResult:
        self.finished = True
        if not self.autosave_on_quit:
            return create_success_result(quit=True)

        output = [i18n.t("app.saving")]
        try:
            self.fs.save()
        except FsError as e:
            logger.warning(f"Session: Autosave on quit failed: {e}")
            message = i18n.t("app.quit_without_saving", reason=describe_error(e))
            return create_error_result(message, e.kind, output=output, quit=True)
        return create_success_result(output, quit=True)

    def _tree(self, arg: Optional[str]) -> List[str]:
        top = self.fs.store.cwd if arg is None else resolve_path(self.fs.store, arg)
        self.fs.store.get_dir(top)
        lines = [self.fs.path_of(top)]
        render_tree(self.fs.store, top, lines)
        return lines

    def _help(self) -> List[str]:
        lines = [i18n.t("help.header")]
        lines.extend("  " + i18n.t(f"help.{verb}", snapshot=self.fs.snapshot_path) for verb in _HELP_ORDER)
        return lines

    @staticmethod
    def _silent(operation: Callable[[Optional[str]], object], arg: Optional[str]) -> List[str]:
        operation(arg)
        return []

    @staticmethod
    def _write_prompt(out: TextIO, prompt: Optional[str]) -> None:
        if prompt:
            out.write(prompt)
            out.flush()
