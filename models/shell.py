"""Simulated shell interpreter.

The interpreter accepts one command line at a time. A line is split on
whitespace into a command and its arguments; there is no quoting, escaping,
piping or redirection. Each command handler receives the current filesystem
and working directory and returns a CommandResult describing the output and
the new filesystem/working directory. The interpreter itself holds no state.

Scripts are never executed. ``python`` and ``node`` only check that the named
file exists in the working directory and has content.
"""

import logging
from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models.filesystem import HOME_DIRECTORY, FileSystemState

logger = logging.getLogger(__name__)

CommandStatus = Literal["ok", "usage_error", "not_found"]

EMPTY_LISTING_FALLBACK = "outputs/"
LISTING_SEPARATOR = "  "

PYTHON_BANNER = "Python 3.11.0\n>>> (interactive mode not supported, use: python script.py)"
NODE_BANNER = "Welcome to Node.js v20.0.0\n> (interactive mode not supported, use: node script.js)"
SIMULATED_RUN = "Executing {filename}...\n[Simulated output]\nScript completed successfully"

HELP_TEXT = "Available commands:\n  ls, pwd, cat, python, node, mkdir, cd, clear, help"


class CommandResult(BaseModel):
    """Outcome of interpreting one command line.

    Args:
        command: The command word (first token).
        args: Remaining tokens.
        output: Text to show for this command (may be empty).
        filesystem: Filesystem after the command.
        cwd: Working directory after the command.
        clear_screen: True when the transcript should be reset.
        status: Whether the command succeeded or hit a usage/not-found error.
    """

    model_config = ConfigDict(frozen=True)

    command: str = Field(description="The command word")
    args: list[str] = Field(default_factory=list, description="Remaining tokens")
    output: str = Field(default="", description="Text output of the command")
    filesystem: FileSystemState = Field(description="Filesystem after the command")
    cwd: str = Field(description="Working directory after the command")
    clear_screen: bool = Field(default=False, description="Reset the transcript")
    status: CommandStatus = Field(default="ok", description="Outcome kind")


CommandHandler = Callable[[list[str], FileSystemState, str], CommandResult]


class ShellInterpreter:
    """Parses command lines and dispatches them to command handlers.

    Args:
        home_directory: Directory that ``cd`` and ``cd ~`` return to.
    """

    def __init__(self, home_directory: str = HOME_DIRECTORY) -> None:
        self.home_directory = home_directory
        self.commands: dict[str, CommandHandler] = {
            "ls": self._ls,
            "pwd": self._pwd,
            "cat": self._cat,
            "python": self._python,
            "python3": self._python,
            "node": self._node,
            "mkdir": self._mkdir,
            "cd": self._cd,
            "clear": self._clear,
            "help": self._help,
        }

    @staticmethod
    def parse(line: str) -> list[str]:
        """Split a command line into tokens on whitespace."""
        return line.split()

    def execute(self, line: str, filesystem: FileSystemState, cwd: str) -> CommandResult:
        """Interpret one command line.

        Never raises for user mistakes: missing operands, unknown commands
        and absent files are all reported as output text.

        Args:
            line: Raw command line.
            filesystem: Current filesystem.
            cwd: Current working directory.

        Returns:
            The command's result. A blank line yields an empty result that
            leaves everything unchanged.
        """
        tokens = self.parse(line)
        if not tokens:
            return CommandResult(command="", filesystem=filesystem, cwd=cwd)

        command, args = tokens[0], tokens[1:]
        handler = self.commands.get(command)
        logger.debug("Dispatching %r with args %r in %s", command, args, cwd)
        if handler is None:
            return CommandResult(
                command=command,
                args=args,
                output=f"{command}: command not found",
                filesystem=filesystem,
                cwd=cwd,
                status="usage_error",
            )
        return handler(args, filesystem, cwd).model_copy(update={"command": command})

    # Command handlers

    def _ls(self, args: list[str], filesystem: FileSystemState, cwd: str) -> CommandResult:
        entries = filesystem.list_entries(cwd)
        output = LISTING_SEPARATOR.join(entries) if entries else EMPTY_LISTING_FALLBACK
        return CommandResult(command="ls", args=args, output=output, filesystem=filesystem, cwd=cwd)

    def _pwd(self, args: list[str], filesystem: FileSystemState, cwd: str) -> CommandResult:
        return CommandResult(command="pwd", args=args, output=cwd, filesystem=filesystem, cwd=cwd)

    def _cat(self, args: list[str], filesystem: FileSystemState, cwd: str) -> CommandResult:
        if not args:
            return CommandResult(
                command="cat",
                output="cat: missing file operand",
                filesystem=filesystem,
                cwd=cwd,
                status="usage_error",
            )
        filename = args[0]
        content = filesystem.read_file(cwd, filename)
        if content is None:
            return CommandResult(
                command="cat",
                args=args,
                output=f"cat: {filename}: No such file or directory",
                filesystem=filesystem,
                cwd=cwd,
                status="not_found",
            )
        return CommandResult(command="cat", args=args, output=content, filesystem=filesystem, cwd=cwd)

    def _run_script(
        self,
        args: list[str],
        filesystem: FileSystemState,
        cwd: str,
        command: str,
        banner: str,
        missing: str,
    ) -> CommandResult:
        if not args:
            return CommandResult(command=command, output=banner, filesystem=filesystem, cwd=cwd)
        filename = args[0]
        if not filesystem.read_file(cwd, filename):
            return CommandResult(
                command=command,
                args=args,
                output=missing.format(filename=filename),
                filesystem=filesystem,
                cwd=cwd,
                status="not_found",
            )
        return CommandResult(
            command=command,
            args=args,
            output=SIMULATED_RUN.format(filename=filename),
            filesystem=filesystem,
            cwd=cwd,
        )

    def _python(self, args: list[str], filesystem: FileSystemState, cwd: str) -> CommandResult:
        return self._run_script(
            args,
            filesystem,
            cwd,
            command="python",
            banner=PYTHON_BANNER,
            missing="python: can't open file '{filename}': [Errno 2] No such file or directory",
        )

    def _node(self, args: list[str], filesystem: FileSystemState, cwd: str) -> CommandResult:
        return self._run_script(
            args,
            filesystem,
            cwd,
            command="node",
            banner=NODE_BANNER,
            missing="node: cannot open file '{filename}'",
        )

    def _mkdir(self, args: list[str], filesystem: FileSystemState, cwd: str) -> CommandResult:
        if not args:
            return CommandResult(
                command="mkdir",
                output="mkdir: missing operand",
                filesystem=filesystem,
                cwd=cwd,
                status="usage_error",
            )
        return CommandResult(
            command="mkdir",
            args=args,
            filesystem=filesystem.make_directory(cwd, args[0]),
            cwd=cwd,
        )

    def _cd(self, args: list[str], filesystem: FileSystemState, cwd: str) -> CommandResult:
        if not args or args[0] == "~":
            return CommandResult(command="cd", args=args, filesystem=filesystem, cwd=self.home_directory)
        if args[0] == "..":
            return CommandResult(command="cd", args=args, filesystem=filesystem, cwd=parent_directory(cwd))
        # Arbitrary targets are never honored, even when the directory exists.
        return CommandResult(
            command="cd",
            args=args,
            output=f"cd: {args[0]}: No such file or directory",
            filesystem=filesystem,
            cwd=cwd,
            status="not_found",
        )

    def _clear(self, args: list[str], filesystem: FileSystemState, cwd: str) -> CommandResult:
        return CommandResult(command="clear", args=args, filesystem=filesystem, cwd=cwd, clear_screen=True)

    def _help(self, args: list[str], filesystem: FileSystemState, cwd: str) -> CommandResult:
        return CommandResult(command="help", args=args, output=HELP_TEXT, filesystem=filesystem, cwd=cwd)


def parent_directory(cwd: str) -> str:
    """Drop the last segment of ``cwd``.

    A single-segment path such as ``/home`` becomes ``/``, not the home
    directory, and ``/`` stays ``/``.
    """
    segments = [segment for segment in cwd.split("/") if segment]
    return "/" + "/".join(segments[:-1])
