"""Terminal session model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.extractor import GeneratedFileBatch, stage_files
from models.filesystem import HOME_DIRECTORY, FileSystemState, validate_path
from models.shell import CommandResult, ShellInterpreter

PROMPT_MARKER = "$ "


class Session(BaseModel):
    """Working directory and terminal transcript of one user.

    The transcript is append-only apart from ``clear``, which resets it to the
    prompt marker. Changing directory never touches the transcript and
    clearing never touches the working directory.

    Args:
        cwd: Current working directory.
        transcript: Echoed commands and their outputs, ending in the prompt.
        history: Every non-blank command line submitted, including ``clear``.
    """

    model_config = ConfigDict(frozen=True)

    cwd: str = Field(default=HOME_DIRECTORY, description="Current working directory")
    transcript: str = Field(default=PROMPT_MARKER, description="Terminal transcript")
    history: tuple[str, ...] = Field(default=(), description="Submitted command lines")

    @field_validator("cwd")
    @classmethod
    def validate_cwd(cls, value: str) -> str:
        """Require an absolute working directory."""
        return validate_path(value)

    def apply_result(self, line: str, result: CommandResult) -> "Session":
        """Return the session after ``result`` for command ``line``.

        Every command except ``clear`` appends the raw line, a newline, the
        output followed by a newline when non-empty, and the prompt marker.
        """
        if result.clear_screen:
            transcript = PROMPT_MARKER
        else:
            output = f"{result.output}\n" if result.output else ""
            transcript = f"{self.transcript}{line}\n{output}{PROMPT_MARKER}"
        return self.model_copy(
            update={
                "cwd": result.cwd,
                "transcript": transcript,
                "history": (*self.history, line),
            }
        )

    def submit(
        self,
        line: str,
        filesystem: FileSystemState,
        interpreter: ShellInterpreter | None = None,
    ) -> tuple["Session", FileSystemState]:
        """Run one command line.

        Blank lines are ignored and leave both values unchanged.

        Args:
            line: Raw command line.
            filesystem: Current filesystem.
            interpreter: Interpreter to use (a default one if omitted).

        Returns:
            Tuple of (new session, new filesystem).
        """
        session, filesystem, _ = self.run(line, filesystem, interpreter)
        return session, filesystem

    def run(
        self,
        line: str,
        filesystem: FileSystemState,
        interpreter: ShellInterpreter | None = None,
    ) -> tuple["Session", FileSystemState, CommandResult | None]:
        """Like submit(), but also return the command result (None if blank)."""
        if not line.strip():
            return self, filesystem, None
        interpreter = interpreter or ShellInterpreter()
        result = interpreter.execute(line, filesystem, self.cwd)
        return self.apply_result(line, result), result.filesystem, result

    def receive_generated_batch(
        self, batch: GeneratedFileBatch, filesystem: FileSystemState
    ) -> FileSystemState:
        """Merge generated files into the outputs directory of the current cwd.

        The transcript is not touched.
        """
        return stage_files(filesystem, self.cwd, batch)

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-serializable view of the session."""
        return {
            "cwd": self.cwd,
            "transcript": self.transcript,
            "history": list(self.history),
        }
