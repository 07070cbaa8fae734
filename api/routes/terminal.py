"""Terminal endpoints.

Provides REST API endpoints for running simulated shell commands against the
shared workspace and reading the terminal session state.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from api.dependencies import WorkspaceDep
from models.shell import CommandStatus

router = APIRouter(
    prefix="/terminal",
    tags=["terminal"],
)


# ============================================================================
# Request Models
# ============================================================================


class ExecuteCommandRequest(BaseModel):
    """Request model for running one command line.

    Attributes:
        command: Raw command line, split on whitespace by the interpreter.
    """

    command: str = Field(description="Raw command line")

    @field_validator("command")
    @classmethod
    def validate_command(cls, value: str) -> str:
        """Reject blank command lines."""
        if not value.strip():
            raise ValueError("Command cannot be empty")
        return value


# ============================================================================
# Response Models
# ============================================================================


class CommandResponse(BaseModel):
    """Response model for a command execution.

    Attributes:
        command: The command word that was dispatched.
        args: Remaining tokens.
        output: Text output of the command.
        status: "ok", "usage_error" or "not_found".
        cwd: Working directory after the command.
        cleared: True when the command reset the transcript.
        transcript: Full transcript after the command.
    """

    command: str
    args: list[str]
    output: str
    status: CommandStatus
    cwd: str
    cleared: bool
    transcript: str


class TerminalStateResponse(BaseModel):
    """Response model for terminal state endpoint.

    Attributes:
        cwd: Current working directory.
        transcript: Full terminal transcript.
        history: Submitted command lines.
        entries: Entry names in the current directory.
    """

    cwd: str
    transcript: str
    history: list[str]
    entries: list[str]


# ============================================================================
# Route Handlers
# ============================================================================


@router.post("/execute", response_model=CommandResponse)
async def execute_command(
    request: ExecuteCommandRequest, workspace: WorkspaceDep
) -> CommandResponse:
    """Run one command line in the simulated shell.

    Unknown commands and missing files are not HTTP errors: they are reported
    in ``output`` and ``status``, exactly as the terminal shows them.

    Args:
        request: The command line to run.
        workspace: The workspace dependency.

    Returns:
        The command's output and the resulting session state.
    """
    result = workspace.execute(request.command)

    return CommandResponse(
        command=result.command,
        args=result.args,
        output=result.output,
        status=result.status,
        cwd=workspace.session.cwd,
        cleared=result.clear_screen,
        transcript=workspace.session.transcript,
    )


@router.get("/state", response_model=TerminalStateResponse)
async def get_terminal_state(workspace: WorkspaceDep) -> TerminalStateResponse:
    """Get the current terminal session.

    Args:
        workspace: The workspace dependency.

    Returns:
        Working directory, transcript and history.
    """
    session = workspace.session

    return TerminalStateResponse(
        cwd=session.cwd,
        transcript=session.transcript,
        history=list(session.history),
        entries=workspace.filesystem.list_entries(session.cwd),
    )
