"""Generated file endpoints.

Lists the outputs directory of the current working directory and offers each
file as a downloadable attachment.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from api.dependencies import WorkspaceDep
from api.exceptions import OutputFileNotFoundError
from models.filesystem import outputs_path

router = APIRouter(
    prefix="/files",
    tags=["files"],
)


class OutputFile(BaseModel):
    """One generated file.

    Attributes:
        name: Filename.
        size: Content length in characters.
    """

    name: str
    size: int


class OutputFilesResponse(BaseModel):
    """Response model for the outputs listing.

    Attributes:
        path: The outputs directory.
        files: Files in the directory, in insertion order.
    """

    path: str
    files: list[OutputFile]


class FileSystemStateResponse(BaseModel):
    """Response model for the raw filesystem snapshot.

    Attributes:
        directories: Every directory listing keyed by path.
        directory_count: Number of listings.
        issues: Consistency issues found by validation.
    """

    directories: dict[str, dict[str, dict]]
    directory_count: int
    issues: list[str]


@router.get("/outputs", response_model=OutputFilesResponse)
async def list_outputs(workspace: WorkspaceDep) -> OutputFilesResponse:
    """List generated files under the current working directory."""
    files = workspace.list_outputs()

    return OutputFilesResponse(
        path=outputs_path(workspace.session.cwd),
        files=[OutputFile(name=name, size=len(content)) for name, content in files.items()],
    )


@router.get("/outputs/{filename}", response_class=PlainTextResponse)
async def download_output(filename: str, workspace: WorkspaceDep) -> PlainTextResponse:
    """Download one generated file as a plain-text attachment.

    Raises:
        OutputFileNotFoundError: If the file is not in outputs (404).
    """
    content = workspace.read_output(filename)
    if content is None:
        raise OutputFileNotFoundError(filename, outputs_path(workspace.session.cwd))

    return PlainTextResponse(
        content,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/state", response_model=FileSystemStateResponse)
async def get_filesystem_state(workspace: WorkspaceDep) -> FileSystemStateResponse:
    """Return every directory listing plus validation issues."""
    snapshot = workspace.filesystem.get_snapshot()

    return FileSystemStateResponse(
        directories=snapshot["directories"],
        directory_count=snapshot["directory_count"],
        issues=workspace.filesystem.validate_state(),
    )
