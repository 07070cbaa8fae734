"""Dependency injection providers for the FastAPI application.

This module holds the shared Workspace and the generation client it uses, and
exposes them to route handlers through FastAPI dependencies.
"""

from typing import Annotated

from fastapi import Depends

from client.generation import GenerationClient
from config import Settings, get_settings
from models.workspace import Workspace


# Global state
# One workspace per process: there is no multi-session isolation.
_workspace: Workspace | None = None
_generation_client: GenerationClient | None = None


def get_workspace() -> Workspace:
    """Get the shared Workspace instance.

    Returns:
        The shared Workspace instance.

    Raises:
        RuntimeError: If the workspace hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(workspace: WorkspaceDep):
            return workspace.session.get_snapshot()
    """
    if _workspace is None:
        raise RuntimeError(
            "Workspace not initialized. Call initialize_workspace() first."
        )

    return _workspace


def initialize_workspace(settings: Settings | None = None) -> Workspace:
    """Initialize the shared Workspace instance.

    This should be called once when the FastAPI app starts up. Creates the
    generation client from settings and an empty workspace around it.

    Args:
        settings: Settings to use (defaults to the process-wide settings).

    Returns:
        The newly created Workspace instance.
    """
    global _workspace, _generation_client

    settings = settings or get_settings()
    _generation_client = GenerationClient.from_settings(settings)
    _workspace = Workspace(
        generator=_generation_client,
        home_directory=settings.home_directory,
    )

    return _workspace


async def shutdown_workspace() -> None:
    """Release the workspace and close the generation client.

    This should be called when the FastAPI app shuts down.
    """
    global _workspace, _generation_client

    if _generation_client is not None:
        await _generation_client.close()

    _generation_client = None
    _workspace = None


# Type alias for dependency injection
WorkspaceDep = Annotated[Workspace, Depends(get_workspace)]
