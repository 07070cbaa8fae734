"""Chat endpoints.

Provides REST API endpoints for sending prompts to the generation service,
reading the chat transcript and searching it. Generated files are staged into
the outputs directory of the terminal's current working directory.
"""

from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from api.dependencies import WorkspaceDep
from models.catalog import ModelDescriptor
from models.chat import ChatMessage

router = APIRouter(
    prefix="/chat",
    tags=["chat"],
)


# ============================================================================
# Request Models
# ============================================================================


class GenerateRequest(BaseModel):
    """Request model for a generation.

    Attributes:
        prompt: The user's request.
    """

    prompt: str = Field(description="The user's request")

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, value: str) -> str:
        """Reject blank prompts."""
        if not value.strip():
            raise ValueError("Prompt cannot be empty")
        return value


class ChatQueryRequest(BaseModel):
    """Request model for searching the chat transcript.

    Attributes:
        role: Filter by role ("user" or "assistant").
        search: Case-insensitive text search in message content.
        limit: Maximum number of (most recent) results.
    """

    role: Literal["user", "assistant"] | None = Field(
        default=None, description="Filter by role"
    )
    search: str | None = Field(default=None, description="Search text")
    limit: int | None = Field(
        default=None, ge=1, le=1000, description="Maximum results to return"
    )


# ============================================================================
# Response Models
# ============================================================================


class GenerateResponse(BaseModel):
    """Response model for a generation.

    Attributes:
        message: The assistant message added to the transcript.
        files: Names of the files staged by this generation.
        outputs_path: Directory the files were merged into.
        fallback: True when the canned response was substituted.
    """

    message: ChatMessage
    files: list[str]
    outputs_path: str
    fallback: bool


class ChatStateResponse(BaseModel):
    """Response model for chat state endpoint.

    Attributes:
        messages: All messages in order.
        total_message_count: Number of messages.
        selected_model: Currently selected model, if any.
        is_generating: True while a generation is in flight.
    """

    messages: list[ChatMessage]
    total_message_count: int
    selected_model: ModelDescriptor | None
    is_generating: bool


class ChatQueryResponse(BaseModel):
    """Response model for chat query endpoint.

    Attributes:
        messages: Matching messages.
        total_count: Number of matches before the limit.
        returned_count: Number of matches returned.
        query: Echo of the query parameters.
    """

    messages: list[ChatMessage]
    total_count: int
    returned_count: int
    query: dict


# ============================================================================
# Route Handlers
# ============================================================================


@router.post("/generate", response_model=GenerateResponse)
async def generate(request: GenerateRequest, workspace: WorkspaceDep) -> GenerateResponse:
    """Send a prompt to the selected model.

    Transport failures are not errors here: the canned response and its
    ``hello.py`` file are returned with ``fallback`` set.

    Args:
        request: The prompt.
        workspace: The workspace dependency.

    Returns:
        The assistant message and the names of the staged files.
    """
    outcome = await workspace.generate(request.prompt)

    return GenerateResponse(
        message=outcome.message,
        files=outcome.batch.filenames,
        outputs_path=outcome.outputs_path,
        fallback=outcome.fallback,
    )


@router.get("/state", response_model=ChatStateResponse)
async def get_chat_state(workspace: WorkspaceDep) -> ChatStateResponse:
    """Get the chat transcript.

    Args:
        workspace: The workspace dependency.

    Returns:
        All messages plus generation status.
    """
    return ChatStateResponse(
        messages=list(workspace.chat.messages),
        total_message_count=len(workspace.chat.messages),
        selected_model=workspace.selected_model,
        is_generating=workspace.is_generating,
    )


@router.post("/query", response_model=ChatQueryResponse)
async def query_chat(request: ChatQueryRequest, workspace: WorkspaceDep) -> ChatQueryResponse:
    """Search the chat transcript.

    Args:
        request: Query filters.
        workspace: The workspace dependency.

    Returns:
        Matching messages with counts.
    """
    query_params = request.model_dump(exclude_none=True)
    result = workspace.chat.query(query_params)

    return ChatQueryResponse(
        messages=[ChatMessage.model_validate(msg) for msg in result["messages"]],
        total_count=result["total_count"],
        returned_count=result["count"],
        query=query_params,
    )
