"""Model picker endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.dependencies import WorkspaceDep
from models.catalog import MODEL_CATALOG, ModelDescriptor

router = APIRouter(
    prefix="/models",
    tags=["models"],
)


class SelectModelRequest(BaseModel):
    """Request model for selecting a model.

    Attributes:
        model_id: Identifier of a catalog entry.
    """

    model_id: str = Field(description="Identifier of a catalog entry")


class ModelCatalogResponse(BaseModel):
    """Response model for the model catalog.

    Attributes:
        models: Every selectable model.
        selected: The currently selected model, if any.
    """

    models: list[ModelDescriptor]
    selected: ModelDescriptor | None


@router.get("", response_model=ModelCatalogResponse)
async def list_models(workspace: WorkspaceDep) -> ModelCatalogResponse:
    """List selectable models and the current selection."""
    return ModelCatalogResponse(
        models=list(MODEL_CATALOG),
        selected=workspace.selected_model,
    )


@router.post("/select", response_model=ModelDescriptor)
async def select_model(request: SelectModelRequest, workspace: WorkspaceDep) -> ModelDescriptor:
    """Select the model used for generation.

    Raises:
        ModelNotFoundError: If the id is not in the catalog (404).
    """
    return workspace.select_model(request.model_id)
