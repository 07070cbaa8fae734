"""Catalog of selectable generation models."""

from pydantic import BaseModel, ConfigDict, Field


class ModelDescriptor(BaseModel):
    """A model the user can pick for generation.

    Args:
        provider: Display name of the provider.
        name: Display name of the model.
        model_id: Identifier of the model.
        cost: Relative cost multiplier.
    """

    model_config = ConfigDict(frozen=True)

    provider: str = Field(description="Display name of the provider")
    name: str = Field(description="Display name of the model")
    model_id: str = Field(description="Identifier of the model")
    cost: float = Field(ge=0, description="Relative cost multiplier")


MODEL_CATALOG: tuple[ModelDescriptor, ...] = (
    ModelDescriptor(provider="OpenAI", name="GPT-OSS-20B", model_id="openai-community/gpt2", cost=2),
    ModelDescriptor(provider="OpenAI", name="GPT-OSS-120B", model_id="openai-community/gpt2-large", cost=8),
    ModelDescriptor(provider="Nova", name="Algorix-Skyhigh", model_id="arthu1/Algorix-Skyhigh", cost=1),
    ModelDescriptor(provider="Alibaba", name="Qwen3-Coder-0.5B", model_id="Qwen/Qwen2.5-Coder-0.5B-Instruct", cost=0.5),
    ModelDescriptor(provider="Alibaba", name="Qwen3-Coder-1.5B", model_id="Qwen/Qwen2.5-Coder-1.5B-Instruct", cost=1.5),
    ModelDescriptor(provider="Alibaba", name="Qwen3-Coder-3B", model_id="Qwen/Qwen2.5-Coder-3B-Instruct", cost=3),
    ModelDescriptor(provider="Alibaba", name="Qwen3-Coder-7B", model_id="Qwen/Qwen2.5-Coder-7B-Instruct", cost=7),
    ModelDescriptor(provider="Alibaba", name="Qwen3-Coder-14B", model_id="Qwen/Qwen2.5-Coder-14B-Instruct", cost=14),
)


def find_model(model_id: str) -> ModelDescriptor | None:
    """Return the catalog entry with ``model_id``, or None."""
    for descriptor in MODEL_CATALOG:
        if descriptor.model_id == model_id:
            return descriptor
    return None
