"""Known chat models and what input they accept."""

from pydantic import BaseModel, ConfigDict


class ModelInfo(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    provider: str
    image_input: bool = False


LLM_LIST: list[ModelInfo] = [
    ModelInfo(model_id="gpt-4o", provider="openai", image_input=True),
    ModelInfo(model_id="gpt-4o-mini", provider="openai", image_input=True),
    ModelInfo(model_id="gpt-4-turbo-preview", provider="openai"),
    ModelInfo(model_id="gpt-4-vision-preview", provider="openai", image_input=True),
    ModelInfo(model_id="gpt-4", provider="openai"),
    ModelInfo(model_id="gpt-3.5-turbo", provider="openai"),
    ModelInfo(model_id="claude-3-5-sonnet-20240620", provider="anthropic", image_input=True),
    ModelInfo(model_id="claude-3-haiku-20240307", provider="anthropic", image_input=True),
    ModelInfo(model_id="mistral-large-latest", provider="mistral"),
]


def get_model_info(model_id: str | None) -> ModelInfo | None:
    if not model_id:
        return None
    return next((m for m in LLM_LIST if m.model_id == model_id), None)


def supports_image_input(model_id: str | None) -> bool:
    """Unknown models are treated as text-only."""
    info = get_model_info(model_id)
    return info is not None and info.image_input
