"""Abstract LLM provider interface and shared data types."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from searchchat.models import SamplingParams


class GenerationRequest(BaseModel):
    """Everything a provider needs to make an API call."""

    model: str
    messages: list[dict[str, Any]]
    sampling_params: SamplingParams = Field(default_factory=SamplingParams)


class GenerationResult(BaseModel):
    """Full response from a provider after generation completes."""

    content: str
    model: str
    finish_reason: str | None = None
    usage: dict[str, int] | None = None
    latency_ms: int | None = None


class LLMProvider(ABC):
    """Abstract interface for LLM providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'azure')."""
        ...

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model or deployment name used when the caller does not pick one."""
        ...

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Send a non-streaming generation request. Returns the full result."""
        ...
