"""Shared base class for OpenAI-compatible LLM providers.

Handles parameter building and response parsing. AzureOpenAIProvider is a
thin subclass that differs only in client configuration.
"""

import time
from typing import Any

from openai import AsyncOpenAI

from searchchat.providers.base import GenerationRequest, GenerationResult, LLMProvider


class OpenAICompatibleProvider(LLMProvider):
    """Base provider for any API that speaks the OpenAI chat completions protocol."""

    def __init__(self, client: AsyncOpenAI) -> None:
        self._client = client

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        params = self._build_params(request)
        start = time.monotonic()
        response = await self._client.chat.completions.create(**params)
        latency_ms = int((time.monotonic() - start) * 1000)

        content = ""
        finish_reason = None
        if response.choices:
            choice = response.choices[0]
            content = choice.message.content or ""
            finish_reason = choice.finish_reason

        usage = None
        if response.usage is not None:
            usage = {
                "input_tokens": response.usage.prompt_tokens,
                "output_tokens": response.usage.completion_tokens,
            }

        return GenerationResult(
            content=content,
            model=response.model or request.model,
            finish_reason=finish_reason,
            usage=usage,
            latency_ms=latency_ms,
        )

    @staticmethod
    def _build_params(request: GenerationRequest) -> dict[str, Any]:
        """Build kwargs dict for client.chat.completions.create()."""
        sp = request.sampling_params
        messages: list[dict[str, Any]] = []
        for m in request.messages:
            message = {"role": m["role"], "content": m["content"]}
            # Named participants (e.g. the search tool context) keep their name
            if m.get("name"):
                message["name"] = m["name"]
            messages.append(message)

        params: dict[str, Any] = {
            "model": request.model,
            "max_tokens": sp.max_tokens,
            "messages": messages,
        }
        if sp.temperature is not None:
            params["temperature"] = sp.temperature
        return params
