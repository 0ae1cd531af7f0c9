"""Web-search chat service: check connectivity, search, complete, persist."""

import logging

from searchchat.chat.history import reconcile_history
from searchchat.chat.prompt import build_messages
from searchchat.messages.persistence import (
    BestEffortWriter,
    build_message,
    derive_persistence_context,
)
from searchchat.models import SamplingParams, WebSearchChatRequest
from searchchat.providers.base import GenerationRequest, LLMProvider
from searchchat.search.client import DataForSEOClient
from searchchat.search.normalize import normalize_results

logger = logging.getLogger(__name__)

MAX_COMPLETION_TOKENS = 1200
DEFAULT_TEMPERATURE = 0.0

OFFLINE_MESSAGE = "🚫 I'm not connected to the internet. Please try again later."
MISSING_QUERY_MESSAGE = "Missing `query` in request body"


class MissingQueryError(Exception):
    def __init__(self) -> None:
        super().__init__(MISSING_QUERY_MESSAGE)


class SearchOfflineError(Exception):
    def __init__(self) -> None:
        super().__init__(OFFLINE_MESSAGE)


class WebSearchChatService:
    """Answers one query with search results as context.

    The external calls run strictly in sequence. Errors from search or
    completion propagate; persistence errors never do.
    """

    def __init__(
        self,
        search_client: DataForSEOClient,
        provider: LLMProvider,
        writer: BestEffortWriter,
    ) -> None:
        self._search = search_client
        self._provider = provider
        self._writer = writer

    async def respond(self, request: WebSearchChatRequest) -> str:
        """Return the assistant text for ``request`` (empty if the model sent none)."""
        query = request.query
        if not query:
            raise MissingQueryError()

        if not await self._search.check_connection():
            raise SearchOfflineError()

        payload = await self._search.fetch_results(query)
        results = normalize_results(payload)
        if not results:
            logger.info("No search results for query; continuing without context")

        history = reconcile_history(request.messages)
        messages = build_messages(query, results, history)

        settings = request.chat_settings
        temperature = DEFAULT_TEMPERATURE
        if settings is not None and settings.temperature is not None:
            temperature = settings.temperature
        persisted_model = (settings.model if settings else None) or self._provider.default_model

        result = await self._provider.generate(
            GenerationRequest(
                model=self._provider.default_model,
                messages=messages,
                sampling_params=SamplingParams(
                    temperature=temperature,
                    max_tokens=MAX_COMPLETION_TOKENS,
                ),
            )
        )
        content = result.content

        # Both rows are written only once the completion has succeeded
        context = derive_persistence_context(request.messages)
        if context.can_persist:
            await self._writer.write(
                build_message(context, role="user", content=query, model=persisted_model, offset=1)
            )
        if context.can_persist and content:
            await self._writer.write(
                build_message(
                    context, role="assistant", content=content, model=persisted_model, offset=2
                )
            )

        return content
