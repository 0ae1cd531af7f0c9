"""Send pathway: where a submitted draft goes.

Drafts flagged for web search are posted to the web-search route; the rest
go to the application's regular send handler.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from searchchat.models import ChatSettings

logger = logging.getLogger(__name__)

WEB_SEARCH_PATH = "/api/chat/web-search"

DefaultSend = Callable[[str, list[Any], bool], Awaitable[Any]]


class WebSearchChatError(Exception):
    """The web-search route answered with an error body."""

    def __init__(self, status_code: int, error: str) -> None:
        self.status_code = status_code
        self.error = error
        super().__init__(f"{status_code}: {error}")


class WebSearchChatClient:
    """HTTP client for POST /api/chat/web-search."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(
        self,
        query: str,
        messages: list[Any],
        chat_settings: ChatSettings | None = None,
    ) -> str:
        body: dict[str, Any] = {"query": query, "messages": messages}
        if chat_settings is not None:
            body["chatSettings"] = chat_settings.model_dump(exclude_none=True)
        response = await self._client.post(WEB_SEARCH_PATH, json=body)
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        if not response.is_success:
            raise WebSearchChatError(
                response.status_code, data.get("error") or response.reason_phrase
            )
        return data.get("message", "")


class SendPathway:
    """Callable handed to ComposerController as its ``send_message``.

    Each send runs as its own task; ``on_reply`` receives the web-search
    answer and ``on_error`` any WebSearchChatError or transport failure.
    """

    def __init__(
        self,
        web_search: WebSearchChatClient,
        default_send: DefaultSend,
        *,
        chat_settings: ChatSettings | None = None,
        on_reply: Callable[[str], Any] = lambda text: None,
        on_error: Callable[[Exception], Any] = lambda exc: None,
    ) -> None:
        self._web_search = web_search
        self._default_send = default_send
        self._chat_settings = chat_settings
        self._on_reply = on_reply
        self._on_error = on_error
        self._tasks: set[asyncio.Task] = set()

    def __call__(
        self,
        content: str,
        chat_messages: list[Any],
        is_regeneration: bool,
        use_web_search: bool,
    ) -> asyncio.Task:
        if use_web_search:
            coro = self._send_web_search(content, chat_messages)
        else:
            coro = self._default_send(content, chat_messages, is_regeneration)
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _send_web_search(self, content: str, chat_messages: list[Any]) -> str | None:
        try:
            reply = await self._web_search.send(content, chat_messages, self._chat_settings)
        except (WebSearchChatError, httpx.HTTPError) as e:
            logger.warning("Web-search send failed: %s", e)
            self._on_error(e)
            return None
        self._on_reply(reply)
        return reply

    @property
    def is_generating(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def stop(self) -> None:
        """Cancel every in-flight send. Cancelled sends report neither reply nor error."""
        for task in list(self._tasks):
            task.cancel()

    async def drain(self) -> None:
        """Wait for every in-flight send."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
