"""Shared test helpers: canned DataForSEO traffic and fake providers."""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from searchchat.db.connection import Database
from searchchat.models import PersistedMessage
from searchchat.providers.base import GenerationRequest, GenerationResult, LLMProvider
from searchchat.search.client import ORGANIC_LIVE_PATH, STATUS_PATH

PARIS_ITEM: dict[str, Any] = {
    "type": "organic",
    "title": "Paris Weather",
    "url": "https://x",
    "description": "...",
    "timestamp": "2024-01-01 00:00:00",
    "website_name": "x.com",
}


def make_search_payload(items: list[dict[str, Any]] | None) -> dict[str, Any]:
    """Wrap items the way the live organic endpoint does."""
    result: dict[str, Any] = {"keyword": "q"}
    if items is not None:
        result["items"] = items
    return {"status_code": 20000, "tasks": [{"result": [result]}]}


@dataclass
class FakeDataForSEO:
    """MockTransport handler with configurable answers that records requests."""

    status_check_code: int = 200
    status_check_error: bool = False
    search_status: int = 200
    search_payload: dict[str, Any] = field(default_factory=lambda: make_search_payload([]))
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == STATUS_PATH:
            if self.status_check_error:
                raise httpx.ConnectError("network unreachable", request=request)
            return httpx.Response(self.status_check_code, json={"status_code": 20000})
        if request.url.path == ORGANIC_LIVE_PATH:
            if self.search_status >= 400:
                return httpx.Response(self.search_status, text="quota exceeded")
            return httpx.Response(self.search_status, json=self.search_payload)
        return httpx.Response(404)

    @property
    def search_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == ORGANIC_LIVE_PATH]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self),
            base_url="https://api.dataforseo.com",
        )


class FakeProvider(LLMProvider):
    """Test provider that returns a canned response and records requests."""

    def __init__(self, content: str = "Fake response") -> None:
        self.content = content
        self.requests: list[GenerationRequest] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def default_model(self) -> str:
        return "fake-deployment"

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        return GenerationResult(content=self.content, model="fake-model", finish_reason="stop")


class FailingProvider(FakeProvider):
    """Provider whose completion call always fails."""

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        raise RuntimeError("Error code: 429 - Rate limit exceeded for deployment")


async def list_messages(db: Database, chat_id: str) -> list[PersistedMessage]:
    """Rows stored for ``chat_id`` in sequence order."""
    rows = await db.fetchall(
        "SELECT * FROM messages WHERE chat_id = ? ORDER BY sequence_number, id",
        (chat_id,),
    )
    return [
        PersistedMessage(
            chat_id=row["chat_id"],
            user_id=row["user_id"],
            assistant_id=row["assistant_id"],
            role=row["role"],
            content=row["content"],
            model=row["model"],
            sequence_number=row["sequence_number"],
            image_paths=json.loads(row["image_paths"]),
        )
        for row in rows
    ]
