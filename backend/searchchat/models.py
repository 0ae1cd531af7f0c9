"""Canonical data structures for SearchChat.

Defined once here, referenced everywhere else. Everything in this module is
transient: built while handling one request and discarded afterwards.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Inbound request
# ---------------------------------------------------------------------------


class ChatSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", protected_namespaces=())

    model: str | None = None
    temperature: float | None = None


class WebSearchChatRequest(BaseModel):
    """Body of POST /api/chat/web-search.

    ``messages`` is left untyped: entries arrive either flat or wrapped in a
    ``{"message": {...}}`` envelope, malformed entries are dropped later, and a
    value that is not a list counts as no history at all.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    query: str | None = None
    chat_settings: ChatSettings | None = Field(default=None, alias="chatSettings")
    messages: Any = None


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class SearchResultItem(BaseModel):
    """One search-provider result, projected to the fields the prompt uses."""

    type: str | None = None
    title: str | None = None
    link: str | None = None
    snippet: str | None = None
    image: str | None = None
    date: str | None = None
    channel: str | None = None


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------


Role = Literal["user", "assistant", "system"]


class ConversationTurn(BaseModel):
    role: str
    content: Any

    def to_message(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class SamplingParams(BaseModel):
    temperature: float | None = None
    max_tokens: int = 1200


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class PersistenceContext(BaseModel):
    """Identifiers and sequence cursor taken from the last history entry."""

    chat_id: str | None = None
    user_id: str | None = None
    assistant_id: str | None = None
    last_sequence: int = 0

    @property
    def can_persist(self) -> bool:
        return bool(self.chat_id and self.user_id)


class PersistedMessage(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    chat_id: str
    user_id: str
    assistant_id: str | None = None
    role: Role
    content: str
    model: str
    sequence_number: int
    image_paths: list[str] = Field(default_factory=list)
