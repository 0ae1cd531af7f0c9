"""Prompt assembly: search context first, caller history after."""

import json
from collections.abc import Sequence
from typing import Any

from searchchat.models import ConversationTurn, SearchResultItem

SEARCH_TOOL_NAME = "web_search_tool"

SYSTEM_PROMPT = (
    "You are ChatGPT, a helpful assistant. You have access to up-to-date web search "
    "results below. Use them to answer the user's question fully; choose whatever "
    "structure best fits the topic. Cite sources by number when relevant."
)


def serialize_results(results: Sequence[SearchResultItem]) -> str:
    """Pretty JSON of the results, leaving out fields the provider did not send."""
    return json.dumps(
        [r.model_dump(exclude_unset=True) for r in results],
        indent=2,
        ensure_ascii=False,
    )


def build_messages(
    query: str,
    results: Sequence[SearchResultItem],
    history: Sequence[ConversationTurn],
) -> list[dict[str, Any]]:
    """Return ``[system, tool, user, *history]``.

    The three-message preamble always comes first, whatever the history holds.
    """
    system_msg = {"role": "system", "content": SYSTEM_PROMPT}
    tool_msg = {
        "role": "assistant",
        "name": SEARCH_TOOL_NAME,
        "content": serialize_results(results),
    }
    user_msg = {
        "role": "user",
        "content": f'User asked: "{query}". Use the search results above to craft your reply.',
    }
    return [system_msg, tool_msg, user_msg, *(t.to_message() for t in history)]
