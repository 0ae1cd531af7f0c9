"""Turn caller-supplied history into ConversationTurns.

History entries arrive either flat (``{"role", "content", ...}``) or wrapped
once in an envelope (``{"message": {...}, ...}``) as the chat UI stores them.
"""

from typing import Any

from searchchat.models import ConversationTurn


def unwrap_envelope(entry: Any) -> Any:
    """Strip one ``message`` envelope level, if there is one."""
    if isinstance(entry, dict) and entry.get("message") is not None:
        return entry["message"]
    return entry


def normalize_turn(entry: Any) -> ConversationTurn | None:
    """Return a turn when the unwrapped entry has both a role and content, else None."""
    msg = unwrap_envelope(entry)
    if not isinstance(msg, dict):
        return None
    role = msg.get("role")
    content = msg.get("content")
    if not role or not content:
        return None
    return ConversationTurn(role=str(role), content=content)


def reconcile_history(messages: Any) -> list[ConversationTurn]:
    """Keep the well-formed turns, in their original order. Non-lists yield none."""
    if not isinstance(messages, list):
        return []
    turns: list[ConversationTurn] = []
    for entry in messages:
        turn = normalize_turn(entry)
        if turn is not None:
            turns.append(turn)
    return turns
