"""Best-effort persistence of the user and assistant turns.

Writes here are advisory. A failed insert is logged and reported as False;
it never fails the request that triggered it, and the two inserts of one
turn are not atomic with each other.
"""

import logging
import math
from typing import Any

from searchchat.chat.history import unwrap_envelope
from searchchat.messages.store import MessageStore
from searchchat.models import PersistedMessage, PersistenceContext, Role

logger = logging.getLogger(__name__)


def _as_id(value: Any) -> str | None:
    if not value:
        return None
    return str(value)


def derive_persistence_context(messages: Any) -> PersistenceContext:
    """Read chat identifiers and the sequence cursor from the last history entry.

    The cursor is the entry's numeric ``sequence_number`` when present,
    otherwise ``len(messages) - 1``. Only the last entry is consulted, and a
    history that is not a non-empty list yields an empty context.
    """
    if not isinstance(messages, list) or not messages:
        return PersistenceContext()

    last = unwrap_envelope(messages[-1])
    if not isinstance(last, dict):
        last = {}

    seq = last.get("sequence_number")
    if isinstance(seq, (int, float)) and not isinstance(seq, bool) and math.isfinite(seq):
        last_sequence = int(seq)
    else:
        last_sequence = len(messages) - 1

    return PersistenceContext(
        chat_id=_as_id(last.get("chat_id")),
        user_id=_as_id(last.get("user_id")),
        assistant_id=_as_id(last.get("assistant_id")),
        last_sequence=last_sequence,
    )


def build_message(
    context: PersistenceContext,
    *,
    role: Role,
    content: str,
    model: str,
    offset: int,
) -> PersistedMessage:
    """Row for ``context`` at ``last_sequence + offset``. Requires can_persist."""
    assert context.chat_id is not None and context.user_id is not None
    return PersistedMessage(
        chat_id=context.chat_id,
        user_id=context.user_id,
        assistant_id=context.assistant_id,
        role=role,
        content=content,
        model=model,
        sequence_number=context.last_sequence + offset,
        image_paths=[],
    )


class BestEffortWriter:
    """Side-channel writer that never raises to its caller."""

    def __init__(self, store: MessageStore) -> None:
        self._store = store

    async def write(self, message: PersistedMessage) -> bool:
        logger.info(
            "Persisting %s message: chat_id=%s seq=%d store=%s",
            message.role, message.chat_id, message.sequence_number, self._store.name,
        )
        try:
            result = await self._store.insert_message(message)
        except Exception as e:
            logger.error("%s message insert error: %s", message.role.capitalize(), e)
            return False
        logger.info("%s message insert success: %s", message.role.capitalize(), result)
        return True
