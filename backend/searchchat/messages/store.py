"""Message stores: where persisted chat turns end up.

The flow only ever inserts; reading messages back belongs to the chat UI.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

from supabase import Client

from searchchat.db.connection import Database
from searchchat.models import PersistedMessage

MESSAGES_TABLE = "messages"


class MessageStore(ABC):
    """Insert-only interface over a messages collection."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def insert_message(self, message: PersistedMessage) -> Any:
        """Insert one row. Returns backend-specific data about the inserted row."""
        ...


class SQLiteMessageStore(MessageStore):
    """Local fallback store backed by the aiosqlite ``messages`` table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    @property
    def name(self) -> str:
        return "sqlite"

    async def insert_message(self, message: PersistedMessage) -> int | None:
        cursor = await self._db.execute(
            """INSERT INTO messages
               (chat_id, user_id, assistant_id, role, content, model,
                sequence_number, image_paths, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                message.chat_id,
                message.user_id,
                message.assistant_id,
                message.role,
                message.content,
                message.model,
                message.sequence_number,
                json.dumps(message.image_paths),
                datetime.now(UTC).isoformat(),
            ),
        )
        return cursor.lastrowid
