from __future__ import annotations

from typing import Protocol
from uuid import UUID

from relay_chat.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_visible(
        self,
        viewer: str,
        *,
        broadcast: str,
        limit: int,
    ) -> list[Message]:
        """Newest `limit` messages visible to viewer, ordered oldest first."""
        ...


class MessageWriter(Protocol):
    async def insert(self, message: Message) -> Message: ...

    async def insert_many(self, messages: list[Message]) -> list[Message]: ...

    async def get_for_update(self, message_id: UUID) -> Message | None:
        """Fetch a message and hold a write lock on it until commit/rollback."""
        ...

    async def update(
        self,
        message_id: UUID,
        *,
        to: str,
        text: str,
        kind: str,
    ) -> Message: ...

    async def delete(self, message_id: UUID) -> None: ...
