from __future__ import annotations

from datetime import datetime
from typing import Protocol

from relay_chat.domain.entities.participant import Participant


class ParticipantReader(Protocol):
    async def exists(self, name: str) -> bool: ...

    async def list_all(self) -> list[Participant]: ...


class ParticipantWriter(Protocol):
    async def insert(self, participant: Participant) -> Participant | None:
        """Insert unless the name is taken. Return None on a duplicate name."""
        ...

    async def touch(self, name: str, ts: datetime) -> Participant | None:
        """Move last_seen forward to ts. Return None if no such participant."""
        ...

    async def delete_idle(self, cutoff: datetime) -> list[Participant]:
        """Delete every participant with last_seen < cutoff and return them."""
        ...
