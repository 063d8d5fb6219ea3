from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from relay_chat.domain.value_objects.constants import BROADCAST_TARGET, DISPLAY_TIME_FORMAT
from relay_chat.domain.value_objects.enums import MessageKind


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    author: str
    to: str
    text: str
    kind: str
    created_at: datetime
    # Assigned by the store on insert; orders "most recent N" queries.
    seq: int | None = None

    @property
    def time(self) -> str:
        # Shown in the server's local time zone; created_at itself stays UTC.
        return self.created_at.astimezone().strftime(DISPLAY_TIME_FORMAT)

    @property
    def is_broadcast(self) -> bool:
        return self.to == BROADCAST_TARGET

    @property
    def is_status(self) -> bool:
        return self.kind == MessageKind.STATUS

    def visible_to(self, viewer: str) -> bool:
        return self.is_broadcast or self.to == viewer or self.author == viewer
