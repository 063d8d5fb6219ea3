from __future__ import annotations

from dataclasses import dataclass

from relay_chat.domain.value_objects.enums import MessageKind


@dataclass(frozen=True, slots=True)
class MessageDraftDTO:
    """Fields a participant controls when posting or editing a message."""

    to: str
    text: str
    kind: MessageKind = MessageKind.CHAT
