from __future__ import annotations

from enum import StrEnum


class MessageKind(StrEnum):
    CHAT = "message"
    PRIVATE = "private_message"
    STATUS = "status"
