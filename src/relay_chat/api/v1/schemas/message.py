from __future__ import annotations

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from relay_chat.api.v1.schemas.common import strip_markup
from relay_chat.application.dto.message import MessageDraftDTO
from relay_chat.domain.entities.message import Message
from relay_chat.domain.value_objects.enums import MessageKind


class MessageDraftRequest(BaseModel):
    """Body of POST /messages and PUT /messages/{id}."""

    model_config = ConfigDict(str_strip_whitespace=True)

    to: str = Field(min_length=1, max_length=255)
    text: str = Field(min_length=1)
    type: Literal["message", "private_message"]

    # Markup is removed before the blank check, so "<p></p>" is rejected.
    @field_validator("to", "text", "type", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> Any:
        return strip_markup(value)

    def to_dto(self) -> MessageDraftDTO:
        return MessageDraftDTO(to=self.to, text=self.text, kind=MessageKind(self.type))


class MessageCreatedResponse(BaseModel):
    id: UUID


class MessageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    from_: str = Field(alias="from")
    to: str
    text: str
    type: str
    time: str

    @classmethod
    def from_entity(cls, msg: Message) -> MessageResponse:
        return cls(
            id=msg.id,
            from_=msg.author,
            to=msg.to,
            text=msg.text,
            type=str(msg.kind),
            time=msg.time,
        )
