from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from relay_chat.api.v1.schemas.common import strip_markup
from relay_chat.domain.entities.participant import Participant


class RegisterParticipantRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> Any:
        return strip_markup(value)


class ParticipantResponse(BaseModel):
    name: str
    last_status: int  # epoch milliseconds

    @classmethod
    def from_entity(cls, participant: Participant) -> ParticipantResponse:
        return cls(
            name=participant.name,
            last_status=int(participant.last_seen.timestamp() * 1000),
        )
