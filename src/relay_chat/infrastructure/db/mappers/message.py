from __future__ import annotations

from relay_chat.domain.entities.message import Message
from relay_chat.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        author=model.author,
        to=model.to,
        text=model.text,
        kind=model.kind,
        created_at=model.created_at,
        seq=model.seq,
    )


def entity_to_model(entity: Message) -> MessageModel:
    # seq is left to the database identity column.
    return MessageModel(
        id=entity.id,
        author=entity.author,
        to=entity.to,
        text=entity.text,
        kind=entity.kind,
        created_at=entity.created_at,
    )
