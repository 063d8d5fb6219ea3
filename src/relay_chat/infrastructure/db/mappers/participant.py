from __future__ import annotations

from relay_chat.domain.entities.participant import Participant
from relay_chat.infrastructure.db.models.participant import ParticipantModel


def model_to_entity(model: ParticipantModel) -> Participant:
    return Participant(
        name=model.name,
        last_seen=model.last_seen,
    )


def entity_to_model(entity: Participant) -> ParticipantModel:
    return ParticipantModel(
        name=entity.name,
        last_seen=entity.last_seen,
    )
