"""Import all models so metadata.create_all can discover them via Base.metadata."""
from relay_chat.infrastructure.db.models.message import MessageModel
from relay_chat.infrastructure.db.models.participant import ParticipantModel

__all__ = [
    "MessageModel",
    "ParticipantModel",
]
