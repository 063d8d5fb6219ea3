from __future__ import annotations

from datetime import datetime

from sqlalchemy import Index, String
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from relay_chat.infrastructure.db.base import Base


class ParticipantModel(Base):
    __tablename__ = "participants"

    # Case-sensitive; the primary key enforces one record per name.
    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    last_seen: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_participants_last_seen", "last_seen"),
    )
