from __future__ import annotations

from datetime import datetime

from sqlalchemy import case, delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from relay_chat.domain.entities.participant import Participant
from relay_chat.infrastructure.db.mappers import participant as mapper
from relay_chat.infrastructure.db.models.participant import ParticipantModel


class ParticipantReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, name: str) -> bool:
        stmt = (
            select(ParticipantModel.name)
            .where(ParticipantModel.name == name)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[Participant]:
        stmt = select(ParticipantModel).order_by(ParticipantModel.name)
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class ParticipantWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, participant: Participant) -> Participant | None:
        """Insert unless the name exists. Returns None on conflict."""
        stmt = (
            pg_insert(ParticipantModel)
            .values(name=participant.name, last_seen=participant.last_seen)
            .on_conflict_do_nothing(index_elements=[ParticipantModel.name])
            .returning(ParticipantModel)
        )
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()
        return mapper.model_to_entity(row) if row is not None else None

    async def touch(self, name: str, ts: datetime) -> Participant | None:
        # Keep last_seen non-decreasing even if the clock steps back.
        stmt = (
            update(ParticipantModel)
            .where(ParticipantModel.name == name)
            .values(
                last_seen=case(
                    (ParticipantModel.last_seen < ts, ts),
                    else_=ParticipantModel.last_seen,
                )
            )
            .returning(ParticipantModel)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()
        return mapper.model_to_entity(row) if row is not None else None

    async def delete_idle(self, cutoff: datetime) -> list[Participant]:
        # Single statement: rows refreshed by a concurrent touch no longer match.
        stmt = (
            delete(ParticipantModel)
            .where(ParticipantModel.last_seen < cutoff)
            .returning(ParticipantModel)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]
