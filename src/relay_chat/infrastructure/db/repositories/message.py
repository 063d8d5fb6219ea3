from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from relay_chat.domain.entities.message import Message
from relay_chat.infrastructure.db.mappers import message as mapper
from relay_chat.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_visible(
        self,
        viewer: str,
        *,
        broadcast: str,
        limit: int,
    ) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(
                or_(
                    MessageModel.to == broadcast,
                    MessageModel.to == viewer,
                    MessageModel.author == viewer,
                )
            )
            .order_by(MessageModel.seq.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        newest_first = [mapper.model_to_entity(m) for m in result.scalars().all()]
        return newest_first[::-1]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def insert_many(self, messages: list[Message]) -> list[Message]:
        models = [mapper.entity_to_model(m) for m in messages]
        self._session.add_all(models)
        await self._session.flush()
        return [mapper.model_to_entity(m) for m in models]

    async def get_for_update(self, message_id: UUID) -> Message | None:
        stmt = (
            select(MessageModel)
            .where(MessageModel.id == message_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def update(
        self,
        message_id: UUID,
        *,
        to: str,
        text: str,
        kind: str,
    ) -> Message:
        stmt = (
            update(MessageModel)
            .where(MessageModel.id == message_id)
            .values(to=to, text=text, kind=kind)
            .returning(MessageModel)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return mapper.model_to_entity(result.scalar_one())

    async def delete(self, message_id: UUID) -> None:
        stmt = delete(MessageModel).where(MessageModel.id == message_id)
        await self._session.execute(stmt)
