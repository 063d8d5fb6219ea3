from __future__ import annotations

import uuid
from typing import Any

from relay_chat.application.dto.message import MessageDraftDTO
from relay_chat.application.exceptions import (
    ForbiddenError,
    NotFoundError,
    RejectedError,
    ValidationError,
)
from relay_chat.application.ports.clock import Clock, system_clock
from relay_chat.application.uow import UnitOfWork
from relay_chat.domain.entities.message import Message
from relay_chat.domain.value_objects.constants import BROADCAST_TARGET, DEPARTURE_TEXT
from relay_chat.domain.value_objects.enums import MessageKind
from relay_chat.services._boundary import persistence_boundary


def normalize_limit(raw: Any, default: int, maximum: int | None = None) -> int:
    """Coerce a caller-supplied limit into a positive int.

    Missing, non-numeric and non-positive values fall back to default.
    """
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return default
    if limit <= 0:
        return default
    if maximum is not None:
        limit = min(limit, maximum)
    return limit


def _assert_author_draft(draft: MessageDraftDTO) -> None:
    if draft.kind == MessageKind.STATUS:
        raise ValidationError("Status messages are system-generated")


@persistence_boundary
async def post(
    author: str,
    draft: MessageDraftDTO,
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> Message:
    _assert_author_draft(draft)

    # Membership is re-checked on every post, inside the writing transaction.
    if not await uow.participants.exists(author):
        raise RejectedError(f"Participant {author!r} is not registered")

    msg = await uow.messages_w.insert(
        Message(
            id=uuid.uuid4(),
            author=author,
            to=draft.to,
            text=draft.text,
            kind=draft.kind,
            created_at=clock.now(),
        )
    )
    await uow.commit()
    return msg


@persistence_boundary
async def list_visible(viewer: str, limit: int, uow: UnitOfWork) -> list[Message]:
    return await uow.messages.list_visible(
        viewer, broadcast=BROADCAST_TARGET, limit=limit,
    )


async def _get_owned_for_update(
    message_id: uuid.UUID,
    by_name: str,
    uow: UnitOfWork,
) -> Message:
    msg = await uow.messages_w.get_for_update(message_id)
    if msg is None:
        raise NotFoundError("Message not found")
    if msg.author != by_name:
        raise ForbiddenError("Only the author may change this message")
    if msg.is_status:
        raise ForbiddenError("Status messages cannot be changed")
    return msg


@persistence_boundary
async def edit(
    message_id: uuid.UUID,
    by_name: str,
    draft: MessageDraftDTO,
    uow: UnitOfWork,
) -> Message:
    """Replace to/text/kind of a message owned by by_name.

    The row stays locked from the ownership check until commit.
    """
    _assert_author_draft(draft)
    try:
        await _get_owned_for_update(message_id, by_name, uow)
        updated = await uow.messages_w.update(
            message_id, to=draft.to, text=draft.text, kind=draft.kind,
        )
        await uow.commit()
    except Exception:
        await uow.rollback()
        raise
    return updated


@persistence_boundary
async def delete(message_id: uuid.UUID, by_name: str, uow: UnitOfWork) -> None:
    try:
        await _get_owned_for_update(message_id, by_name, uow)
        await uow.messages_w.delete(message_id)
        await uow.commit()
    except Exception:
        await uow.rollback()
        raise


def _departure_notice(name: str, clock: Clock) -> Message:
    return Message(
        id=uuid.uuid4(),
        author=name,
        to=BROADCAST_TARGET,
        text=DEPARTURE_TEXT,
        kind=MessageKind.STATUS,
        created_at=clock.now(),
    )


@persistence_boundary
async def record_departure(
    name: str,
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> Message:
    """System path: no membership check, the participant is already gone."""
    msg = await uow.messages_w.insert(_departure_notice(name, clock))
    await uow.commit()
    return msg


@persistence_boundary
async def record_departures(
    names: list[str],
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> list[Message]:
    if not names:
        return []
    msgs = await uow.messages_w.insert_many(
        [_departure_notice(name, clock) for name in names]
    )
    await uow.commit()
    return msgs
