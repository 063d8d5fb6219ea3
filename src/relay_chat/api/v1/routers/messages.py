from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query

from relay_chat.api.deps import ClaimedUser, ClockDep, LiveUser, UoWDep
from relay_chat.api.v1.schemas.message import (
    MessageCreatedResponse,
    MessageDraftRequest,
    MessageResponse,
)
from relay_chat.config import settings
from relay_chat.services import message_service

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    viewer: ClaimedUser,
    uow: UoWDep,
    limit: str | None = Query(None),
) -> list[MessageResponse]:
    # Accepted as a raw string so a malformed limit falls back to the default.
    effective_limit = message_service.normalize_limit(
        limit, settings.MESSAGES_DEFAULT_LIMIT, settings.MESSAGES_MAX_LIMIT,
    )
    messages = await message_service.list_visible(viewer, effective_limit, uow)
    return [MessageResponse.from_entity(m) for m in messages]


@router.post("", response_model=MessageCreatedResponse, status_code=201)
async def post_message(
    body: MessageDraftRequest,
    author: LiveUser,
    uow: UoWDep,
    clock: ClockDep,
) -> MessageCreatedResponse:
    msg = await message_service.post(author, body.to_dto(), uow, clock)
    return MessageCreatedResponse(id=msg.id)


@router.put("/{message_id}", response_model=MessageResponse)
async def edit_message(
    message_id: UUID,
    body: MessageDraftRequest,
    user: LiveUser,
    uow: UoWDep,
) -> MessageResponse:
    msg = await message_service.edit(message_id, user, body.to_dto(), uow)
    return MessageResponse.from_entity(msg)


@router.delete("/{message_id}", status_code=200)
async def delete_message(
    message_id: UUID,
    user: LiveUser,
    uow: UoWDep,
) -> dict[str, str]:
    await message_service.delete(message_id, user, uow)
    return {"status": "deleted"}
