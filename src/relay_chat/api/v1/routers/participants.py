from __future__ import annotations

from fastapi import APIRouter

from relay_chat.api.deps import ClockDep, UoWDep
from relay_chat.api.v1.schemas.participant import (
    ParticipantResponse,
    RegisterParticipantRequest,
)
from relay_chat.services import participant_service

router = APIRouter(prefix="/api/v1/participants", tags=["participants"])


@router.post("", response_model=ParticipantResponse, status_code=201)
async def register_participant(
    body: RegisterParticipantRequest,
    uow: UoWDep,
    clock: ClockDep,
) -> ParticipantResponse:
    participant = await participant_service.register(body.name, uow, clock)
    return ParticipantResponse.from_entity(participant)


@router.get("", response_model=list[ParticipantResponse])
async def list_participants(uow: UoWDep) -> list[ParticipantResponse]:
    participants = await participant_service.list_participants(uow)
    return [ParticipantResponse.from_entity(p) for p in participants]
