from __future__ import annotations

from fastapi import APIRouter

from relay_chat.api.deps import ClaimedUser, ClockDep, UoWDep
from relay_chat.api.v1.schemas.participant import ParticipantResponse
from relay_chat.services import participant_service

router = APIRouter(prefix="/api/v1/status", tags=["status"])


@router.post("", response_model=ParticipantResponse)
async def refresh_status(
    user: ClaimedUser,
    uow: UoWDep,
    clock: ClockDep,
) -> ParticipantResponse:
    """Heartbeat. The conditional update doubles as the liveness check."""
    participant = await participant_service.touch(user, uow, clock)
    return ParticipantResponse.from_entity(participant)
