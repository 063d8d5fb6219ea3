"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends, Header

from relay_chat.application.ports.clock import Clock, system_clock
from relay_chat.infrastructure.db.session import AsyncSessionLocal
from relay_chat.infrastructure.db.uow import SqlAlchemyUoW
from relay_chat.services import participant_service


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUoW(session) as uow:
            yield uow


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_clock() -> Clock:
    return system_clock


ClockDep = Annotated[Clock, Depends(get_clock)]


def get_claimed_user(user: Annotated[str | None, Header()] = None) -> str:
    """Caller identity from the `User` header, trusted as given."""
    return (user or "").strip()


ClaimedUser = Annotated[str, Depends(get_claimed_user)]


async def get_live_user(claimed: ClaimedUser, uow: UoWDep) -> str:
    return await participant_service.authorize(claimed, uow)


LiveUser = Annotated[str, Depends(get_live_user)]
