from __future__ import annotations

import logging
import uuid
from datetime import timedelta

from relay_chat.application.exceptions import ConflictError, NotFoundError
from relay_chat.application.policies import session_gate
from relay_chat.application.ports.clock import Clock, system_clock
from relay_chat.application.uow import UnitOfWork
from relay_chat.domain.entities.message import Message
from relay_chat.domain.entities.participant import Participant
from relay_chat.domain.value_objects.constants import ARRIVAL_TEXT, BROADCAST_TARGET
from relay_chat.domain.value_objects.enums import MessageKind
from relay_chat.services._boundary import persistence_boundary

logger = logging.getLogger(__name__)


@persistence_boundary
async def register(
    name: str,
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> Participant:
    """Create a participant and its arrival notice as one transaction.

    Raises ConflictError if the name is already taken. If the notice cannot
    be written the participant row is rolled back with it.
    """
    now = clock.now()
    try:
        participant = await uow.participants_w.insert(
            Participant(name=name, last_seen=now)
        )
        if participant is None:
            raise ConflictError(f"Participant {name!r} already exists")

        await uow.messages_w.insert(
            Message(
                id=uuid.uuid4(),
                author=name,
                to=BROADCAST_TARGET,
                text=ARRIVAL_TEXT,
                kind=MessageKind.STATUS,
                created_at=now,
            )
        )
        await uow.commit()
    except Exception:
        await uow.rollback()
        raise

    logger.info("Participant %r registered", name)
    return participant


@persistence_boundary
async def list_participants(uow: UnitOfWork) -> list[Participant]:
    return await uow.participants.list_all()


@persistence_boundary
async def exists(name: str, uow: UnitOfWork) -> bool:
    return await uow.participants.exists(name)


@persistence_boundary
async def authorize(claimed_name: str | None, uow: UnitOfWork) -> str:
    """Session Gate check with storage failures reported as PersistenceError."""
    return await session_gate.authorize(claimed_name, uow.participants)


@persistence_boundary
async def touch(
    name: str,
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> Participant:
    """Refresh last_seen. Never creates a participant."""
    participant = await uow.participants_w.touch(name, clock.now())
    if participant is None:
        await uow.rollback()
        raise NotFoundError(f"Participant {name!r} not found")
    await uow.commit()
    return participant


@persistence_boundary
async def evict_idle(
    threshold: timedelta,
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> list[Participant]:
    """Remove every participant idle for longer than threshold.

    Selection and removal are one statement, so a heartbeat that commits
    first keeps its participant, and one that commits later finds it gone.
    """
    cutoff = clock.now() - threshold
    evicted = await uow.participants_w.delete_idle(cutoff)
    await uow.commit()
    if evicted:
        logger.info(
            "Evicted %d idle participant(s): %s",
            len(evicted),
            ", ".join(p.name for p in evicted),
        )
    return evicted
