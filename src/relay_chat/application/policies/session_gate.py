from __future__ import annotations

from relay_chat.application.exceptions import UnauthenticatedError
from relay_chat.application.repositories.participant import ParticipantReader


async def authorize(
    claimed_name: str | None,
    participants: ParticipantReader,
) -> str:
    """Return the caller's name if it belongs to a live participant.

    Every mutating operation except registration goes through here. The
    check is evaluated against the store each time, never cached.
    """
    name = (claimed_name or "").strip()
    if not name:
        raise UnauthenticatedError("Missing participant name")

    if not await participants.exists(name):
        raise UnauthenticatedError(f"Participant {name!r} is not registered")

    return name
