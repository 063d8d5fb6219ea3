from __future__ import annotations

from types import TracebackType
from typing import AsyncContextManager, Callable, Protocol, Self

from relay_chat.application.repositories.message import MessageReader, MessageWriter
from relay_chat.application.repositories.participant import (
    ParticipantReader,
    ParticipantWriter,
)


class UnitOfWork(Protocol):
    participants: ParticipantReader
    participants_w: ParticipantWriter
    messages: MessageReader
    messages_w: MessageWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...


# Opens a fresh unit of work; used by background workers outside a request.
UoWFactory = Callable[[], AsyncContextManager[UnitOfWork]]
