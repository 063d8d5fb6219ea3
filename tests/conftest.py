"""Shared test fixtures."""
from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator
from uuid import UUID

import pytest
from sqlalchemy.exc import OperationalError

from relay_chat.domain.entities.message import Message
from relay_chat.domain.entities.participant import Participant
from relay_chat.domain.value_objects.constants import BROADCAST_TARGET
from relay_chat.domain.value_objects.enums import MessageKind


def _db_down(statement: str) -> OperationalError:
    return OperationalError(statement, {}, Exception("connection refused"))


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += timedelta(seconds=seconds)

    def set(self, when: datetime) -> None:
        self._now = when


def make_message(
    *,
    author: str = "Alice",
    to: str = BROADCAST_TARGET,
    text: str = "hello",
    kind: str = MessageKind.CHAT,
    created_at: datetime | None = None,
) -> Message:
    return Message(
        id=uuid.uuid4(),
        author=author,
        to=to,
        text=text,
        kind=kind,
        created_at=created_at or datetime.now(timezone.utc),
    )


@dataclass
class FakeDatabase:
    """Committed state shared by every FakeUoW opened on it."""
    participants: dict[str, Participant] = field(default_factory=dict)
    messages: list[Message] = field(default_factory=list)
    next_seq: int = 1
    # failure injection
    fail_message_inserts: bool = False
    fail_batch_inserts: bool = False
    fail_departures_for: set[str] = field(default_factory=set)
    fail_reads: bool = False

    def snapshot(self) -> tuple[dict[str, Participant], list[Message], int]:
        return dict(self.participants), list(self.messages), self.next_seq

    def restore(self, snap: tuple[dict[str, Participant], list[Message], int]) -> None:
        participants, messages, next_seq = snap
        self.participants = dict(participants)
        self.messages = list(messages)
        self.next_seq = next_seq

    def add_message(self, message: Message) -> Message:
        stored = replace(message, seq=self.next_seq)
        self.next_seq += 1
        self.messages.append(stored)
        return stored


@dataclass
class FakeParticipantReader:
    _db: FakeDatabase

    async def exists(self, name: str) -> bool:
        if self._db.fail_reads:
            raise _db_down("SELECT participants")
        return name in self._db.participants

    async def list_all(self) -> list[Participant]:
        if self._db.fail_reads:
            raise _db_down("SELECT participants")
        return [self._db.participants[n] for n in sorted(self._db.participants)]


@dataclass
class FakeParticipantWriter:
    _db: FakeDatabase

    async def insert(self, participant: Participant) -> Participant | None:
        if participant.name in self._db.participants:
            return None
        self._db.participants[participant.name] = participant
        return participant

    async def touch(self, name: str, ts: datetime) -> Participant | None:
        current = self._db.participants.get(name)
        if current is None:
            return None
        updated = replace(current, last_seen=max(current.last_seen, ts))
        self._db.participants[name] = updated
        return updated

    async def delete_idle(self, cutoff: datetime) -> list[Participant]:
        idle = [p for p in self._db.participants.values() if p.last_seen < cutoff]
        for p in idle:
            del self._db.participants[p.name]
        return idle


@dataclass
class FakeMessageReader:
    _db: FakeDatabase

    async def list_visible(self, viewer: str, *, broadcast: str, limit: int) -> list[Message]:
        if self._db.fail_reads:
            raise _db_down("SELECT messages")
        assert broadcast == BROADCAST_TARGET
        visible = [m for m in self._db.messages if m.visible_to(viewer)]
        visible.sort(key=lambda m: m.seq or 0)
        return visible[-limit:]


@dataclass
class FakeMessageWriter:
    _db: FakeDatabase

    async def insert(self, message: Message) -> Message:
        if self._db.fail_message_inserts:
            raise _db_down("INSERT INTO messages")
        if message.kind == MessageKind.STATUS and message.author in self._db.fail_departures_for:
            raise _db_down("INSERT INTO messages")
        return self._db.add_message(message)

    async def insert_many(self, messages: list[Message]) -> list[Message]:
        if self._db.fail_message_inserts or self._db.fail_batch_inserts:
            raise _db_down("INSERT INTO messages")
        return [self._db.add_message(m) for m in messages]

    async def get_for_update(self, message_id: UUID) -> Message | None:
        for m in self._db.messages:
            if m.id == message_id:
                return m
        return None

    async def update(self, message_id: UUID, *, to: str, text: str, kind: str) -> Message:
        for i, m in enumerate(self._db.messages):
            if m.id == message_id:
                self._db.messages[i] = replace(m, to=to, text=text, kind=kind)
                return self._db.messages[i]
        raise AssertionError("update of a missing message")

    async def delete(self, message_id: UUID) -> None:
        self._db.messages = [m for m in self._db.messages if m.id != message_id]


class FakeUoW:
    """In-memory UoW for unit tests. Rollback restores the last committed state."""

    def __init__(self, db: FakeDatabase | None = None) -> None:
        self.db = db or FakeDatabase()
        self.participants = FakeParticipantReader(self.db)
        self.participants_w = FakeParticipantWriter(self.db)
        self.messages = FakeMessageReader(self.db)
        self.messages_w = FakeMessageWriter(self.db)
        self._snapshot = self.db.snapshot()
        self._committed = False
        self._rolled_back = False

    async def commit(self) -> None:
        self._snapshot = self.db.snapshot()
        self._committed = True

    async def rollback(self) -> None:
        self.db.restore(self._snapshot)
        self._rolled_back = True

    async def __aenter__(self) -> FakeUoW:
        self._snapshot = self.db.snapshot()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            await self.rollback()


def make_uow_factory(db: FakeDatabase):
    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUoW]:
        async with FakeUoW(db) as uow:
            yield uow

    return _factory


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def uow(db: FakeDatabase) -> FakeUoW:
    return FakeUoW(db)
