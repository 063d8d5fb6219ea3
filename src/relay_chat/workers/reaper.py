"""Reaper: periodically evicts idle participants and posts departure notices."""
from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from enum import StrEnum

from relay_chat.application.ports.clock import Clock, system_clock
from relay_chat.application.uow import UoWFactory
from relay_chat.config import settings
from relay_chat.domain.entities.participant import Participant
from relay_chat.services import message_service, participant_service

logger = logging.getLogger(__name__)


class ReaperState(StrEnum):
    IDLE = "idle"
    SWEEPING = "sweeping"


class Reaper:
    """Background task owning eviction of idle participants.

    It talks to request handlers only through the registry's atomic
    operations; there is no lock shared with callers.
    """

    def __init__(
        self,
        uow_factory: UoWFactory,
        *,
        tick_period: float = settings.TICK_PERIOD,
        idle_threshold: float = settings.IDLE_THRESHOLD,
        clock: Clock = system_clock,
    ) -> None:
        self._uow_factory = uow_factory
        self._tick_period = tick_period
        self._idle_threshold = timedelta(seconds=idle_threshold)
        self._clock = clock
        self._state = ReaperState.IDLE
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> ReaperState:
        return self._state

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        self._task = asyncio.create_task(self.run(), name="participant-reaper")
        logger.info(
            "Reaper started (tick=%.1fs, idle_threshold=%.1fs)",
            self._tick_period,
            self._idle_threshold.total_seconds(),
        )

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Reaper stopped")

    async def run(self) -> None:
        while True:
            try:
                await self.sweep()
            except Exception:
                logger.exception("Reaper sweep failed")
            await asyncio.sleep(self._tick_period)

    async def sweep(self) -> list[Participant]:
        """Run one eviction pass and return the evicted participants."""
        self._state = ReaperState.SWEEPING
        try:
            async with self._uow_factory() as uow:
                evicted = await participant_service.evict_idle(
                    self._idle_threshold, uow, self._clock,
                )
            if evicted:
                await self._announce_departures(evicted)
            return evicted
        finally:
            self._state = ReaperState.IDLE

    async def _announce_departures(self, evicted: list[Participant]) -> None:
        names = [p.name for p in evicted]
        try:
            async with self._uow_factory() as uow:
                await message_service.record_departures(names, uow, self._clock)
            return
        except Exception:
            logger.warning(
                "Batch departure notice failed, retrying one by one",
                exc_info=True,
            )

        # Each notice in its own transaction so one failure spares the rest.
        for name in names:
            try:
                async with self._uow_factory() as uow:
                    await message_service.record_departure(name, uow, self._clock)
            except Exception:
                logger.exception("Failed to record departure for %r", name)


async def run_reaper() -> None:
    from relay_chat.infrastructure.db.uow import open_uow

    reaper = Reaper(open_uow)
    logger.info(
        "Reaper worker started (tick=%.1fs, idle_threshold=%.1fs)",
        settings.TICK_PERIOD,
        settings.IDLE_THRESHOLD,
    )
    await reaper.run()


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(run_reaper())


if __name__ == "__main__":
    main()
