"""
Session Sweeper

Background task that sweeps expired access sessions on a fixed interval,
independent of request traffic. At startup it also hands the live sessions
their profile slots back.
"""

import asyncio
import logging
from typing import Callable, Optional

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.clock import Clock
from src.app.services.locks import KeyedLock
from src.app.services.profile_allocator import ProfileAllocator
from src.app.use_cases.sessions import RestoreProfileSlotsUseCase, SweepExpiredSessionsUseCase

logger = logging.getLogger(__name__)


class SessionSweeper:
    def __init__(
        self,
        session_factory: Callable,
        profile_allocator: ProfileAllocator,
        clock: Clock,
        locks: KeyedLock,
        interval_seconds: float,
    ):
        self.session_factory = session_factory
        self.profile_allocator = profile_allocator
        self.clock = clock
        self.locks = locks
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    async def restore_slots(self) -> int:
        async with self.session_factory() as session:
            use_case = RestoreProfileSlotsUseCase(
                SqlAlchemyUnitOfWork(session), self.profile_allocator, self.clock
            )
            result = await use_case.execute()
        return result.value

    async def run_once(self) -> int:
        async with self.session_factory() as session:
            use_case = SweepExpiredSessionsUseCase(
                SqlAlchemyUnitOfWork(session), self.profile_allocator, self.clock, self.locks
            )
            result = await use_case.execute()
        return result.value.swept

    async def _run_forever(self):
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.run_once()
            except Exception:
                # Keep the loop alive; the next tick retries
                logger.exception("Session sweep failed")

    def start(self):
        if self._task is None:
            logger.info(f"Session sweeper started (every {self.interval_seconds}s)")
            self._task = asyncio.create_task(self._run_forever())

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Session sweeper stopped")
