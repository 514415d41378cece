"""
Sweep Expired Sessions Use Case

Deletes expired sessions and frees the profile slots they held.
"""

import logging
from datetime import datetime
from typing import Iterable

from libs.result import Result, Return
from src.app.services.clock import Clock
from src.app.services.locks import KeyedLock
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AccessSession, AuditEvent

from .dtos import SweepSessionsResponse

logger = logging.getLogger(__name__)


async def release_slots(
    profile_allocator: ProfileAllocator, sessions: Iterable[AccessSession]
) -> None:
    for access_session in sessions:
        await profile_allocator.release(
            access_session.pass_id, access_session.profile_handle, access_session.id
        )


async def sweep_pass(
    uow: UnitOfWork, profile_allocator: ProfileAllocator, pass_id: int, now: datetime
) -> int:
    """
    Delete the expired sessions of one pass, commit, then free their slots.

    The caller holds the ("pass", pass_id) lock and has entered the uow.
    """
    expired = await uow.access_sessions.get_expired(now, pass_id=pass_id)
    if not expired:
        return 0

    for access_session in expired:
        await uow.access_sessions.delete(access_session)

    audit = AuditEvent(
        action="sessions_swept",
        event_metadata={"pass_id": pass_id, "swept": len(expired)},
        created_at=now,
    )
    await uow.audit_events.create(audit)
    await uow.commit()

    await release_slots(profile_allocator, expired)
    return len(expired)


class SweepExpiredSessionsUseCase:
    """
    Use case for sweeping expired sessions.

    Business Rules:
    - Every session with expires_at <= now is removed
    - Each pass is swept under its pass lock, so a sweep never races an
      issuance for the same slots
    - Runs periodically in the background and on demand from the admin API
    """

    def __init__(
        self,
        uow: UnitOfWork,
        profile_allocator: ProfileAllocator,
        clock: Clock,
        locks: KeyedLock,
    ):
        self.uow = uow
        self.profile_allocator = profile_allocator
        self.clock = clock
        self.locks = locks

    async def execute(self) -> Result[SweepSessionsResponse]:
        now = self.clock.now()

        async with self.uow:
            expired = await self.uow.access_sessions.get_expired(now)
            pass_ids = sorted({s.pass_id for s in expired})

        count = 0
        for pass_id in pass_ids:
            async with self.locks.hold(("pass", pass_id)):
                async with self.uow:
                    count += await sweep_pass(self.uow, self.profile_allocator, pass_id, now)

        if count:
            logger.info(f"Swept {count} expired session(s) across {len(pass_ids)} pass(es)")
        return Return.ok(SweepSessionsResponse(swept=count))
