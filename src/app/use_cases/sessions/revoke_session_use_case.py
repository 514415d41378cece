"""
Revoke Session Use Case

Ends a live session early and frees its profile slot.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.locks import KeyedLock
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_address
from src.domain.entities import AuditEvent

from .dtos import RevokeSessionResponse
from .sweep_expired_sessions_use_case import release_slots

logger = logging.getLogger(__name__)


class RevokeSessionUseCase:
    """
    Use case for revoking an access session.

    Business Rules:
    - The pass owner behind the session or the grantee may revoke
    - Idempotent: an unknown or already removed session reports revoked=False
    - Removal and slot release happen under the pass lock; the slot is
      released once the removal is committed
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

    async def execute(self, session_id: str, requester_address: str) -> Result[RevokeSessionResponse]:
        requester = normalize_address(requester_address)
        not_revoked = Return.ok(RevokeSessionResponse(session_id=session_id, revoked=False))

        async with self.uow:
            access_session = await self.uow.access_sessions.get_by_id(session_id)
            if access_session is None:
                return not_revoked

            if requester not in (access_session.owner_address, access_session.grantee_address):
                return Return.err(
                    Error("UNAUTHORIZED", "Only the pass owner or the grantee can revoke a session")
                )

            pass_id = access_session.pass_id

        async with self.locks.hold(("pass", pass_id)):
            async with self.uow:
                access_session = await self.uow.access_sessions.get_by_id(session_id)
                if access_session is None:
                    return not_revoked

                await self.uow.access_sessions.delete(access_session)

                audit = AuditEvent(
                    actor_address=requester,
                    action="session_revoked",
                    event_metadata={
                        "pass_id": access_session.pass_id,
                        "delegation_id": access_session.delegation_id,
                        "profile_handle": access_session.profile_handle,
                    },
                    created_at=self.clock.now(),
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()

                await release_slots(self.profile_allocator, [access_session])

        logger.info(f"Session on pass {pass_id} revoked by {requester}")
        return Return.ok(RevokeSessionResponse(session_id=session_id, revoked=True))
