"""
Redeem Session Use Case

Grantee presents a session and receives the brokered profile access.
"""

import logging

from libs.result import Error, Result, Return
from src.api.utils.jwt import verify_access_token
from src.app.services.clock import Clock
from src.app.services.locks import KeyedLock
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import isoformat, normalize_address
from src.domain.entities import AuditEvent

from .dtos import ProfileAccessGrant
from .instructions import redeem_instructions
from .sweep_expired_sessions_use_case import release_slots

logger = logging.getLogger(__name__)


class RedeemSessionUseCase:
    """
    Use case for redeeming an access session.

    Business Rules:
    - Only the grantee may redeem
    - Redeeming a live session is idempotent (same profile every time)
    - An expired session fails with SESSION_EXPIRED and is removed at once
      under the pass lock, so the next attempt gets SESSION_NOT_FOUND
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

    async def execute(self, session_id: str, presenting_address: str) -> Result[ProfileAccessGrant]:
        """
        Execute redeem session use case.

        Args:
            session_id: Session being presented
            presenting_address: Address presenting it

        Returns:
            Result with ProfileAccessGrant DTO, or Error
        """
        presenter = normalize_address(presenting_address)
        now = self.clock.now()

        async with self.uow:
            access_session = await self.uow.access_sessions.get_by_id(session_id)
            if access_session is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            if access_session.grantee_address != presenter:
                return Return.err(
                    Error("UNAUTHORIZED", "Session was issued to a different address")
                )

            if access_session.is_live(now):
                return Return.ok(
                    ProfileAccessGrant(
                        session_id=access_session.id,
                        profile_handle=access_session.profile_handle,
                        profile_name=access_session.profile_name,
                        expires_at=isoformat(access_session.expires_at),
                        instructions=redeem_instructions(access_session),
                    )
                )

            pass_id = access_session.pass_id

        await self._remove_expired(session_id, presenter, pass_id, now)
        return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

    async def execute_with_token(
        self, access_token: str, presenting_address: str
    ) -> Result[ProfileAccessGrant]:
        """
        Redeem through the token carried in a session's access URL.

        The token only identifies the session; expiry is judged by the
        session itself so the SESSION_EXPIRED path behaves the same.
        """
        payload = verify_access_token(access_token, verify_exp=False)
        if payload is None or "sid" not in payload:
            return Return.err(Error("INVALID_ACCESS_TOKEN", "Access token is invalid"))

        return await self.execute(payload["sid"], presenting_address)

    async def _remove_expired(self, session_id, presenter, pass_id, now):
        async with self.locks.hold(("pass", pass_id)):
            async with self.uow:
                # A sweep may have removed it while we waited for the lock
                access_session = await self.uow.access_sessions.get_by_id(session_id)
                if access_session is None or access_session.is_live(now):
                    return

                await self.uow.access_sessions.delete(access_session)
                audit = AuditEvent(
                    actor_address=presenter,
                    action="session_expired",
                    event_metadata={
                        "pass_id": access_session.pass_id,
                        "profile_handle": access_session.profile_handle,
                    },
                    created_at=now,
                )
                await self.uow.audit_events.create(audit)
                await self.uow.commit()

                await release_slots(self.profile_allocator, [access_session])

        logger.info(f"Expired session on pass {pass_id} swept on redeem")
