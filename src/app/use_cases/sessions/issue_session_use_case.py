"""
Issue Session Use Case

Turns a delegation (or direct ownership) into an ephemeral access session
bound to one profile slot of the pass.
"""

import logging
from datetime import timedelta
from typing import Optional

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.api.utils.jwt import build_session_access_url, generate_access_token
from src.app.services.clock import Clock
from src.app.services.locks import KeyedLock
from src.app.services.ownership_oracle import OwnershipOracle
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.resilience import CollaboratorError, call_with_timeout
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import generate_session_id, isoformat, normalize_address
from src.domain.entities import AccessSession, AuditEvent

from .dtos import IssueDirectSessionCommand, IssueSessionCommand, SessionGrant
from .instructions import issue_instructions
from .sweep_expired_sessions_use_case import sweep_pass

logger = logging.getLogger(__name__)


class IssueSessionUseCase:
    """
    Use case for issuing access sessions.

    Business Rules:
    - Only the delegate of an active, unexpired delegation may ask
    - Effective duration = min(requested, delegation remaining, max_duration)
    - Effective duration below min_duration fails with DURATION_TOO_SHORT
    - Issuance is serialized per pass; expired sessions of the pass are swept
      first so they never hold a slot
    - No free slot fails with RESOURCE_BUSY; requests are not queued
    - The response names the profile only; owner credentials never leave
      the broker
    """

    def __init__(
        self,
        uow: UnitOfWork,
        profile_allocator: ProfileAllocator,
        ownership_oracle: OwnershipOracle,
        clock: Clock,
        locks: KeyedLock,
        min_duration: int = ApplicationConfig.SESSION_MIN_SECONDS,
        max_duration: int = ApplicationConfig.SESSION_MAX_SECONDS,
    ):
        self.uow = uow
        self.profile_allocator = profile_allocator
        self.ownership_oracle = ownership_oracle
        self.clock = clock
        self.locks = locks
        self.min_duration = min_duration
        self.max_duration = max_duration

    async def execute(self, command: IssueSessionCommand) -> Result[SessionGrant]:
        """
        Issue a session from a delegation.

        Args:
            command: IssueSessionCommand with delegation, requester and duration

        Returns:
            Result with SessionGrant DTO, or Error
        """
        requester = normalize_address(command.requester_address)

        async with self.locks.hold(("delegation", command.delegation_id)):
            async with self.uow:
                delegation = await self.uow.delegations.get_by_id(command.delegation_id)
                if delegation is None:
                    return Return.err(
                        Error("DELEGATION_NOT_FOUND", "Delegation not found")
                    )

                if delegation.delegate_address != requester:
                    return Return.err(
                        Error("UNAUTHORIZED", "Only the delegate can open a session")
                    )

                now = self.clock.now()
                if not delegation.is_granting(now):
                    return Return.err(
                        Error("DELEGATION_EXPIRED", "Delegation is revoked or expired")
                    )

                effective = min(
                    command.duration_seconds,
                    delegation.remaining_seconds(now),
                    self.max_duration,
                )
                if effective < self.min_duration:
                    return Return.err(self._too_short(effective))

                pass_id = delegation.pass_id
                owner_address = delegation.creator_address

            # Revocation waits on the delegation lock, so the delegation is
            # still granting when the session commits
            async with self.locks.hold(("pass", pass_id)):
                async with self.uow:
                    return await self._open_session(
                        pass_id=pass_id,
                        delegation_id=command.delegation_id,
                        owner_address=owner_address,
                        grantee_address=requester,
                        duration_seconds=effective,
                    )

    async def execute_for_owner(self, command: IssueDirectSessionCommand) -> Result[SessionGrant]:
        """
        Issue a session to the pass owner, without a delegation.

        Args:
            command: IssueDirectSessionCommand with pass, owner and duration

        Returns:
            Result with SessionGrant DTO, or Error
        """
        owner = normalize_address(command.owner_address)

        effective = min(command.duration_seconds, self.max_duration)
        if effective < self.min_duration:
            return Return.err(self._too_short(effective))

        try:
            owns_pass = await call_with_timeout(
                "ownership oracle",
                self.ownership_oracle.owns_asset,
                owner,
                command.pass_id,
            )
        except CollaboratorError as e:
            return Return.err(Error("OWNERSHIP_ORACLE_UNAVAILABLE", str(e)))

        if not owns_pass:
            return Return.err(Error("NOT_OWNER", "Requester does not own the specified pass"))

        async with self.locks.hold(("pass", command.pass_id)):
            async with self.uow:
                return await self._open_session(
                    pass_id=command.pass_id,
                    delegation_id=None,
                    owner_address=owner,
                    grantee_address=owner,
                    duration_seconds=effective,
                )

    def _too_short(self, effective: int) -> Error:
        return Error(
            "DURATION_TOO_SHORT",
            f"Session would last {effective}s; minimum is {self.min_duration}s",
        )

    async def _open_session(
        self,
        pass_id: int,
        delegation_id: Optional[int],
        owner_address: str,
        grantee_address: str,
        duration_seconds: int,
    ) -> Result[SessionGrant]:
        """Caller holds the ("pass", pass_id) lock and has entered the uow."""
        now = self.clock.now()

        swept = await sweep_pass(self.uow, self.profile_allocator, pass_id, now)
        if swept:
            logger.info(f"Swept {swept} expired session(s) of pass {pass_id}")

        session_id = generate_session_id()
        handle = await self.profile_allocator.acquire(pass_id, session_id, grantee_address)
        if handle is None:
            logger.info(f"Pass {pass_id} busy; session for {grantee_address} rejected")
            return Return.err(
                Error("RESOURCE_BUSY", "Every profile of this pass is in use, try again later")
            )

        access_session = AccessSession(
            id=session_id,
            delegation_id=delegation_id,
            pass_id=pass_id,
            owner_address=owner_address,
            grantee_address=grantee_address,
            profile_handle=handle.handle_id,
            profile_name=handle.display_name,
            issued_at=now,
            expires_at=now + timedelta(seconds=duration_seconds),
        )

        try:
            await self.uow.access_sessions.create(access_session)

            audit = AuditEvent(
                actor_address=grantee_address,
                action="session_issued",
                event_metadata={
                    "pass_id": pass_id,
                    "delegation_id": delegation_id,
                    "profile_handle": handle.handle_id,
                    "duration_seconds": duration_seconds,
                },
                created_at=now,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
        except Exception:
            await self.profile_allocator.release(pass_id, handle.handle_id, session_id)
            raise

        logger.info(
            f"Session issued on pass {pass_id} to {grantee_address} "
            f"({handle.handle_id}, {duration_seconds}s)"
        )

        access_token = generate_access_token(
            access_session.id, grantee_address, access_session.expires_at
        )
        return Return.ok(
            SessionGrant(
                session_id=access_session.id,
                delegation_id=delegation_id,
                pass_id=pass_id,
                grantee_address=grantee_address,
                profile_handle=handle.handle_id,
                profile_name=handle.display_name,
                issued_at=isoformat(access_session.issued_at),
                expires_at=isoformat(access_session.expires_at),
                access_url=build_session_access_url(access_token),
                instructions=issue_instructions(access_session),
            )
        )
