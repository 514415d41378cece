"""
Revoke Delegation Use Case

Ends a delegation early and tears down the sessions it authorized.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.locks import KeyedLock
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions.sweep_expired_sessions_use_case import release_slots
from src.domain.base import isoformat, normalize_address
from src.domain.entities import AuditEvent

from .dtos import RevokeDelegationResponse

logger = logging.getLogger(__name__)


class RevokeDelegationUseCase:
    """
    Use case for revoking a delegation.

    Business Rules:
    - Only the creator may revoke
    - A revoked delegation stays revoked; a second revoke fails with
      ALREADY_REVOKED and is audited separately from the first
    - Live sessions issued from the delegation are removed and their
      profile slots freed
    - Revocations of one delegation are serialized, and the session
      teardown runs under the pass lock like every other slot change
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

    async def execute(
        self, delegation_id: int, requester_address: str
    ) -> Result[RevokeDelegationResponse]:
        """
        Execute revoke delegation use case.

        Args:
            delegation_id: Delegation to revoke
            requester_address: Address asking for the revocation

        Returns:
            Result with RevokeDelegationResponse DTO, or Error
        """
        requester = normalize_address(requester_address)

        async with self.locks.hold(("delegation", delegation_id)):
            async with self.uow:
                delegation = await self.uow.delegations.get_by_id(delegation_id)
                if delegation is None:
                    return Return.err(
                        Error("DELEGATION_NOT_FOUND", "Delegation not found")
                    )

                if delegation.creator_address != requester:
                    return Return.err(
                        Error("NOT_CREATOR", "Only the delegation creator can revoke it")
                    )

                now = self.clock.now()

                if not delegation.is_active:
                    audit = AuditEvent(
                        actor_address=requester,
                        action="delegation_revoke_repeated",
                        event_metadata={
                            "delegation_id": delegation_id,
                            "revoked_at": isoformat(delegation.revoked_at),
                        },
                        created_at=now,
                    )
                    await self.uow.audit_events.create(audit)
                    await self.uow.commit()

                    logger.info(f"Delegation {delegation_id} revoke repeated; already revoked")
                    return Return.err(
                        Error("ALREADY_REVOKED", "Delegation has already been revoked")
                    )

                pass_id = delegation.pass_id

            async with self.locks.hold(("pass", pass_id)):
                async with self.uow:
                    delegation = await self.uow.delegations.get_by_id(delegation_id)
                    delegation.is_active = False
                    delegation.revoked_at = now
                    await self.uow.delegations.update(delegation)

                    sessions = await self.uow.access_sessions.get_live_by_delegation(
                        delegation_id, now
                    )
                    for access_session in sessions:
                        await self.uow.access_sessions.delete(access_session)

                    audit = AuditEvent(
                        actor_address=requester,
                        action="delegation_revoked",
                        event_metadata={
                            "delegation_id": delegation_id,
                            "pass_id": pass_id,
                            "sessions_revoked": len(sessions),
                        },
                        created_at=now,
                    )
                    await self.uow.audit_events.create(audit)

                    await self.uow.commit()

                    await release_slots(self.profile_allocator, sessions)

        logger.info(
            f"Delegation {delegation_id} revoked by {requester}; "
            f"{len(sessions)} session(s) closed"
        )
        return Return.ok(
            RevokeDelegationResponse(
                delegation_id=delegation_id,
                revoked=True,
                revoked_at=isoformat(now),
                sessions_revoked=len(sessions),
            )
        )
