"""
Create Delegation Use Case

Grants a delegate time-bounded access to a pass the creator owns.
"""

import logging
from datetime import timedelta

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.ownership_oracle import OwnershipOracle
from src.app.services.resilience import CollaboratorError, call_with_timeout
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_address
from src.domain.entities import AuditEvent, Delegation

from .dtos import CreateDelegationCommand, CreateDelegationResponse, DelegationInfo

logger = logging.getLogger(__name__)


class CreateDelegationUseCase:
    """
    Use case for creating a delegation.

    Business Rules:
    - Creator must own the pass according to the ownership oracle
    - Duration must lie within [min_duration, max_duration] seconds
    - Creator cannot delegate to themselves
    - Record and audit event are committed together or not at all
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ownership_oracle: OwnershipOracle,
        clock: Clock,
        min_duration: int = ApplicationConfig.DELEGATION_MIN_SECONDS,
        max_duration: int = ApplicationConfig.DELEGATION_MAX_SECONDS,
    ):
        self.uow = uow
        self.ownership_oracle = ownership_oracle
        self.clock = clock
        self.min_duration = min_duration
        self.max_duration = max_duration

    async def execute(self, command: CreateDelegationCommand) -> Result[CreateDelegationResponse]:
        """
        Execute create delegation use case.

        Args:
            command: CreateDelegationCommand with pass, addresses and duration

        Returns:
            Result with CreateDelegationResponse DTO, or Error
        """
        creator = normalize_address(command.creator_address)
        delegate = normalize_address(command.delegate_address)

        if not self.min_duration <= command.duration_seconds <= self.max_duration:
            return Return.err(
                Error(
                    "DURATION_OUT_OF_RANGE",
                    f"Duration must be between {self.min_duration} and "
                    f"{self.max_duration} seconds",
                )
            )

        if creator == delegate:
            return Return.err(
                Error("SELF_DELEGATION_FORBIDDEN", "Cannot delegate a pass to yourself")
            )

        try:
            owns_pass = await call_with_timeout(
                "ownership oracle",
                self.ownership_oracle.owns_asset,
                creator,
                command.pass_id,
            )
        except CollaboratorError as e:
            return Return.err(Error("OWNERSHIP_ORACLE_UNAVAILABLE", str(e)))

        if not owns_pass:
            return Return.err(
                Error("NOT_OWNER", "Creator does not own the specified pass")
            )

        async with self.uow:
            now = self.clock.now()
            delegation = Delegation(
                pass_id=command.pass_id,
                creator_address=creator,
                delegate_address=delegate,
                created_at=now,
                expires_at=now + timedelta(seconds=command.duration_seconds),
                is_active=True,
            )
            delegation = await self.uow.delegations.create(delegation)

            audit = AuditEvent(
                actor_address=creator,
                action="delegation_created",
                event_metadata={
                    "delegation_id": delegation.id,
                    "pass_id": command.pass_id,
                    "delegate_address": delegate,
                    "duration_seconds": command.duration_seconds,
                },
                created_at=now,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

        logger.info(
            f"Delegation {delegation.id} created: pass {command.pass_id} "
            f"{creator} -> {delegate} for {command.duration_seconds}s"
        )
        return Return.ok(
            CreateDelegationResponse(delegation=DelegationInfo.from_entity(delegation))
        )
