"""
Check Access Use Case

Combines direct ownership and active delegations into one access answer.
"""

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.ownership_oracle import OwnershipOracle
from src.app.services.resilience import CollaboratorError, call_with_timeout
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_address
from src.domain.entities import AccessType

from .dtos import AccessCheckResponse


class CheckAccessUseCase:
    """
    Use case for verifying access to a pass.

    Business Rules:
    - Direct ownership wins regardless of delegation state
    - Delegated access needs a delegation for this pass that is active
      and not yet expired at the moment of the call
    - Read-only; nothing is cached between calls
    """

    def __init__(self, uow: UnitOfWork, ownership_oracle: OwnershipOracle, clock: Clock):
        self.uow = uow
        self.ownership_oracle = ownership_oracle
        self.clock = clock

    async def execute(self, address: str, pass_id: int) -> Result[AccessCheckResponse]:
        """
        Execute check access use case.

        Args:
            address: Address asking for access
            pass_id: Pass being accessed

        Returns:
            Result with AccessCheckResponse DTO, or Error
        """
        address = normalize_address(address)

        try:
            owns_nft = await call_with_timeout(
                "ownership oracle", self.ownership_oracle.owns_asset, address, pass_id
            )
        except CollaboratorError as e:
            return Return.err(Error("OWNERSHIP_ORACLE_UNAVAILABLE", str(e)))

        async with self.uow:
            delegations = await self.uow.delegations.get_by_delegate(address)

            now = self.clock.now()
            has_active_delegation = any(
                d.pass_id == pass_id and d.is_granting(now) for d in delegations
            )

        if owns_nft:
            access_type = AccessType.direct
        elif has_active_delegation:
            access_type = AccessType.delegated
        else:
            access_type = AccessType.none

        return Return.ok(
            AccessCheckResponse(
                address=address,
                pass_id=pass_id,
                has_access=owns_nft or has_active_delegation,
                owns_nft=owns_nft,
                has_active_delegation=has_active_delegation,
                access_type=access_type,
            )
        )
