"""
Get Delegation Use Case
"""

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork

from .dtos import DelegationDetailResponse, DelegationInfo


class GetDelegationUseCase:
    """Fetch one delegation with its read-time granting state"""

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, delegation_id: int) -> Result[DelegationDetailResponse]:
        async with self.uow:
            delegation = await self.uow.delegations.get_by_id(delegation_id)
            if delegation is None:
                return Return.err(Error("DELEGATION_NOT_FOUND", "Delegation not found"))

            now = self.clock.now()
            return Return.ok(
                DelegationDetailResponse(
                    delegation=DelegationInfo.from_entity(delegation),
                    is_granting=delegation.is_granting(now),
                    remaining_seconds=delegation.remaining_seconds(now),
                )
            )
