"""
List Active Delegations Use Case

Lists the delegations currently granting access to an address.
"""

from libs.result import Result, Return
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_address

from .dtos import ActiveDelegationsResponse, DelegationInfo


class ListActiveDelegationsUseCase:
    """
    Use case for listing a delegate's active delegations.

    Business Rules:
    - Active means is_active and expires_at > now, evaluated on every call
    - Revoked and expired delegations are counted in total_count only
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, address: str) -> Result[ActiveDelegationsResponse]:
        address = normalize_address(address)

        async with self.uow:
            delegations = await self.uow.delegations.get_by_delegate(address)

            now = self.clock.now()
            active = [d for d in delegations if d.is_granting(now)]

            return Return.ok(
                ActiveDelegationsResponse(
                    address=address,
                    delegations=[DelegationInfo.from_entity(d) for d in active],
                    active_count=len(active),
                    total_count=len(delegations),
                )
            )
