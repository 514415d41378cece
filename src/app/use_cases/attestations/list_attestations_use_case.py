"""
List Attestations Use Case
"""

from libs.result import Result, Return
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_address

from .dtos import AttestationInfo, AttestationListResponse


class ListAttestationsUseCase:
    """All attestations of an address, expired ones included; callers filter"""

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, user_address: str) -> Result[AttestationListResponse]:
        user_address = normalize_address(user_address)

        async with self.uow:
            attestations = await self.uow.attestations.get_by_user(user_address)

            now = self.clock.now()
            return Return.ok(
                AttestationListResponse(
                    user_address=user_address,
                    attestations=[AttestationInfo.from_entity(a, now) for a in attestations],
                    count=len(attestations),
                )
            )
