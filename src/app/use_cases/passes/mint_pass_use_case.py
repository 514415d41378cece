"""
Mint Pass Use Case

Mints a subscription pass on the ledger so it can be delegated.
"""

from libs.result import Error, Result, Return
from src.app.services.ownership_oracle import PassLedger
from src.app.services.resilience import CollaboratorError, call_with_timeout
from src.domain.base import normalize_address

from .dtos import MintPassResponse, PassInfo


class MintPassUseCase:
    def __init__(self, ledger: PassLedger):
        self.ledger = ledger

    async def execute(self, owner_address: str) -> Result[MintPassResponse]:
        owner = normalize_address(owner_address)
        try:
            pass_id = await call_with_timeout("pass ledger", self.ledger.mint, owner)
        except CollaboratorError as e:
            return Return.err(Error("LEDGER_UNAVAILABLE", str(e)))

        return Return.ok(
            MintPassResponse(pass_info=PassInfo(id=pass_id, name=f"FlowPass #{pass_id}", owner=owner))
        )
