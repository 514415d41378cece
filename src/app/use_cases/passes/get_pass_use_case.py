"""
Get Pass Use Case
"""

from libs.result import Error, Result, Return
from src.app.services.ownership_oracle import PassLedger
from src.app.services.resilience import CollaboratorError, call_with_timeout

from .dtos import PassInfo


class GetPassUseCase:
    def __init__(self, ledger: PassLedger):
        self.ledger = ledger

    async def execute(self, pass_id: int) -> Result[PassInfo]:
        try:
            info = await call_with_timeout("pass ledger", self.ledger.get_pass, pass_id)
        except CollaboratorError as e:
            return Return.err(Error("LEDGER_UNAVAILABLE", str(e)))

        if info is None:
            return Return.err(Error("PASS_NOT_FOUND", "Pass not found"))
        return Return.ok(PassInfo(**info))
