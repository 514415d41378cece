"""
Simulated Flow Ledger

In-process stand-in for the pass NFT contract and the attestation registry
contract. Every call optionally waits `latency` seconds to mimic block
sealing.
"""

import asyncio
import logging
import secrets
from typing import Dict, Optional

from src.app.services.ledger_anchor import AnchorReceipt, AnchorRecord, LedgerAnchor
from src.app.services.ownership_oracle import PassLedger
from src.domain.hashing import canonical_json_hash

logger = logging.getLogger(__name__)


class SimulatedFlowLedger(PassLedger, LedgerAnchor):
    def __init__(self, latency: float = 0.0):
        self.latency = latency
        self._owners: Dict[int, str] = {}
        self._next_pass_id = 1
        self._anchored: Dict[str, AnchorReceipt] = {}

    async def _seal(self):
        if self.latency:
            await asyncio.sleep(self.latency)

    async def owns_asset(self, address: str, pass_id: int) -> bool:
        await self._seal()
        return self._owners.get(pass_id) == address

    async def mint(self, owner_address: str) -> int:
        await self._seal()
        pass_id = self._next_pass_id
        self._next_pass_id += 1
        self._owners[pass_id] = owner_address
        logger.info(f"Minted pass {pass_id} to {owner_address}")
        return pass_id

    async def get_pass(self, pass_id: int) -> Optional[dict]:
        await self._seal()
        owner = self._owners.get(pass_id)
        if owner is None:
            return None
        return {"id": pass_id, "name": f"FlowPass #{pass_id}", "owner": owner}

    async def anchor(self, record: AnchorRecord) -> AnchorReceipt:
        await self._seal()
        attestation_id = "0x" + canonical_json_hash(record.canonical())
        receipt = self._anchored.get(attestation_id)
        if receipt is None:
            receipt = AnchorReceipt(
                attestation_id=attestation_id,
                transaction_id="0x" + secrets.token_hex(32),
            )
            self._anchored[attestation_id] = receipt
        return receipt
