import asyncio
from typing import List

from src.app.services.proof_verifier import ProofVerifier
from src.domain.entities import AttestationType


class DemoProofVerifier(ProofVerifier):
    """
    Signal-matching verifier for the demo deployment.

    Accepts a proof when one of the public signals names the claimed
    attestation ("human" for human, "18" for age18). Swap in a real
    verifier behind the same interface for production.
    """

    def __init__(self, latency: float = 0.0):
        self.latency = latency

    async def verify(
        self, proof: str, public_signals: List[str], attestation_type: AttestationType
    ) -> bool:
        if self.latency:
            await asyncio.sleep(self.latency)

        if not proof or not public_signals:
            return False

        if attestation_type == AttestationType.human:
            return any("human" in signal for signal in public_signals)
        if attestation_type == AttestationType.age18:
            return any("18" in signal for signal in public_signals)
        return False
