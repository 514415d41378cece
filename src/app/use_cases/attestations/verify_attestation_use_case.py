"""
Verify Attestation Use Case

Verifies an identity proof, commits to it and anchors the attestation.
"""

import logging
from datetime import timedelta

from nacl.signing import SigningKey

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.ledger_anchor import AnchorRecord
from src.app.services.proof_verifier import ProofVerifier
from src.app.services.resilience import CollaboratorError, call_with_timeout
from src.domain.base import normalize_address
from src.domain.hashing import proof_commitment, sign_commitment

from .anchor_attestation_use_case import AnchorAttestationUseCase
from .dtos import VerifyAttestationCommand, VerifyAttestationResponse

logger = logging.getLogger(__name__)


class VerifyAttestationUseCase:
    """
    Use case for verifying and anchoring an identity proof.

    Business Rules:
    - Empty public signals or a rejected proof fail with PROOF_INVALID
    - The proof is never stored; only its SHA-256 commitment over the
      canonical JSON of (proof, publicSignals)
    - The issuer signs the commitment
    - Attestations expire ttl_seconds after issuance (one year by default)
    """

    def __init__(
        self,
        proof_verifier: ProofVerifier,
        anchor_use_case: AnchorAttestationUseCase,
        clock: Clock,
        signing_key: SigningKey,
        ttl_seconds: int = ApplicationConfig.ATTESTATION_TTL_SECONDS,
    ):
        self.proof_verifier = proof_verifier
        self.anchor_use_case = anchor_use_case
        self.clock = clock
        self.signing_key = signing_key
        self.ttl_seconds = ttl_seconds

    async def execute(self, command: VerifyAttestationCommand) -> Result[VerifyAttestationResponse]:
        """
        Execute verify attestation use case.

        Args:
            command: VerifyAttestationCommand with proof, signals, type and address

        Returns:
            Result with VerifyAttestationResponse DTO, or Error
        """
        user_address = normalize_address(command.user_address)

        if not command.public_signals:
            return Return.err(Error("PROOF_INVALID", "Public signals are required"))

        try:
            valid = await call_with_timeout(
                "proof verifier",
                self.proof_verifier.verify,
                command.proof,
                command.public_signals,
                command.attestation_type,
            )
        except CollaboratorError as e:
            return Return.err(Error("PROOF_VERIFIER_UNAVAILABLE", str(e)))

        if not valid:
            logger.warning(
                f"Proof verification failed for {user_address} ({command.attestation_type.value})"
            )
            return Return.err(Error("PROOF_INVALID", "Proof verification failed"))

        commitment = proof_commitment(command.proof, command.public_signals)
        issued_at = self.clock.now()
        record = AnchorRecord(
            user_address=user_address,
            attestation_type=command.attestation_type.value,
            proof_commitment=commitment,
            signature=sign_commitment(self.signing_key, commitment),
            issued_at=issued_at,
            expires_at=issued_at + timedelta(seconds=self.ttl_seconds),
        )

        result = await self.anchor_use_case.anchor_record(record)
        if result.is_err():
            return result

        return Return.ok(VerifyAttestationResponse(attestation=result.value))
