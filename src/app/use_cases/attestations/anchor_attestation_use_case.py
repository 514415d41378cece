"""
Anchor Attestation Use Case

Anchors an attestation record on the ledger and stores the receipt.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.ledger_anchor import AnchorRecord, LedgerAnchor
from src.app.services.resilience import CollaboratorError, retry_with_backoff
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import MAX_EPOCH_SECONDS, from_epoch, normalize_address, to_epoch
from src.domain.entities import Attestation, AttestationType, AuditEvent

from .dtos import AnchorAttestationCommand, AnchorAttestationResponse, AttestationInfo

logger = logging.getLogger(__name__)


class AnchorAttestationUseCase:
    """
    Use case for anchoring attestations.

    Business Rules:
    - Ledger calls are bounded by a timeout and retried with exponential
      backoff up to max_attempts, then fail with ANCHOR_FAILED
    - Anchoring is idempotent: the ledger derives the attestation ID from
      the record, and an already stored ID is returned unchanged
    - Client-prepared attestations must expire in the future and no later
      than MAX_EPOCH_SECONDS
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ledger_anchor: LedgerAnchor,
        clock: Clock,
        max_attempts: int = ApplicationConfig.ANCHOR_MAX_ATTEMPTS,
        backoff_seconds: float = ApplicationConfig.ANCHOR_BACKOFF_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.uow = uow
        self.ledger_anchor = ledger_anchor
        self.clock = clock
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self.sleep = sleep

    async def execute(self, command: AnchorAttestationCommand) -> Result[AnchorAttestationResponse]:
        """
        Anchor a client-prepared attestation.

        Args:
            command: AnchorAttestationCommand with commitment, signature and expiry

        Returns:
            Result with AnchorAttestationResponse DTO, or Error
        """
        now = self.clock.now()
        if command.expiry <= to_epoch(now):
            return Return.err(Error("VALIDATION_ERROR", "Expiry must be in the future"))
        if command.expiry > MAX_EPOCH_SECONDS:
            return Return.err(Error("VALIDATION_ERROR", "Expiry is beyond the supported range"))

        record = AnchorRecord(
            user_address=normalize_address(command.user_address),
            attestation_type=command.attestation_type.value,
            proof_commitment=command.proof_hash,
            signature=command.signature,
            issued_at=now,
            expires_at=from_epoch(command.expiry),
        )

        result = await self.anchor_record(record)
        if result.is_err():
            return result

        attestation = result.value
        return Return.ok(
            AnchorAttestationResponse(
                attestation_id=attestation.attestation_id,
                transaction_id=attestation.transaction_id,
            )
        )

    async def anchor_record(self, record: AnchorRecord) -> Result[AttestationInfo]:
        """
        Anchor a record and persist the resulting attestation.

        Returns:
            Result with AttestationInfo, or ANCHOR_FAILED
        """
        try:
            receipt = await retry_with_backoff(
                "ledger anchor",
                self.ledger_anchor.anchor,
                record,
                attempts=self.max_attempts,
                base_delay=self.backoff_seconds,
                sleep=self.sleep,
            )
        except CollaboratorError as e:
            return Return.err(
                Error(
                    "ANCHOR_FAILED",
                    "Failed to anchor attestation on the ledger",
                    details=str(e),
                )
            )

        async with self.uow:
            now = self.clock.now()
            existing = await self.uow.attestations.get_by_id(receipt.attestation_id)
            if existing is not None:
                return Return.ok(AttestationInfo.from_entity(existing, now))

            attestation = Attestation(
                id=receipt.attestation_id,
                user_address=record.user_address,
                attestation_type=AttestationType(record.attestation_type),
                proof_commitment=record.proof_commitment,
                signature=record.signature,
                transaction_id=receipt.transaction_id,
                issued_at=record.issued_at,
                expires_at=record.expires_at,
            )
            attestation = await self.uow.attestations.create(attestation)

            audit = AuditEvent(
                actor_address=record.user_address,
                action="attestation_anchored",
                event_metadata={
                    "attestation_id": receipt.attestation_id,
                    "attestation_type": record.attestation_type,
                    "transaction_id": receipt.transaction_id,
                },
                created_at=now,
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

        logger.info(
            f"Attestation {receipt.attestation_id[:10]}... anchored for "
            f"{record.user_address} (tx {receipt.transaction_id[:10]}...)"
        )
        return Return.ok(AttestationInfo.from_entity(attestation, now))
