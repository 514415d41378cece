"""
Attestation API Routes

Verify zero-knowledge proofs into signed, ledger-anchored attestations and
list the attestations held by an address.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse
from nacl.signing import SigningKey
from pydantic import Field

from src.api.error import ClientError, ServerError
from src.app.services.clock import Clock
from src.app.services.ledger_anchor import LedgerAnchor
from src.app.services.proof_verifier import ProofVerifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.attestations import (
    AnchorAttestationCommand,
    AnchorAttestationResponse,
    AnchorAttestationUseCase,
    AttestationListResponse,
    ListAttestationsUseCase,
    VerifyAttestationCommand,
    VerifyAttestationResponse,
    VerifyAttestationUseCase,
)
from src.depends import (
    get_clock,
    get_ledger_anchor,
    get_proof_verifier,
    get_signing_key,
    get_unit_of_work,
)
from src.domain.base import ADDRESS_PATTERN, MAX_EPOCH_SECONDS, ApiModel
from src.domain.entities import AttestationType

router = APIRouter(prefix="/zk")


class VerifyAttestationRequest(ApiModel):
    proof: str = Field(..., min_length=1)
    public_signals: List[str]
    attestation_type: AttestationType
    user_address: str = Field(..., pattern=ADDRESS_PATTERN)


class AnchorAttestationRequest(ApiModel):
    user_address: str = Field(..., pattern=ADDRESS_PATTERN)
    proof_hash: str = Field(..., min_length=1, max_length=130)
    signature: str = Field(..., min_length=1, max_length=256)
    attestation_type: AttestationType
    expiry: int = Field(..., gt=0, le=MAX_EPOCH_SECONDS)


@router.post(
    "/verify",
    status_code=status.HTTP_200_OK,
    response_model=VerifyAttestationResponse,
    response_model_by_alias=True,
)
async def verify_attestation(
    request: VerifyAttestationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    proof_verifier: ProofVerifier = Depends(get_proof_verifier),
    ledger_anchor: LedgerAnchor = Depends(get_ledger_anchor),
    clock: Clock = Depends(get_clock),
    signing_key: SigningKey = Depends(get_signing_key),
):
    """
    Verify a proof and anchor the resulting attestation.

    Raises:
        - 400 Bad Request: PROOF_INVALID (body carries valid=false)
        - 500 Internal Server Error: PROOF_VERIFIER_UNAVAILABLE, ANCHOR_FAILED
    """
    command = VerifyAttestationCommand(
        proof=request.proof,
        public_signals=request.public_signals,
        attestation_type=request.attestation_type,
        user_address=request.user_address,
    )
    anchor_use_case = AnchorAttestationUseCase(uow, ledger_anchor, clock)
    use_case = VerifyAttestationUseCase(proof_verifier, anchor_use_case, clock, signing_key)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "PROOF_INVALID":
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"valid": False, "error": error.message, "code": error.code},
            )
        raise ServerError(error)

    return result.value


@router.post(
    "/anchor",
    status_code=status.HTTP_200_OK,
    response_model=AnchorAttestationResponse,
    response_model_by_alias=True,
)
async def anchor_attestation(
    request: AnchorAttestationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    ledger_anchor: LedgerAnchor = Depends(get_ledger_anchor),
    clock: Clock = Depends(get_clock),
):
    """
    Anchor an attestation the client prepared and signed itself.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (expiry not in the future)
        - 500 Internal Server Error: ANCHOR_FAILED
    """
    command = AnchorAttestationCommand(
        user_address=request.user_address,
        proof_hash=request.proof_hash,
        signature=request.signature,
        attestation_type=request.attestation_type,
        expiry=request.expiry,
    )
    use_case = AnchorAttestationUseCase(uow, ledger_anchor, clock)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get(
    "/attestations/{address}",
    response_model=AttestationListResponse,
    response_model_by_alias=True,
)
async def list_attestations(
    address: str = Path(..., pattern=ADDRESS_PATTERN),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    use_case = ListAttestationsUseCase(uow, clock)
    result = await use_case.execute(address)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
