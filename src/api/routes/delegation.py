"""
Delegation API Routes

Create, revoke and inspect pass delegations, and check whether an address
may access a pass.
"""

from fastapi import APIRouter, Depends, Path, status
from pydantic import Field

from src.api.error import ClientError, ServerError
from src.app.services.clock import Clock
from src.app.services.locks import KeyedLock
from src.app.services.ownership_oracle import OwnershipOracle
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AccessCheckResponse, CheckAccessUseCase
from src.app.use_cases.delegations import (
    ActiveDelegationsResponse,
    CreateDelegationCommand,
    CreateDelegationResponse,
    CreateDelegationUseCase,
    DelegationDetailResponse,
    GetDelegationUseCase,
    ListActiveDelegationsUseCase,
    RevokeDelegationResponse,
    RevokeDelegationUseCase,
)
from src.depends import (
    get_clock,
    get_locks,
    get_ownership_oracle,
    get_profile_allocator,
    get_unit_of_work,
)
from src.domain.base import ADDRESS_PATTERN, ApiModel

router = APIRouter(prefix="/delegation")


class CreateDelegationRequest(ApiModel):
    pass_id: int = Field(..., gt=0)
    delegate_address: str = Field(..., pattern=ADDRESS_PATTERN)
    duration_seconds: int
    creator_address: str = Field(..., pattern=ADDRESS_PATTERN)


class RevokeDelegationRequest(ApiModel):
    revoker_address: str = Field(..., pattern=ADDRESS_PATTERN)


@router.post(
    "/create",
    status_code=status.HTTP_200_OK,
    response_model=CreateDelegationResponse,
    response_model_by_alias=True,
)
async def create_delegation(
    request: CreateDelegationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    ownership_oracle: OwnershipOracle = Depends(get_ownership_oracle),
    clock: Clock = Depends(get_clock),
):
    """
    Create a delegation granting the delegate time-boxed access to a pass.

    Raises:
        - 400 Bad Request: DURATION_OUT_OF_RANGE, SELF_DELEGATION_FORBIDDEN
        - 403 Forbidden: NOT_OWNER
        - 500 Internal Server Error: OWNERSHIP_ORACLE_UNAVAILABLE
    """
    command = CreateDelegationCommand(
        pass_id=request.pass_id,
        creator_address=request.creator_address,
        delegate_address=request.delegate_address,
        duration_seconds=request.duration_seconds,
    )
    use_case = CreateDelegationUseCase(uow, ownership_oracle, clock)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("DURATION_OUT_OF_RANGE", "SELF_DELEGATION_FORBIDDEN"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.post(
    "/revoke/{delegation_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeDelegationResponse,
    response_model_by_alias=True,
)
async def revoke_delegation(
    request: RevokeDelegationRequest,
    delegation_id: int = Path(..., gt=0),
    uow: UnitOfWork = Depends(get_unit_of_work),
    profile_allocator: ProfileAllocator = Depends(get_profile_allocator),
    clock: Clock = Depends(get_clock),
    locks: KeyedLock = Depends(get_locks),
):
    """
    Revoke a delegation. Only its creator may do so, and only once.

    Raises:
        - 403 Forbidden: NOT_CREATOR
        - 404 Not Found: DELEGATION_NOT_FOUND
        - 409 Conflict: ALREADY_REVOKED
    """
    use_case = RevokeDelegationUseCase(uow, profile_allocator, clock, locks)
    result = await use_case.execute(delegation_id, request.revoker_address)

    if result.is_err():
        error = result.error
        if error.code == "DELEGATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code == "NOT_CREATOR":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        if error.code == "ALREADY_REVOKED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/active/{address}",
    response_model=ActiveDelegationsResponse,
    response_model_by_alias=True,
)
async def list_active_delegations(
    address: str = Path(..., pattern=ADDRESS_PATTERN),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """Delegations currently granting access to the address"""
    use_case = ListActiveDelegationsUseCase(uow, clock)
    result = await use_case.execute(address)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/verify/{address}/{pass_id}",
    response_model=AccessCheckResponse,
    response_model_by_alias=True,
)
async def verify_access(
    address: str = Path(..., pattern=ADDRESS_PATTERN),
    pass_id: int = Path(..., gt=0),
    uow: UnitOfWork = Depends(get_unit_of_work),
    ownership_oracle: OwnershipOracle = Depends(get_ownership_oracle),
    clock: Clock = Depends(get_clock),
):
    """
    Decide whether the address may use the pass, directly or by delegation.

    Raises:
        - 500 Internal Server Error: OWNERSHIP_ORACLE_UNAVAILABLE
    """
    use_case = CheckAccessUseCase(uow, ownership_oracle, clock)
    result = await use_case.execute(address, pass_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/{delegation_id}",
    response_model=DelegationDetailResponse,
    response_model_by_alias=True,
)
async def get_delegation(
    delegation_id: int = Path(..., gt=0),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    use_case = GetDelegationUseCase(uow, clock)
    result = await use_case.execute(delegation_id)

    if result.is_err():
        error = result.error
        if error.code == "DELEGATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
