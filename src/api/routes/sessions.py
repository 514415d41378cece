"""
Access Session API Routes

Issue, redeem, inspect and revoke time-bounded access sessions.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import Field

from src.api.error import ClientError, ServerError
from src.app.services.clock import Clock
from src.app.services.locks import KeyedLock
from src.app.services.ownership_oracle import OwnershipOracle
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    GetSessionStatusUseCase,
    IssueDirectSessionCommand,
    IssueSessionCommand,
    IssueSessionUseCase,
    ProfileAccessGrant,
    RedeemSessionUseCase,
    RevokeSessionResponse,
    RevokeSessionUseCase,
    SessionGrant,
    SessionStatusResponse,
)
from src.depends import (
    get_clock,
    get_locks,
    get_ownership_oracle,
    get_profile_allocator,
    get_unit_of_work,
)
from src.domain.base import ADDRESS_PATTERN, ApiModel

router = APIRouter(prefix="/sessions")

ISSUE_ERROR_STATUS = {
    "DURATION_TOO_SHORT": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_403_FORBIDDEN,
    "NOT_OWNER": status.HTTP_403_FORBIDDEN,
    "DELEGATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DELEGATION_EXPIRED": status.HTTP_409_CONFLICT,
    "RESOURCE_BUSY": status.HTTP_409_CONFLICT,
}

REDEEM_ERROR_STATUS = {
    "INVALID_ACCESS_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "UNAUTHORIZED": status.HTTP_403_FORBIDDEN,
    "SESSION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SESSION_EXPIRED": status.HTTP_409_CONFLICT,
}


class IssueSessionRequest(ApiModel):
    delegation_id: int = Field(..., gt=0)
    requester_address: str = Field(..., pattern=ADDRESS_PATTERN)
    duration_seconds: int = Field(..., gt=0)


class IssueDirectSessionRequest(ApiModel):
    pass_id: int = Field(..., gt=0)
    owner_address: str = Field(..., pattern=ADDRESS_PATTERN)
    duration_seconds: int = Field(..., gt=0)


class RedeemSessionRequest(ApiModel):
    presenting_address: str = Field(..., pattern=ADDRESS_PATTERN)


class RedeemTokenRequest(ApiModel):
    token: str = Field(..., min_length=1)
    presenting_address: str = Field(..., pattern=ADDRESS_PATTERN)


def raise_for_error(error, status_map: dict):
    status_code = status_map.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SessionGrant,
    response_model_by_alias=True,
)
async def issue_session(
    request: IssueSessionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    profile_allocator: ProfileAllocator = Depends(get_profile_allocator),
    ownership_oracle: OwnershipOracle = Depends(get_ownership_oracle),
    clock: Clock = Depends(get_clock),
    locks: KeyedLock = Depends(get_locks),
):
    """
    Open a session for the delegate of an active delegation.

    The session never outlives the delegation and is bound to one profile
    slot of the pass.

    Raises:
        - 400 Bad Request: DURATION_TOO_SHORT
        - 403 Forbidden: UNAUTHORIZED
        - 404 Not Found: DELEGATION_NOT_FOUND
        - 409 Conflict: DELEGATION_EXPIRED, RESOURCE_BUSY
    """
    command = IssueSessionCommand(
        delegation_id=request.delegation_id,
        requester_address=request.requester_address,
        duration_seconds=request.duration_seconds,
    )
    use_case = IssueSessionUseCase(uow, profile_allocator, ownership_oracle, clock, locks)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error, ISSUE_ERROR_STATUS)

    return result.value


@router.post(
    "/direct",
    status_code=status.HTTP_201_CREATED,
    response_model=SessionGrant,
    response_model_by_alias=True,
)
async def issue_direct_session(
    request: IssueDirectSessionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    profile_allocator: ProfileAllocator = Depends(get_profile_allocator),
    ownership_oracle: OwnershipOracle = Depends(get_ownership_oracle),
    clock: Clock = Depends(get_clock),
    locks: KeyedLock = Depends(get_locks),
):
    """Open a session for the pass owner"""
    command = IssueDirectSessionCommand(
        pass_id=request.pass_id,
        owner_address=request.owner_address,
        duration_seconds=request.duration_seconds,
    )
    use_case = IssueSessionUseCase(uow, profile_allocator, ownership_oracle, clock, locks)
    result = await use_case.execute_for_owner(command)

    if result.is_err():
        raise_for_error(result.error, ISSUE_ERROR_STATUS)

    return result.value


@router.post(
    "/redeem-token",
    response_model=ProfileAccessGrant,
    response_model_by_alias=True,
)
async def redeem_session_token(
    request: RedeemTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    profile_allocator: ProfileAllocator = Depends(get_profile_allocator),
    clock: Clock = Depends(get_clock),
    locks: KeyedLock = Depends(get_locks),
):
    """Redeem a session through the token carried in its access URL"""
    use_case = RedeemSessionUseCase(uow, profile_allocator, clock, locks)
    result = await use_case.execute_with_token(request.token, request.presenting_address)

    if result.is_err():
        raise_for_error(result.error, REDEEM_ERROR_STATUS)

    return result.value


@router.post(
    "/{session_id}/redeem",
    response_model=ProfileAccessGrant,
    response_model_by_alias=True,
)
async def redeem_session(
    request: RedeemSessionRequest,
    session_id: str = Path(..., min_length=1),
    uow: UnitOfWork = Depends(get_unit_of_work),
    profile_allocator: ProfileAllocator = Depends(get_profile_allocator),
    clock: Clock = Depends(get_clock),
    locks: KeyedLock = Depends(get_locks),
):
    """
    Redeem a live session for its profile binding.

    Redeeming is repeatable while the session lives. An expired session is
    removed on the first late redeem and reported as not found afterwards.

    Raises:
        - 403 Forbidden: UNAUTHORIZED
        - 404 Not Found: SESSION_NOT_FOUND
        - 409 Conflict: SESSION_EXPIRED
    """
    use_case = RedeemSessionUseCase(uow, profile_allocator, clock, locks)
    result = await use_case.execute(session_id, request.presenting_address)

    if result.is_err():
        raise_for_error(result.error, REDEEM_ERROR_STATUS)

    return result.value


@router.get(
    "/{session_id}/status",
    response_model=SessionStatusResponse,
    response_model_by_alias=True,
)
async def get_session_status(
    session_id: str = Path(..., min_length=1),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    use_case = GetSessionStatusUseCase(uow, clock)
    result = await use_case.execute(session_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete(
    "/{session_id}",
    response_model=RevokeSessionResponse,
    response_model_by_alias=True,
)
async def revoke_session(
    session_id: str = Path(..., min_length=1),
    requester_address: str = Query(..., alias="requesterAddress", pattern=ADDRESS_PATTERN),
    uow: UnitOfWork = Depends(get_unit_of_work),
    profile_allocator: ProfileAllocator = Depends(get_profile_allocator),
    clock: Clock = Depends(get_clock),
    locks: KeyedLock = Depends(get_locks),
):
    """
    Revoke a session early and free its profile slot.

    Raises:
        - 403 Forbidden: UNAUTHORIZED
    """
    use_case = RevokeSessionUseCase(uow, profile_allocator, clock, locks)
    result = await use_case.execute(session_id, requester_address)

    if result.is_err():
        raise_for_error(result.error, {"UNAUTHORIZED": status.HTTP_403_FORBIDDEN})

    return result.value
