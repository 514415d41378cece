"""
Pass API Routes

Mint and describe subscription passes on the simulated ledger.
"""

from fastapi import APIRouter, Depends, Path, status
from pydantic import Field

from src.api.error import ClientError, ServerError
from src.app.services.ownership_oracle import PassLedger
from src.app.use_cases.passes import GetPassUseCase, MintPassResponse, MintPassUseCase, PassInfo
from src.depends import get_pass_ledger
from src.domain.base import ADDRESS_PATTERN, ApiModel

router = APIRouter(prefix="/passes")


class MintPassRequest(ApiModel):
    owner_address: str = Field(..., pattern=ADDRESS_PATTERN)


@router.post(
    "/mint",
    status_code=status.HTTP_201_CREATED,
    response_model=MintPassResponse,
    response_model_by_alias=True,
)
async def mint_pass(
    request: MintPassRequest,
    ledger: PassLedger = Depends(get_pass_ledger),
):
    use_case = MintPassUseCase(ledger)
    result = await use_case.execute(request.owner_address)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/{pass_id}", response_model=PassInfo, response_model_by_alias=True)
async def get_pass(
    pass_id: int = Path(..., gt=0),
    ledger: PassLedger = Depends(get_pass_ledger),
):
    use_case = GetPassUseCase(ledger)
    result = await use_case.execute(pass_id)

    if result.is_err():
        error = result.error
        if error.code == "PASS_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
